"""Tests for the highlight blink sequence."""

import pytest
import shiboken6
from PySide6.QtCore import QEventLoop, QObject, QTimer

from dragdrop import GraphConfig, GraphModel, HighlightSequence, Point, Shape, ShapeType

BOX = 48.0


@pytest.fixture
def model(app, scheduler):
    model = GraphModel(scheduler=scheduler)
    model.addShape(Shape("sq", ShapeType.SQUARE, Point(0.0, 0.0)))
    model.addShape(Shape("ci", ShapeType.CIRCLE, Point(100.0, 0.0)))
    return model


def record(model):
    seen = []
    model.highlightShapeTypeChanged.connect(lambda: seen.append(model.highlighted_type()))
    return seen


class TestHighlightSequence:
    def test_steps(self):
        sequence = HighlightSequence(ShapeType.CIRCLE, 3, 200, lambda d, c: None, lambda v: None, lambda s: None)
        assert sequence.steps == [
            (ShapeType.CIRCLE, 200),
            (None, 200),
            (ShapeType.CIRCLE, 200),
            (None, 200),
            (ShapeType.CIRCLE, 200),
            (None, None),
        ]

    def test_single_pulse_has_no_gap(self):
        sequence = HighlightSequence(ShapeType.SQUARE, 1, 50, lambda d, c: None, lambda v: None, lambda s: None)
        assert sequence.steps == [(ShapeType.SQUARE, 50), (None, None)]


class TestHighlightShape:
    def test_miss_is_noop(self, model, scheduler):
        assert model.highlightShape(300.0, 300.0, BOX) is None
        assert scheduler.pending == []
        assert model.activeHighlights == 0

    def test_first_step_runs_immediately(self, model, scheduler):
        sequence = model.highlightShape(10.0, 10.0, BOX)
        assert model.highlighted_type() is ShapeType.SQUARE
        assert model.highlightShapeType == "square"
        assert len(scheduler.pending) == 1
        assert not sequence.finished

    def test_full_sequence(self, model, scheduler):
        seen = record(model)
        finished = []
        model.highlightFinished.connect(finished.append)
        sequence = model.highlightShape(110.0, 10.0, BOX)
        assert model.activeHighlights == 1
        scheduler.run_all()
        assert seen == [ShapeType.CIRCLE, None] * 3
        assert scheduler.delays == [200] * 5
        assert sequence.finished
        assert model.highlighted_type() is None
        assert model.activeHighlights == 0
        assert finished == ["circle"]

    def test_does_not_block_other_edits(self, model, scheduler):
        model.highlightShape(10.0, 10.0, BOX)
        model.startDrag(10.0, 10.0, BOX)
        model.drag(30.0, 30.0)
        model.endDrag()
        assert model.highlighted_type() is ShapeType.SQUARE
        assert model.getShape("sq").offset == Point(20.0, 20.0)
        scheduler.run_all()
        assert model.highlighted_type() is None

    def test_overlapping_sequences_last_write_wins(self, model, scheduler):
        first = model.highlightShape(10.0, 10.0, BOX)
        second = model.highlightShape(110.0, 10.0, BOX)
        assert model.highlighted_type() is ShapeType.CIRCLE
        assert model.activeHighlights == 2
        scheduler.run_next()  # first switches off
        assert model.highlighted_type() is None
        scheduler.run_next()  # second switches off
        scheduler.run_next()  # first back on
        assert model.highlighted_type() is ShapeType.SQUARE
        scheduler.run_all()
        assert first.finished and second.finished
        assert model.highlighted_type() is None
        assert model.activeHighlights == 0

    def test_cancel_switches_off(self, model, scheduler):
        finished = []
        model.highlightFinished.connect(finished.append)
        sequence = model.highlightShape(10.0, 10.0, BOX)
        sequence.cancel()
        assert sequence.cancelled
        assert model.highlighted_type() is None
        assert model.activeHighlights == 0
        scheduler.run_all()
        assert model.highlighted_type() is None
        assert finished == []

    def test_cancel_after_finish_is_noop(self, model, scheduler):
        sequence = model.highlightShape(10.0, 10.0, BOX)
        scheduler.run_all()
        sequence.cancel()
        assert not sequence.cancelled

    def test_uses_configured_timing(self, app, scheduler):
        model = GraphModel(GraphConfig(highlight_pulses=2, highlight_interval_ms=50), scheduler=scheduler)
        model.addShape(Shape("tri", ShapeType.TRIANGLE, Point(0.0, 0.0)))
        seen = record(model)
        model.highlightShape(0.0, 0.0, BOX)
        scheduler.run_all()
        assert seen == [ShapeType.TRIANGLE, None, ShapeType.TRIANGLE, None]
        assert scheduler.delays == [50, 50, 50]


class TestQtTimerScheduling:
    def test_runs_on_event_loop(self, app):
        model = GraphModel(GraphConfig(highlight_interval_ms=10))
        model.addShape(Shape("sq", ShapeType.SQUARE, Point(0.0, 0.0)))
        seen = record(model)
        loop = QEventLoop()
        model.highlightFinished.connect(lambda _: loop.quit())
        guard = QTimer()
        guard.setSingleShot(True)
        guard.timeout.connect(loop.quit)
        guard.start(5000)

        model.highlightShape(5.0, 5.0, BOX)
        assert seen == [ShapeType.SQUARE]
        loop.exec()
        guard.stop()

        assert seen == [ShapeType.SQUARE, None] * 3
        assert model.activeHighlights == 0

    def test_pending_steps_dropped_with_model(self, app, capfd):
        owner = QObject()
        model = GraphModel(GraphConfig(highlight_interval_ms=10), parent=owner)
        model.addShape(Shape("sq", ShapeType.SQUARE, Point(0.0, 0.0)))
        sequence = model.highlightShape(5.0, 5.0, BOX)
        shiboken6.delete(owner)

        loop = QEventLoop()
        QTimer.singleShot(50, loop, loop.quit)
        loop.exec()

        assert not sequence.finished
        assert "Error" not in capfd.readouterr().err
