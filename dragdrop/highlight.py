"""Highlight animation mixin for GraphModel.

Tapping a shape with the select tool blinks every shape of that type.
The blink runs on the Qt event loop so it never blocks other edits.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .constants import GraphConfig
from .geometry import hit_test
from .types import Point, Shape, ShapeType

if TYPE_CHECKING:
    from .model import GraphModel

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


def qt_scheduler(context: QObject) -> Scheduler:
    """Return a scheduler whose timers are dropped when ``context`` is destroyed."""

    def schedule(delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(delay_ms, context, callback)

    return schedule


class HighlightSequence:
    """One blink run: on, wait, off, wait, ... ending with off and no wait."""

    def __init__(
        self,
        shape_type: ShapeType,
        pulses: int,
        interval_ms: int,
        scheduler: Scheduler,
        apply: Callable[[Optional[ShapeType]], None],
        on_done: Callable[["HighlightSequence"], None],
    ):
        self.shape_type = shape_type
        self._scheduler = scheduler
        self._apply = apply
        self._on_done = on_done
        self._steps: List[Tuple[Optional[ShapeType], Optional[int]]] = []
        for pulse in range(pulses):
            self._steps.append((shape_type, interval_ms))
            last = pulse == pulses - 1
            self._steps.append((None, None if last else interval_ms))
        self._position = 0
        self._lit = False
        self.finished = False
        self.cancelled = False

    @property
    def steps(self) -> List[Tuple[Optional[ShapeType], Optional[int]]]:
        """The (value, wait after) pairs this sequence runs through."""
        return list(self._steps)

    def start(self) -> None:
        self._run_step()

    def cancel(self) -> None:
        """Stop before the next step; switches the highlight off if it is on."""
        if self.finished or self.cancelled:
            return
        self.cancelled = True
        if self._lit:
            self._apply(None)
            self._lit = False
        logger.debug("Highlight of %s cancelled at step %d", self.shape_type.value, self._position)
        self._on_done(self)

    def _run_step(self) -> None:
        if self.cancelled:
            return
        value, wait_ms = self._steps[self._position]
        self._position += 1
        self._apply(value)
        self._lit = value is not None
        if wait_ms is None:
            self.finished = True
            self._on_done(self)
            return
        self._scheduler(wait_ms, self._run_step)


class HighlightMixin:
    """Mixin providing the highlight blink.

    Note: the highlightShapeType property is defined in GraphModel since
    it needs the notify signal declared there.
    """

    # Signals (will be defined in GraphModel)
    highlightShapeTypeChanged: Signal
    highlightFinished: Signal
    activeHighlightsChanged: Signal

    # Attributes expected from GraphModel
    _shapes: List[Shape]
    _config: GraphConfig
    _highlight_type: Optional[ShapeType]
    _highlight_scheduler: Scheduler
    _active_highlights: List[HighlightSequence]

    def _init_highlight(self, scheduler: Optional[Scheduler] = None) -> None:
        """Initialize highlight state. Call from GraphModel.__init__."""
        self._highlight_type = None
        self._highlight_scheduler = scheduler or qt_scheduler(self)
        self._active_highlights = []

    def _get_highlight_type(self) -> Optional[ShapeType]:
        return self._highlight_type

    def _set_highlight_type(self, value: Optional[ShapeType]) -> None:
        if self._highlight_type != value:
            self._highlight_type = value
            self.highlightShapeTypeChanged.emit()

    @Slot(float, float, float)
    def highlightShape(self, x: float, y: float, box_size: float) -> Optional[HighlightSequence]:
        """Blink the type of the shape under the point, if there is one.

        Overlapping calls each run their own sequence and write the shared
        highlight independently, so the latest write wins.
        """
        shape = hit_test(self._shapes, Point(x, y), box_size)
        if shape is None:
            return None
        sequence = HighlightSequence(
            shape.shape_type,
            self._config.highlight_pulses,
            self._config.highlight_interval_ms,
            self._highlight_scheduler,
            self._set_highlight_type,
            self._on_highlight_done,
        )
        self._active_highlights.append(sequence)
        self.activeHighlightsChanged.emit()
        logger.debug("Highlighting %s (shape %s)", shape.shape_type.value, shape.id)
        sequence.start()
        return sequence

    def _get_active_highlights(self) -> int:
        return len(self._active_highlights)

    def _on_highlight_done(self, sequence: HighlightSequence) -> None:
        if sequence in self._active_highlights:
            self._active_highlights.remove(sequence)
            self.activeHighlightsChanged.emit()
        if sequence.finished:
            self.highlightFinished.emit(sequence.shape_type.value)
