"""Pointer input routing for DragDrop.

GraphController sits between the input source and GraphModel: it runs the
tap/drag detector and calls the model operation the selected tool asks for.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Property, QObject, Signal, Slot

from .constants import GraphConfig
from .gestures import PointerEvent, TapDragDetector
from .model import GraphModel
from .types import Point, ToolType

logger = logging.getLogger(__name__)


class GraphController(QObject):
    """Turns pointer events into GraphModel calls.

    The tool is read when the pointer goes down and stays fixed for the
    rest of that session. Switching tools mid-session cancels it, which
    finishes any drag or line that was in progress.
    """

    pointerChanged = Signal()
    gestureActiveChanged = Signal()

    def __init__(self, model: GraphModel, config: Optional[GraphConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._model = model
        self._config = config or model.config
        self._detector = TapDragDetector(
            self._config.touch_slop,
            on_tap=self._on_tap,
            on_drag_start=self._on_drag_start,
            on_drag=self._on_drag,
            on_drag_end=self._on_drag_end,
            on_drag_cancel=self._on_drag_end,
        )
        self._session_tool: Optional[ToolType] = None
        self._pointer = Point.ZERO
        self._model.selectedToolChanged.connect(self._on_tool_changed)

    @property
    def model(self) -> GraphModel:
        return self._model

    @property
    def detector(self) -> TapDragDetector:
        return self._detector

    @property
    def pointer(self) -> Point:
        return self._pointer

    # --- Properties exposed to QML -------------------------------------------
    @Property(float, notify=pointerChanged)
    def pointerX(self) -> float:
        return self._pointer.x

    @Property(float, notify=pointerChanged)
    def pointerY(self) -> float:
        return self._pointer.y

    @Property(bool, notify=gestureActiveChanged)
    def gestureActive(self) -> bool:
        return self._detector.active

    # --- Input ---------------------------------------------------------------
    @Slot(float, float)
    def pointerDown(self, x: float, y: float) -> None:
        if not self._detector.active:
            self._session_tool = self._model.selected_tool()
            self._set_pointer(Point(x, y))
        self._feed(PointerEvent.down(x, y))

    @Slot(float, float)
    def pointerMove(self, x: float, y: float) -> None:
        if self._detector.active:
            self._set_pointer(Point(x, y))
        self._feed(PointerEvent.move(x, y))

    @Slot()
    def pointerUp(self) -> None:
        self._feed(PointerEvent.up())

    @Slot()
    def pointerCancel(self) -> None:
        self._feed(PointerEvent.cancel())

    def _feed(self, event: PointerEvent) -> None:
        was_active = self._detector.active
        self._detector.feed(event)
        if not self._detector.active:
            self._session_tool = None
        if was_active != self._detector.active:
            self.gestureActiveChanged.emit()

    def _set_pointer(self, point: Point) -> None:
        if point != self._pointer:
            self._pointer = point
            self.pointerChanged.emit()

    def _on_tool_changed(self) -> None:
        if self._detector.active:
            logger.debug("Tool changed mid-gesture; cancelling session")
            self.pointerCancel()

    # --- Routing -------------------------------------------------------------
    @property
    def _box_size(self) -> float:
        return self._config.shape_box_size

    def _on_tap(self, point: Point) -> None:
        tool = self._session_tool
        if tool is None:
            return
        if tool.places_shape:
            self._model.placeShape(tool.shape_type, point.x, point.y, self._box_size)
        elif tool is ToolType.SELECT:
            self._model.highlightShape(point.x, point.y, self._box_size)

    def _on_drag_start(self, point: Point) -> None:
        tool = self._session_tool
        if tool is ToolType.SELECT:
            self._model.startDrag(point.x, point.y, self._box_size)
        elif tool is ToolType.DRAW_LINE:
            self._model.startLine(point.x, point.y, self._box_size)

    def _on_drag(self, point: Point) -> None:
        if self._session_tool is ToolType.SELECT:
            self._model.drag(point.x, point.y)

    def _on_drag_end(self, point: Optional[Point]) -> None:
        tool = self._session_tool
        if tool is ToolType.SELECT:
            self._model.endDrag()
        elif tool is ToolType.DRAW_LINE:
            end = point or self._pointer
            self._model.endLine(end.x, end.y, self._box_size)
