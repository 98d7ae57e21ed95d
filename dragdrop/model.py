"""Core GraphModel class for DragDrop.

This module provides the Qt object that owns the diagram state: shapes,
lines, the selected tool and the transient drag, line-draw and highlight
state. Everything else reads snapshots or calls its slots.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from PySide6.QtCore import Property, QObject, Signal, Slot

from .constants import DEFAULT_CONFIG, DEFAULT_TOOL, GraphConfig
from .errors import ReferentialIntegrityError
from .geometry import find_shape, hit_test, placement_offset, shape_center
from .highlight import HighlightMixin, Scheduler
from .types import GraphSnapshot, Line, Point, Shape, ShapeType, ToolType

logger = logging.getLogger(__name__)


class GraphModel(HighlightMixin, QObject):
    """Qt model exposing the diagram to QML and Python observers."""

    selectedToolChanged = Signal()
    highlightShapeTypeChanged = Signal()
    shapesChanged = Signal()
    linesChanged = Signal()
    interactionChanged = Signal()
    activeHighlightsChanged = Signal()
    highlightFinished = Signal(str)

    def __init__(
        self,
        config: GraphConfig = DEFAULT_CONFIG,
        scheduler: Optional[Scheduler] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._config = config
        self._selected_tool: ToolType = DEFAULT_TOOL
        self._shapes: List[Shape] = []
        self._lines: List[Line] = []

        self._drag_shape: Optional[Shape] = None
        self._drag_origin: Point = Point.ZERO
        self._drag_start_offset: Point = Point.ZERO
        self._line_in_progress: Optional[Line] = None

        # Initialize mixins
        self._init_highlight(scheduler)

    @property
    def config(self) -> GraphConfig:
        return self._config

    # --- Python read model ---------------------------------------------------
    def selected_tool(self) -> ToolType:
        return self._selected_tool

    def highlighted_type(self) -> Optional[ShapeType]:
        return self._get_highlight_type()

    def shape_list(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes)

    def line_list(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    def drag_shape(self) -> Optional[Shape]:
        return self._drag_shape

    def line_in_progress(self) -> Optional[Line]:
        return self._line_in_progress

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            selected_tool=self._selected_tool,
            highlighted_type=self._get_highlight_type(),
            shapes=tuple(self._shapes),
            lines=tuple(self._lines),
        )

    # --- Properties exposed to QML -------------------------------------------
    @Property(str, notify=selectedToolChanged)
    def selectedTool(self) -> str:
        return self._selected_tool.value

    @Property(str, notify=highlightShapeTypeChanged)
    def highlightShapeType(self) -> str:
        highlighted = self._get_highlight_type()
        return highlighted.value if highlighted else ""

    @Property(list, notify=shapesChanged)
    def shapes(self) -> List[Dict[str, Any]]:
        return [
            {"id": shape.id, "shapeType": shape.shape_type.value, "x": shape.offset.x, "y": shape.offset.y}
            for shape in self._shapes
        ]

    @Property(list, notify=linesChanged)
    def lines(self) -> List[Dict[str, str]]:
        return [{"shape1Id": line.shape1_id, "shape2Id": line.shape2_id or ""} for line in self._lines]

    @Property(int, notify=shapesChanged)
    def count(self) -> int:
        return len(self._shapes)

    @Property(bool, notify=interactionChanged)
    def isDragging(self) -> bool:
        return self._drag_shape is not None

    @Property(bool, notify=interactionChanged)
    def isDrawingLine(self) -> bool:
        return self._line_in_progress is not None

    @Property(int, notify=activeHighlightsChanged)
    def activeHighlights(self) -> int:
        return self._get_active_highlights()

    # --- Tools ---------------------------------------------------------------
    @Slot(str)
    def selectTool(self, tool: Union[ToolType, str]) -> None:
        tool = ToolType(tool)
        if tool is self._selected_tool:
            return
        self._selected_tool = tool
        logger.debug("Selected tool %s", tool.value)
        self.selectedToolChanged.emit()

    # --- Shape management ----------------------------------------------------
    def addShape(self, shape: Shape) -> None:
        self._shapes.append(shape)
        logger.debug("Added %s %s at (%s, %s)", shape.shape_type.value, shape.id, shape.offset.x, shape.offset.y)
        self.shapesChanged.emit()

    @Slot(str, float, float, float, result=str)
    def placeShape(self, shape_type: Union[ShapeType, str], x: float, y: float, box_size: float) -> str:
        """Create a shape centered on the point and return its id."""
        shape = Shape.create(ShapeType(shape_type), placement_offset(Point(x, y), box_size))
        self.addShape(shape)
        return shape.id

    @Slot(float, float, float)
    def startDrag(self, x: float, y: float, box_size: float) -> None:
        finger = Point(x, y)
        shape = hit_test(self._shapes, finger, box_size)
        if shape is None:
            return
        self._drag_shape = shape
        self._drag_origin = finger
        self._drag_start_offset = shape.offset
        logger.debug("Drag started on %s", shape.id)
        self.interactionChanged.emit()

    @Slot(float, float)
    def drag(self, x: float, y: float) -> None:
        shape = self._drag_shape
        if shape is None:
            return
        # Returning to the origin restores the start offset exactly.
        moved = shape.moved_to(self._drag_start_offset + (Point(x, y) - self._drag_origin))
        row = self._row_of(shape)
        self._shapes[row] = moved
        self._drag_shape = moved
        if moved != shape:
            self.shapesChanged.emit()

    @Slot()
    def endDrag(self) -> None:
        if self._drag_shape is None:
            return
        logger.debug("Drag ended on %s", self._drag_shape.id)
        self._drag_shape = None
        self._drag_origin = Point.ZERO
        self._drag_start_offset = Point.ZERO
        self.interactionChanged.emit()

    def _row_of(self, shape: Shape) -> int:
        for row, candidate in enumerate(self._shapes):
            if candidate.id == shape.id:
                return row
        raise ReferentialIntegrityError(shape.id)

    # --- Line management -----------------------------------------------------
    @Slot(float, float, float)
    def startLine(self, x: float, y: float, box_size: float) -> None:
        shape = hit_test(self._shapes, Point(x, y), box_size)
        if shape is None:
            return
        line = Line(shape.id)
        self._lines.append(line)
        self._line_in_progress = line
        logger.debug("Line started from %s", shape.id)
        self.linesChanged.emit()
        self.interactionChanged.emit()

    @Slot(float, float, float)
    def endLine(self, x: float, y: float, box_size: float) -> None:
        line = self._line_in_progress
        if line is None:
            return
        row = self._line_row(line)
        end_shape = hit_test(self._shapes, Point(x, y), box_size)
        if end_shape is not None:
            self._lines[row] = line.connected_to(end_shape.id)
            logger.debug("Line connected %s -> %s", line.shape1_id, end_shape.id)
        else:
            self._lines.pop(row)
            logger.debug("Line from %s discarded", line.shape1_id)
        self._line_in_progress = None
        self.linesChanged.emit()
        self.interactionChanged.emit()

    def _line_row(self, line: Line) -> int:
        for row in range(len(self._lines) - 1, -1, -1):
            if self._lines[row] is line:
                return row
        raise ReferentialIntegrityError(line.shape1_id)

    # --- Utilities -----------------------------------------------------------
    def getShape(self, shape_id: str) -> Optional[Shape]:
        return find_shape(self._shapes, shape_id)

    def requireShape(self, shape_id: str) -> Shape:
        shape = find_shape(self._shapes, shape_id)
        if shape is None:
            raise ReferentialIntegrityError(shape_id)
        return shape

    @Slot(float, float, float, result=str)
    def shapeAt(self, x: float, y: float, box_size: float) -> str:
        shape = hit_test(self._shapes, Point(x, y), box_size)
        return shape.id if shape else ""

    @Slot(int, float, float, float, result="QVariant")
    def lineEndpoints(self, index: int, pointer_x: float, pointer_y: float, box_size: float) -> Dict[str, float]:
        """Return the segment to draw for the line at ``index``.

        A line still being drawn ends at the pointer (the rubber band).

        Raises:
            ReferentialIntegrityError: If an endpoint id does not resolve.
        """
        if not (0 <= index < len(self._lines)):
            return {}
        line = self._lines[index]
        start = shape_center(self.requireShape(line.shape1_id), box_size)
        if line.shape2_id is None:
            end = Point(pointer_x, pointer_y)
        else:
            end = shape_center(self.requireShape(line.shape2_id), box_size)
        return {"x1": start.x, "y1": start.y, "x2": end.x, "y2": end.y}
