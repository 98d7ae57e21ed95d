"""DragDrop diagram core built on PySide6.

Shapes are placed, dragged and connected through pointer gestures; the
model publishes every change through Qt signals so a QML canvas can bind
to it directly.
"""

from .constants import DEFAULT_CONFIG, DEFAULT_TOOL, GraphConfig
from .controller import GraphController
from .errors import DiagramError, InvalidConfigurationError, ReferentialIntegrityError
from .geometry import find_shape, hit_test, placement_offset, shape_center
from .gestures import (
    Gesture,
    GestureKind,
    GesturePhase,
    PointerAction,
    PointerEvent,
    TapDragDetector,
    classify,
)
from .highlight import HighlightSequence
from .model import GraphModel
from .types import GraphSnapshot, Line, Point, Shape, ShapeType, ToolType

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_TOOL",
    "DiagramError",
    "Gesture",
    "GestureKind",
    "GesturePhase",
    "GraphConfig",
    "GraphController",
    "GraphModel",
    "GraphSnapshot",
    "HighlightSequence",
    "InvalidConfigurationError",
    "Line",
    "Point",
    "PointerAction",
    "PointerEvent",
    "ReferentialIntegrityError",
    "Shape",
    "ShapeType",
    "TapDragDetector",
    "ToolType",
    "classify",
    "find_shape",
    "hit_test",
    "placement_offset",
    "shape_center",
]
