"""Data types for DragDrop diagrams.

This module contains the value objects shared by the geometry helpers,
the diagram model and the gesture interpreter.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A position or displacement in canvas coordinates."""

    x: float
    y: float

    ZERO: ClassVar["Point"]

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def distance(self) -> float:
        return math.hypot(self.x, self.y)


Point.ZERO = Point(0.0, 0.0)


class ShapeType(Enum):
    """Kinds of shape that can be placed on the canvas."""

    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


class ToolType(Enum):
    """Toolbar tools. The first three place a shape of the same name."""

    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    DRAW_LINE = "draw_line"
    SELECT = "select"

    @property
    def shape_type(self) -> Optional[ShapeType]:
        if self is ToolType.CIRCLE:
            return ShapeType.CIRCLE
        if self is ToolType.SQUARE:
            return ShapeType.SQUARE
        if self is ToolType.TRIANGLE:
            return ShapeType.TRIANGLE
        return None

    @property
    def places_shape(self) -> bool:
        return self.shape_type is not None


@dataclass(frozen=True)
class Shape:
    """A shape on the canvas; ``offset`` is the top-left of its box."""

    id: str
    shape_type: ShapeType
    offset: Point

    @classmethod
    def create(cls, shape_type: ShapeType, offset: Point) -> "Shape":
        return cls(id=str(uuid.uuid4()), shape_type=shape_type, offset=offset)

    def moved_to(self, offset: Point) -> "Shape":
        return replace(self, offset=offset)


@dataclass(frozen=True)
class Line:
    """A connection between two shapes.

    ``shape2_id`` stays ``None`` while the line is being drawn.
    """

    shape1_id: str
    shape2_id: Optional[str] = None

    @property
    def in_progress(self) -> bool:
        return self.shape2_id is None

    def connected_to(self, shape_id: str) -> "Line":
        return replace(self, shape2_id=shape_id)


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable view of the diagram state at one point in time."""

    selected_tool: ToolType
    highlighted_type: Optional[ShapeType]
    shapes: Tuple[Shape, ...]
    lines: Tuple[Line, ...]
