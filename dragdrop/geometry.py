"""Point math and hit-testing for diagram shapes."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import InvalidConfigurationError
from .types import Point, Shape


def hit_test(shapes: Sequence[Shape], point: Point, box_size: float) -> Optional[Shape]:
    """Return the top-most shape whose box contains ``point``.

    Shapes later in the sequence are drawn on top, so they are checked
    first. Box edges count as inside.

    Raises:
        InvalidConfigurationError: If ``box_size`` is zero or negative.
    """
    if box_size <= 0:
        raise InvalidConfigurationError(f"box_size must be positive, got {box_size}")
    for shape in reversed(shapes):
        normalized = point - shape.offset
        if 0 <= normalized.x <= box_size and 0 <= normalized.y <= box_size:
            return shape
    return None


def find_shape(shapes: Sequence[Shape], shape_id: str) -> Optional[Shape]:
    for shape in shapes:
        if shape.id == shape_id:
            return shape
    return None


def shape_center(shape: Shape, box_size: float) -> Point:
    """Center of the shape's box, where connecting lines attach."""
    half = box_size / 2
    return shape.offset + Point(half, half)


def placement_offset(point: Point, box_size: float) -> Point:
    """Offset that centers a new shape's box on ``point``."""
    half = box_size / 2
    return point - Point(half, half)
