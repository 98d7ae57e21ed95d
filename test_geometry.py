"""Tests for hit-testing and point helpers."""

import pytest

from dragdrop import (
    InvalidConfigurationError,
    Point,
    Shape,
    ShapeType,
    find_shape,
    hit_test,
    placement_offset,
    shape_center,
)

BOX = 48.0


def make_shape(x, y, shape_type=ShapeType.SQUARE, shape_id=None):
    if shape_id is None:
        return Shape.create(shape_type, Point(x, y))
    return Shape(shape_id, shape_type, Point(x, y))


class TestPoint:
    def test_arithmetic(self):
        assert Point(3.0, 4.0) + Point(1.0, 2.0) == Point(4.0, 6.0)
        assert Point(3.0, 4.0) - Point(1.0, 2.0) == Point(2.0, 2.0)

    def test_distance(self):
        assert Point(3.0, 4.0).distance() == 5.0
        assert Point.ZERO.distance() == 0.0


class TestHitTest:
    def test_point_inside_box(self):
        shape = make_shape(100.0, 100.0)
        assert hit_test([shape], Point(120.0, 130.0), BOX) == shape

    def test_point_outside_every_box(self):
        shapes = [make_shape(0.0, 0.0), make_shape(200.0, 200.0)]
        assert hit_test(shapes, Point(100.0, 100.0), BOX) is None
        assert hit_test(shapes, Point(-1.0, 10.0), BOX) is None

    def test_empty_sequence(self):
        assert hit_test([], Point(0.0, 0.0), BOX) is None

    @pytest.mark.parametrize(
        "dx, dy",
        [(0.0, 20.0), (BOX, 20.0), (20.0, 0.0), (20.0, BOX), (0.0, 0.0), (BOX, BOX)],
    )
    def test_edges_are_inclusive(self, dx, dy):
        shape = make_shape(10.0, 10.0)
        assert hit_test([shape], Point(10.0 + dx, 10.0 + dy), BOX) == shape

    @pytest.mark.parametrize("dx, dy", [(-0.01, 20.0), (BOX + 0.01, 20.0), (20.0, -0.01), (20.0, BOX + 0.01)])
    def test_just_outside_edges(self, dx, dy):
        shape = make_shape(10.0, 10.0)
        assert hit_test([shape], Point(10.0 + dx, 10.0 + dy), BOX) is None

    def test_overlap_returns_later_shape(self):
        bottom = make_shape(0.0, 0.0, ShapeType.CIRCLE)
        top = make_shape(20.0, 20.0, ShapeType.TRIANGLE)
        assert hit_test([bottom, top], Point(30.0, 30.0), BOX) == top
        assert hit_test([top, bottom], Point(30.0, 30.0), BOX) == bottom

    def test_overlap_outside_top_shape_falls_through(self):
        bottom = make_shape(0.0, 0.0)
        top = make_shape(20.0, 20.0)
        assert hit_test([bottom, top], Point(5.0, 5.0), BOX) == bottom

    @pytest.mark.parametrize("box_size", [0.0, -10.0])
    def test_rejects_non_positive_box(self, box_size):
        with pytest.raises(InvalidConfigurationError):
            hit_test([make_shape(0.0, 0.0)], Point(0.0, 0.0), box_size)

    def test_invalid_box_rejected_even_without_shapes(self):
        with pytest.raises(ValueError):
            hit_test([], Point(0.0, 0.0), 0.0)


class TestHelpers:
    def test_find_shape(self):
        a = make_shape(0.0, 0.0, shape_id="a")
        b = make_shape(50.0, 0.0, shape_id="b")
        assert find_shape([a, b], "b") == b
        assert find_shape([a, b], "missing") is None

    def test_shape_center(self):
        shape = make_shape(10.0, 20.0)
        assert shape_center(shape, BOX) == Point(34.0, 44.0)

    def test_placement_offset_centers_box_on_point(self):
        assert placement_offset(Point(100.0, 100.0), BOX) == Point(76.0, 76.0)
