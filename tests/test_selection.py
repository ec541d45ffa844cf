import math
from dataclasses import replace

import pytest

from shapecanvas_core.geometry import Point
from shapecanvas_core.selection import (
    Bounds,
    calculate_shape_area,
    calculate_shape_perimeter,
    find_shape_at,
    get_shape_bounds,
    get_shape_center,
    is_point_in_shape,
)
from shapecanvas_core.shapes import Circle, Rectangle, make_line, make_triangle


def test_circle_hit_test():
    circle = Circle(id="c", position=Point(50, 50), radius=10)
    assert is_point_in_shape(circle, (55, 55))
    assert is_point_in_shape(circle, (60, 50))
    assert not is_point_in_shape(circle, (58, 58))


def test_rectangle_hit_test():
    rect = Rectangle(id="r", position=Point(10, 10), width=20, height=10)
    assert is_point_in_shape(rect, (15, 15))
    assert is_point_in_shape(rect, (30, 20))
    assert not is_point_in_shape(rect, (31, 15))
    assert not is_point_in_shape(rect, (15, 9))


def test_triangle_hit_test():
    tri = make_triangle([(0, 0), (30, 0), (0, 30)], id="t")
    assert is_point_in_shape(tri, (4, 4))
    assert is_point_in_shape(tri, (15, 0))
    assert not is_point_in_shape(tri, (20, 20))


def test_line_hit_uses_tolerance():
    line = make_line((0, 0), (10, 0), id="l")
    assert is_point_in_shape(line, (5, 4))
    assert not is_point_in_shape(line, (5, 6))
    assert not is_point_in_shape(line, (17, 0))


def test_triangle_area_and_perimeter():
    tri = make_triangle([(0, 0), (30, 0), (0, 30)], id="t")
    assert calculate_shape_area(tri) == pytest.approx(450.0)
    assert calculate_shape_perimeter(tri) == pytest.approx(30 + 30 + math.sqrt(1800))


def test_area_and_perimeter_of_other_kinds():
    assert calculate_shape_area(Circle(id="c", position=Point(0, 0), radius=2)) == pytest.approx(4 * math.pi)
    rect = Rectangle(id="r", position=Point(0, 0), width=3, height=4)
    assert calculate_shape_area(rect) == 12
    assert calculate_shape_perimeter(rect) == 14
    line = make_line((0, 0), (3, 4), id="l")
    assert calculate_shape_area(line) == 0.0
    assert calculate_shape_perimeter(line) == pytest.approx(5.0)


def test_centers_and_bounds():
    rect = Rectangle(id="r", position=Point(10, 20), width=40, height=10)
    assert get_shape_center(rect) == Point(30.0, 25.0)
    assert get_shape_bounds(rect) == Bounds(10, 20, 50, 30)

    circle = Circle(id="c", position=Point(5, 5), radius=5)
    assert get_shape_center(circle) == Point(5, 5)
    assert get_shape_bounds(circle) == Bounds(0, 0, 10, 10)

    tri = make_triangle([(0, 0), (30, 0), (0, 30)], id="t")
    assert get_shape_center(tri) == Point(10.0, 10.0)
    bounds = get_shape_bounds(tri)
    assert bounds == Bounds(0.0, 0.0, 30.0, 30.0)
    assert (bounds.width, bounds.height) == (30.0, 30.0)

    line = make_line((8, 2), (0, 6), id="l")
    assert get_shape_bounds(line) == Bounds(0.0, 2.0, 8.0, 6.0)


def test_rotated_rectangle_hit_test():
    rect = Rectangle(id="r", position=Point(0, 0), width=200, height=20, rotation=90)
    assert get_shape_center(rect) == Point(100.0, 10.0)
    assert not is_point_in_shape(rect, (190, 10))
    assert is_point_in_shape(rect, (100, 90))
    assert is_point_in_shape(rect, (100, -80))
    assert not is_point_in_shape(rect, (120, 10))


def test_rotated_triangle_hit_test():
    tri = make_triangle([(0, 0), (30, 0), (0, 30)], id="t")
    # Half a turn about the centroid (10, 10) maps (4, 4) onto (16, 16).
    turned = replace(tri, rotation=180)
    assert is_point_in_shape(tri, (4, 4))
    assert not is_point_in_shape(turned, (4, 4))
    assert not is_point_in_shape(tri, (16, 16))
    assert is_point_in_shape(turned, (16, 16))


def test_rotated_bounds():
    rect = Rectangle(id="r", position=Point(0, 0), width=200, height=20, rotation=90)
    bounds = get_shape_bounds(rect)
    assert tuple(bounds) == pytest.approx((90.0, -90.0, 110.0, 110.0))
    assert (bounds.width, bounds.height) == pytest.approx((20.0, 200.0))

    tri = replace(make_triangle([(0, 0), (30, 0), (0, 30)], id="t"), rotation=180)
    assert tuple(get_shape_bounds(tri)) == pytest.approx((-10.0, -10.0, 20.0, 20.0))


def test_find_shape_at_prefers_topmost():
    bottom = Rectangle(id="bottom", position=Point(0, 0), width=100, height=100)
    top = Circle(id="top", position=Point(50, 50), radius=10)
    shapes = [bottom, top]
    assert find_shape_at(shapes, (50, 50)) is top
    assert find_shape_at(shapes, (5, 5)) is bottom
    assert find_shape_at(shapes, (500, 500)) is None
    assert find_shape_at([], (0, 0)) is None
