import math

import pytest

from shapecanvas_core.geometry import Point, distance
from shapecanvas_core.shapes import Circle, Rectangle, make_line, make_triangle
from shapecanvas_core.transforms import (
    clear_shapes,
    delete_shape,
    extend_line,
    get_selected_shape,
    line_slope,
    move_shape,
    resize_shape,
    rotate_shape,
    select_shape,
)


@pytest.fixture
def shapes():
    return [
        Circle(id="c", position=Point(50, 50), radius=10),
        Rectangle(id="r", position=Point(0, 0), width=100, height=80),
        make_triangle([(0, 0), (30, 0), (0, 30)], id="t"),
        make_line((0, 0), (10, 0), id="l"),
    ]


def test_move_translates_only_the_target(shapes):
    result = move_shape(shapes, "t", 5, -5)
    tri = result[2]
    assert tri.points == (Point(5, -5), Point(35, -5), Point(5, 25))
    assert tri.position == Point(15.0, 5.0)
    assert result[0] is shapes[0]
    assert result[1] is shapes[1]
    assert result[3] is shapes[3]


def test_move_line_moves_both_endpoints(shapes):
    line = move_shape(shapes, "l", 2, 3)[3]
    assert line.start_point == Point(2, 3)
    assert line.end_point == Point(12, 3)
    assert line.position == Point(7.0, 3.0)
    assert line.length == pytest.approx(10.0)


def test_resize_circle_and_rectangle(shapes):
    result = resize_shape(shapes, "c", 2.0)
    assert result[0].radius == pytest.approx(20.0)
    assert result[0].position == Point(50, 50)
    rect = resize_shape(shapes, "r", -0.5)[1]
    assert (rect.width, rect.height) == pytest.approx((50.0, 40.0))
    assert rect.position == Point(0, 0)


def test_resize_enforces_minimum_dimension(shapes):
    rect = resize_shape(shapes, "r", 0.0)[1]
    assert rect.width == 1.0
    assert rect.height == 1.0


def test_resize_triangle_about_centroid(shapes):
    tri = resize_shape(shapes, "t", 2.0)[2]
    assert tri.position == pytest.approx(Point(10.0, 10.0))
    assert tuple(tri.points[0]) == pytest.approx((-10.0, -10.0))
    assert distance(tri.points[0], tri.points[1]) == pytest.approx(60.0)


def test_resize_line_about_midpoint(shapes):
    line = resize_shape(shapes, "l", 3.0)[3]
    assert line.length == pytest.approx(30.0)
    assert tuple(line.position) == pytest.approx((5.0, 0.0))
    assert tuple(line.start_point) == pytest.approx((-10.0, 0.0))


def test_rotate_sets_rotation_for_area_shapes(shapes):
    result = rotate_shape(shapes, "r", 30.0)
    assert result[1].rotation == 30.0
    assert result[1].width == 100


@pytest.mark.parametrize("angle", [450.0, -270.0, 810.0])
def test_rotate_normalises_stored_angle(shapes, angle):
    result = rotate_shape(shapes, "r", angle)
    assert result[1].rotation == pytest.approx(90.0)
    assert rotate_shape(shapes, "c", -180.0)[0].rotation == pytest.approx(180.0)


@pytest.mark.parametrize("shape_id", ["c", "r", "t", "l"])
@pytest.mark.parametrize(
    "dx, dy",
    [(math.nan, 0.0), (0.0, math.nan), (math.inf, 1.0), (1.0, -math.inf), (math.nan, math.inf)],
)
def test_move_ignores_non_finite_offsets(shapes, shape_id, dx, dy):
    result = move_shape(shapes, shape_id, dx, dy)
    assert all(new is old for new, old in zip(result, shapes))


def test_rotate_line_preserves_length(shapes):
    line = rotate_shape(shapes, "l", 90.0)[3]
    assert tuple(line.start_point) == pytest.approx((5.0, -5.0), abs=1e-9)
    assert tuple(line.end_point) == pytest.approx((5.0, 5.0), abs=1e-9)
    assert line.length == pytest.approx(10.0)
    assert distance(line.start_point, line.end_point) == pytest.approx(line.length)
    assert line.rotation == pytest.approx(90.0)


def test_unknown_id_is_a_no_op(shapes):
    assert rotate_shape(shapes, "missing-id", 45) == shapes
    assert move_shape(shapes, "missing-id", 1, 1) == shapes
    assert resize_shape([], "x", 2.0) == []
    assert delete_shape(shapes, "missing-id") == shapes


def test_select_is_exclusive_and_idempotent(shapes):
    once = select_shape(shapes, "r")
    assert [s.selected for s in once] == [False, True, False, False]
    twice = select_shape(once, "r")
    assert twice == once
    assert all(a is b for a, b in zip(once, twice))
    switched = select_shape(once, "c")
    assert get_selected_shape(switched).id == "c"
    assert not switched[1].selected


def test_select_none_or_unknown_clears(shapes):
    selected = select_shape(shapes, "t")
    assert not any(s.selected for s in select_shape(selected, None))
    assert not any(s.selected for s in select_shape(selected, "ghost"))
    assert get_selected_shape(select_shape(selected, "ghost")) is None


def test_select_on_empty_collection():
    assert select_shape([], "x") == []


def test_delete_and_clear(shapes):
    remaining = delete_shape(shapes, "c")
    assert [s.id for s in remaining] == ["r", "t", "l"]
    assert clear_shapes(shapes) == []
    assert len(shapes) == 4


def test_extend_line():
    line = make_line((0, 0), (10, 0), id="l")
    longer = extend_line(line, 5.0)
    assert tuple(longer.end_point) == pytest.approx((15.0, 0.0))
    assert longer.length == pytest.approx(15.0)
    back = extend_line(line, 5.0, from_start=True)
    assert tuple(back.start_point) == pytest.approx((-5.0, 0.0))
    assert back.end_point == line.end_point


def test_line_slope():
    assert line_slope(make_line((0, 0), (10, 5), id="a")) == pytest.approx(0.5)
    assert math.isinf(line_slope(make_line((3, 0), (3, 10), id="b")))
