import math

import pytest

from shapecanvas_core.geometry import (
    Point,
    as_point,
    calculate_angle_degrees,
    calculate_angle_radians,
    centroid,
    degrees_to_radians,
    distance,
    interior_angle,
    midpoint,
    normalize_angle_degrees,
    normalize_angle_radians,
    point_segment_distance,
    polygon_area,
    radians_to_degrees,
    rotate_point_degrees,
    rotate_point_radians,
    scale_point,
    to_clockwise_angle,
    to_counterclockwise_angle,
)


def test_distance_and_midpoint():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert distance(Point(1, 1), Point(1, 1)) == 0.0
    assert midpoint((0, 0), (10, 4)) == Point(5.0, 2.0)


def test_as_point_accepts_mappings_and_sequences():
    assert as_point([1, 2]) == Point(1.0, 2.0)
    assert as_point({"x": 3, "y": 4}) == Point(3.0, 4.0)


def test_angle_unit_conversions():
    assert degrees_to_radians(180.0) == pytest.approx(math.pi)
    assert radians_to_degrees(math.pi / 2) == pytest.approx(90.0)
    assert radians_to_degrees(degrees_to_radians(37.5)) == pytest.approx(37.5)


def test_normalize_degrees_boundaries():
    assert normalize_angle_degrees(180.0) == 180.0
    assert normalize_angle_degrees(181.0) == -179.0
    assert normalize_angle_degrees(-180.0) == 180.0
    assert normalize_angle_degrees(540.0) == 180.0
    assert normalize_angle_degrees(0.0) == 0.0
    assert normalize_angle_degrees(-90.0) == -90.0


@pytest.mark.parametrize("angle", [-725.5, -181.0, -1.0, 0.0, 45.25, 179.0, 359.0, 1000.0])
def test_normalize_degrees_is_periodic(angle):
    expected = normalize_angle_degrees(angle)
    assert -180.0 < expected <= 180.0
    assert normalize_angle_degrees(angle + 360.0) == pytest.approx(expected)
    assert normalize_angle_degrees(angle - 720.0) == pytest.approx(expected)


def test_normalize_radians():
    assert normalize_angle_radians(math.pi) == pytest.approx(math.pi)
    assert normalize_angle_radians(-math.pi) == pytest.approx(math.pi)
    assert normalize_angle_radians(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)
    assert normalize_angle_radians(0.25 + 4 * math.pi) == pytest.approx(0.25)


def test_rotate_point_quarter_turn():
    rotated = rotate_point_radians((10.0, 0.0), (0.0, 0.0), math.pi / 2)
    assert tuple(rotated) == pytest.approx((0.0, 10.0), abs=1e-6)


def test_rotate_point_about_center():
    rotated = rotate_point_degrees((15.0, 5.0), (5.0, 5.0), 180.0)
    assert tuple(rotated) == pytest.approx((-5.0, 5.0), abs=1e-9)


def test_calculate_angle():
    assert calculate_angle_degrees((0, 0), (0, 10)) == pytest.approx(90.0)
    assert calculate_angle_degrees((0, 0), (-1, 0)) == pytest.approx(180.0)
    assert calculate_angle_radians((1, 1), (2, 0)) == pytest.approx(-math.pi / 4)


def test_clockwise_conversion():
    assert to_clockwise_angle(30.0) == -30.0
    assert to_counterclockwise_angle(-45.0) == 45.0
    assert to_clockwise_angle(360.0) == 0.0
    assert to_counterclockwise_angle(-720.0) == 0.0


def test_centroid_and_polygon_area():
    pts = [(0, 0), (30, 0), (0, 30)]
    assert centroid(pts) == Point(10.0, 10.0)
    assert polygon_area(pts) == pytest.approx(450.0)
    assert polygon_area([(0, 0), (1, 1)]) == 0.0


def test_scale_point():
    assert scale_point((4, 0), (2, 0), 3.0) == Point(8.0, 0.0)


def test_point_segment_distance():
    assert point_segment_distance((5, 5), (0, 0), (10, 0)) == pytest.approx(5.0)
    assert point_segment_distance((13, 4), (0, 0), (10, 0)) == pytest.approx(5.0)
    assert point_segment_distance((3, 4), (0, 0), (0, 0)) == pytest.approx(5.0)


def test_interior_angle():
    assert interior_angle((0, 0), (10, 0), (0, 10)) == pytest.approx(90.0)
    assert interior_angle((0, 0), (10, 0), (-10, 0.0)) == pytest.approx(180.0)
