import math

import pytest

from shapecanvas_core.config import Calibration
from shapecanvas_core.geometry import Point
from shapecanvas_core.measurements import (
    compute_measurements,
    format_measurement,
    get_shape_measurements,
    triangle_angles,
)
from shapecanvas_core.shapes import Circle, Rectangle, make_line, make_triangle
from shapecanvas_core.units import Unit


def test_circle_measurements_in_cm():
    circle = Circle(id="c", position=Point(0, 0), radius=60)
    values = compute_measurements(circle, Unit.CM)
    assert values["radius"] == pytest.approx(1.0)
    assert values["diameter"] == pytest.approx(2.0)
    assert values["area"] == pytest.approx(math.pi)
    assert values["circumference"] == pytest.approx(2 * math.pi)


def test_rectangle_measurements():
    rect = Rectangle(id="r", position=Point(0, 0), width=120, height=60)
    values = compute_measurements(rect, "cm", 60.0)
    assert values == pytest.approx(
        {"width": 2.0, "height": 1.0, "area": 2.0, "perimeter": 6.0, "diagonal": math.sqrt(5.0)}
    )


def test_triangle_measurements_in_pixels():
    tri = make_triangle([(0, 0), (30, 0), (0, 30)], id="t")
    values = compute_measurements(tri, Unit.CM, 1.0)
    hyp = math.sqrt(1800.0)
    assert values["side1"] == pytest.approx(30.0)
    assert values["side2"] == pytest.approx(hyp)
    assert values["side3"] == pytest.approx(30.0)
    assert values["area"] == pytest.approx(450.0)
    assert values["perimeter"] == pytest.approx(60.0 + hyp)
    assert values["height"] == pytest.approx(900.0 / hyp)
    assert values["angle1"] == pytest.approx(45.0)
    assert values["angle2"] == pytest.approx(90.0)
    assert values["angle3"] == pytest.approx(45.0)


def test_triangle_angles_sum_to_180():
    angles = triangle_angles([(0, 0), (17.3, 2.1), (4.4, 29.9)])
    assert sum(angles) == pytest.approx(180.0, abs=1e-12)
    equilateral = triangle_angles([(0, 0), (10, 0), (5, 5 * math.sqrt(3))])
    assert equilateral == pytest.approx((60.0, 60.0, 60.0))


def test_line_measurements_use_inch_calibration():
    line = make_line((0, 0), (0, 152.4), id="l")
    values = compute_measurements(line, Unit.IN)
    assert values["length"] == pytest.approx(1.0)
    assert values["angle"] == pytest.approx(90.0)


def test_calibration_sources_are_interchangeable():
    circle = Circle(id="c", position=Point(0, 0), radius=100)
    by_number = compute_measurements(circle, "cm", 50.0)
    by_object = compute_measurements(circle, "cm", Calibration(pixels_per_cm=50.0))
    by_callable = compute_measurements(circle, "cm", lambda unit: 50.0)
    assert by_number == by_object == by_callable
    assert by_number["radius"] == pytest.approx(2.0)


def test_display_strings_are_two_decimals():
    rect = Rectangle(id="r", position=Point(0, 0), width=100, height=80)
    shown = get_shape_measurements(rect, "cm", 60.0)
    assert shown["width"] == "1.67"
    assert shown["height"] == "1.33"
    assert shown["area"] == "2.22"
    assert format_measurement(3.14159) == "3.14"
    assert format_measurement(2.0, precision=3) == "2.000"
