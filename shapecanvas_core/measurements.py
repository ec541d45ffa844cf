"""Derived measurements of a shape in physical units."""
from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

from .config import CalibrationLike, resolve_pixels_per_unit
from .geometry import PointLike, polygon_area
from .shapes import Circle, Line, Rectangle, Shape, Triangle, triangle_sides
from .units import Unit, area_pixels_to_unit, pixels_to_unit

DISPLAY_PRECISION = 2

Measurements = Dict[str, float]


def _law_of_cosines(opposite: float, adjacent_a: float, adjacent_b: float) -> float:
    """Angle in degrees opposite ``opposite``; 0 when an adjacent side has collapsed."""
    denom = 2.0 * adjacent_a * adjacent_b
    if denom <= 0.0:
        return 0.0
    cos_value = (adjacent_a ** 2 + adjacent_b ** 2 - opposite ** 2) / denom
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_value))))


def triangle_angles(points: Sequence[PointLike]) -> Tuple[float, float, float]:
    """Interior angles opposite side1, side2 and side3, summing to exactly 180."""
    s1, s2, s3 = triangle_sides(points)
    angle1 = _law_of_cosines(s1, s2, s3)
    angle2 = _law_of_cosines(s2, s1, s3)
    return angle1, angle2, 180.0 - angle1 - angle2


def triangle_altitude(points: Sequence[PointLike]) -> float:
    """Altitude onto the longest side, in pixels."""
    longest = max(triangle_sides(points))
    if longest <= 0.0:
        return 0.0
    return 2.0 * polygon_area(points) / longest


def _circle(shape: Circle, ppu: float) -> Measurements:
    r = shape.radius
    return {
        "radius": pixels_to_unit(r, ppu),
        "diameter": pixels_to_unit(2.0 * r, ppu),
        "area": area_pixels_to_unit(math.pi * r * r, ppu),
        "circumference": pixels_to_unit(2.0 * math.pi * r, ppu),
    }


def _rectangle(shape: Rectangle, ppu: float) -> Measurements:
    w, h = shape.width, shape.height
    return {
        "width": pixels_to_unit(w, ppu),
        "height": pixels_to_unit(h, ppu),
        "area": area_pixels_to_unit(w * h, ppu),
        "perimeter": pixels_to_unit(2.0 * (w + h), ppu),
        "diagonal": pixels_to_unit(math.hypot(w, h), ppu),
    }


def _triangle(shape: Triangle, ppu: float) -> Measurements:
    s1, s2, s3 = triangle_sides(shape.points)
    a1, a2, a3 = triangle_angles(shape.points)
    return {
        "side1": pixels_to_unit(s1, ppu),
        "side2": pixels_to_unit(s2, ppu),
        "side3": pixels_to_unit(s3, ppu),
        "area": area_pixels_to_unit(polygon_area(shape.points), ppu),
        "perimeter": pixels_to_unit(s1 + s2 + s3, ppu),
        "height": pixels_to_unit(triangle_altitude(shape.points), ppu),
        "angle1": a1,
        "angle2": a2,
        "angle3": a3,
    }


def _line(shape: Line, ppu: float) -> Measurements:
    return {
        "length": pixels_to_unit(shape.length, ppu),
        "angle": shape.rotation,
    }


def compute_measurements(shape: Shape, unit: str | Unit = Unit.CM, calibration: CalibrationLike = None) -> Measurements:
    """Return every measurement of ``shape`` as floats in ``unit``.

    ``calibration`` may be a pixels-per-unit number, a :class:`Calibration`, a
    callable ``unit -> pixels`` or ``None`` for the defaults. Angles are degrees.
    """
    ppu = resolve_pixels_per_unit(calibration, unit)
    if isinstance(shape, Circle):
        return _circle(shape, ppu)
    if isinstance(shape, Rectangle):
        return _rectangle(shape, ppu)
    if isinstance(shape, Triangle):
        return _triangle(shape, ppu)
    if isinstance(shape, Line):
        return _line(shape, ppu)
    return {}


def format_measurement(value: float, precision: int = DISPLAY_PRECISION) -> str:
    return f"{value:.{precision}f}"


def get_shape_measurements(
    shape: Shape,
    unit: str | Unit = Unit.CM,
    calibration: CalibrationLike = None,
) -> Dict[str, str]:
    """Display strings for :func:`compute_measurements`, two decimals each."""
    return {key: format_measurement(value) for key, value in compute_measurements(shape, unit, calibration).items()}


__all__ = [
    "DISPLAY_PRECISION",
    "Measurements",
    "triangle_angles",
    "triangle_altitude",
    "compute_measurements",
    "format_measurement",
    "get_shape_measurements",
]
