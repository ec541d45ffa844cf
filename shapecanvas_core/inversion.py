"""Update a shape from one edited measurement.

Each ``(kind, key)`` pair maps to a handler that solves for the primary
geometry realising the new value. Handlers receive the value already parsed
and the pixels-per-unit factor for the requested unit, and always return a
shape: unknown pairs, non-numeric and non-finite input hand back the
original object untouched.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Dict, Union

from .config import CalibrationLike, resolve_pixels_per_unit
from .geometry import (
    EPS,
    Point,
    calculate_angle_radians,
    centroid,
    distance,
    normalize_angle_degrees,
    polygon_area,
    scale_point,
    translate_point,
)
from .log import get_logger
from .shapes import (
    MIN_DIMENSION,
    Circle,
    Line,
    Rectangle,
    Shape,
    ShapeKind,
    Triangle,
    line_with_points,
    triangle_sides,
    triangle_with_points,
)
from .units import Unit, area_unit_to_pixels, unit_to_pixels

logger = get_logger(__name__)

MIN_TRIANGLE_ANGLE = 1.0
MAX_TRIANGLE_ANGLE = 179.0

Handler = Callable[[Shape, float, float], Shape]


def _floor(value: float) -> float:
    return value if value > MIN_DIMENSION else MIN_DIMENSION


def _floor_area(value: float) -> float:
    return value if value > MIN_DIMENSION * MIN_DIMENSION else MIN_DIMENSION * MIN_DIMENSION


# ---------------------------------------------------------------------------
# Circle


def _circle_radius(shape: Circle, value: float, ppu: float) -> Shape:
    return replace(shape, radius=_floor(unit_to_pixels(value, ppu)))


def _circle_diameter(shape: Circle, value: float, ppu: float) -> Shape:
    return replace(shape, radius=_floor(unit_to_pixels(value / 2.0, ppu)))


def _circle_circumference(shape: Circle, value: float, ppu: float) -> Shape:
    return replace(shape, radius=_floor(unit_to_pixels(value / (2.0 * math.pi), ppu)))


def _circle_area(shape: Circle, value: float, ppu: float) -> Shape:
    if value <= 0.0:
        return replace(shape, radius=MIN_DIMENSION)
    return replace(shape, radius=_floor(unit_to_pixels(math.sqrt(value / math.pi), ppu)))


# ---------------------------------------------------------------------------
# Rectangle


def _rectangle_width(shape: Rectangle, value: float, ppu: float) -> Shape:
    return replace(shape, width=_floor(unit_to_pixels(value, ppu)))


def _rectangle_height(shape: Rectangle, value: float, ppu: float) -> Shape:
    return replace(shape, height=_floor(unit_to_pixels(value, ppu)))


def _scale_rectangle(shape: Rectangle, factor: float) -> Rectangle:
    return replace(shape, width=_floor(shape.width * factor), height=_floor(shape.height * factor))


def _rectangle_area(shape: Rectangle, value: float, ppu: float) -> Shape:
    target = _floor_area(area_unit_to_pixels(value, ppu))
    current = shape.width * shape.height
    if current <= EPS:
        side = math.sqrt(target)
        return replace(shape, width=_floor(side), height=_floor(side))
    return _scale_rectangle(shape, math.sqrt(target / current))


def _rectangle_perimeter(shape: Rectangle, value: float, ppu: float) -> Shape:
    target = _floor(unit_to_pixels(value, ppu))
    current = 2.0 * (shape.width + shape.height)
    if current <= EPS:
        return replace(shape, width=_floor(target / 4.0), height=_floor(target / 4.0))
    return _scale_rectangle(shape, target / current)


def _rectangle_diagonal(shape: Rectangle, value: float, ppu: float) -> Shape:
    target = _floor(unit_to_pixels(value, ppu))
    current = math.hypot(shape.width, shape.height)
    if current <= EPS:
        side = target / math.sqrt(2.0)
        return replace(shape, width=_floor(side), height=_floor(side))
    return _scale_rectangle(shape, target / current)


# ---------------------------------------------------------------------------
# Triangle


def _scale_triangle(shape: Triangle, factor: float) -> Triangle:
    center = shape.position
    return triangle_with_points(shape, [scale_point(p, center, factor) for p in shape.points])


def _triangle_side(index: int) -> Handler:
    def handler(shape: Triangle, value: float, ppu: float) -> Shape:
        target = _floor(unit_to_pixels(value, ppu))
        current = triangle_sides(shape.points)[index]
        if current <= EPS and shape.original_dimensions is not None:
            current = shape.original_dimensions[index]
        if current <= EPS:
            logger.warning("Triangle %s side%d is degenerate; edit ignored", shape.id, index + 1)
            return shape
        return _scale_triangle(shape, target / current)

    handler.__name__ = f"_triangle_side{index + 1}"
    return handler


# angle_i sits at the vertex opposite side_i; the listed neighbour is the one that moves.
_ANGLE_VERTICES = {
    0: (2, 0, 1),
    1: (0, 1, 2),
    2: (1, 2, 0),
}


def _triangle_angle(index: int) -> Handler:
    vertex_idx, fixed_idx, moving_idx = _ANGLE_VERTICES[index]

    def handler(shape: Triangle, value: float, ppu: float) -> Shape:
        target = abs(normalize_angle_degrees(value))
        target = min(MAX_TRIANGLE_ANGLE, max(MIN_TRIANGLE_ANGLE, target))

        pts = list(shape.points)
        vertex, fixed, moving = pts[vertex_idx], pts[fixed_idx], pts[moving_idx]
        reach = distance(vertex, moving)
        if reach <= EPS or distance(vertex, fixed) <= EPS:
            logger.warning("Triangle %s has a collapsed side at angle%d; edit ignored", shape.id, index + 1)
            return shape

        # Keep the winding: the moving side stays on the same side of the fixed one.
        cross = (fixed.x - vertex.x) * (moving.y - vertex.y) - (fixed.y - vertex.y) * (moving.x - vertex.x)
        sign = -1.0 if cross < 0.0 else 1.0
        direction = calculate_angle_radians(vertex, fixed) + sign * math.radians(target)
        pts[moving_idx] = Point(vertex.x + reach * math.cos(direction), vertex.y + reach * math.sin(direction))

        new_center = centroid(pts)
        dx = shape.position.x - new_center.x
        dy = shape.position.y - new_center.y
        return triangle_with_points(shape, [translate_point(p, dx, dy) for p in pts])

    handler.__name__ = f"_triangle_angle{index + 1}"
    return handler


def _triangle_area(shape: Triangle, value: float, ppu: float) -> Shape:
    current = polygon_area(shape.points)
    if current <= EPS:
        logger.warning("Triangle %s has no area to scale; edit ignored", shape.id)
        return shape
    target = _floor_area(area_unit_to_pixels(value, ppu))
    return _scale_triangle(shape, math.sqrt(target / current))


def _triangle_perimeter(shape: Triangle, value: float, ppu: float) -> Shape:
    current = sum(triangle_sides(shape.points))
    if current <= EPS:
        logger.warning("Triangle %s has no perimeter to scale; edit ignored", shape.id)
        return shape
    return _scale_triangle(shape, _floor(unit_to_pixels(value, ppu)) / current)


# ---------------------------------------------------------------------------
# Line


def _line_direction(shape: Line) -> float:
    if shape.length > EPS:
        return calculate_angle_radians(shape.start_point, shape.end_point)
    return math.radians(shape.rotation)


def _line_length(shape: Line, value: float, ppu: float) -> Shape:
    length = _floor(unit_to_pixels(value, ppu))
    direction = _line_direction(shape)
    start = shape.start_point
    end = Point(start.x + length * math.cos(direction), start.y + length * math.sin(direction))
    return line_with_points(shape, start, end)


def _line_angle(shape: Line, value: float, ppu: float) -> Shape:
    direction = math.radians(normalize_angle_degrees(value))
    length = shape.length if shape.length > EPS else MIN_DIMENSION
    start = shape.start_point
    end = Point(start.x + length * math.cos(direction), start.y + length * math.sin(direction))
    return line_with_points(shape, start, end)


MEASUREMENT_HANDLERS: Dict[ShapeKind, Dict[str, Handler]] = {
    ShapeKind.CIRCLE: {
        "radius": _circle_radius,
        "diameter": _circle_diameter,
        "circumference": _circle_circumference,
        "area": _circle_area,
    },
    ShapeKind.RECTANGLE: {
        "width": _rectangle_width,
        "height": _rectangle_height,
        "area": _rectangle_area,
        "perimeter": _rectangle_perimeter,
        "diagonal": _rectangle_diagonal,
    },
    ShapeKind.TRIANGLE: {
        "side1": _triangle_side(0),
        "side2": _triangle_side(1),
        "side3": _triangle_side(2),
        "angle1": _triangle_angle(0),
        "angle2": _triangle_angle(1),
        "angle3": _triangle_angle(2),
        "area": _triangle_area,
        "perimeter": _triangle_perimeter,
    },
    ShapeKind.LINE: {
        "length": _line_length,
        "angle": _line_angle,
    },
}


def editable_keys(kind: str | ShapeKind) -> list[str]:
    """Measurement keys that can be edited for ``kind`` (empty for unknown kinds)."""
    try:
        return list(MEASUREMENT_HANDLERS[ShapeKind(kind)])
    except ValueError:
        return []


def _parse_value(value: Union[str, float, int]) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def update_shape_from_measurement(
    shape: Shape,
    key: str,
    value: Union[str, float, int],
    unit: str | Unit = Unit.CM,
    calibration: CalibrationLike = None,
) -> Shape:
    """Return ``shape`` adjusted so that measurement ``key`` reads ``value`` in ``unit``.

    Angles are always degrees. Non-positive lengths and areas are clamped to a
    one pixel floor; angles are normalised before use. The function never
    raises for a known unit and never mutates its input.
    """
    kind = getattr(shape, "type", None)
    handler = MEASUREMENT_HANDLERS.get(kind, {}).get(key) if kind is not None else None
    if handler is None:
        logger.warning("No measurement '%s' for shape kind %s; shape unchanged", key, kind)
        return shape

    number = _parse_value(value)
    if number is None or not math.isfinite(number):
        logger.warning("Ignoring non-numeric value %r for %s.%s", value, kind.value, key)
        return shape

    ppu = resolve_pixels_per_unit(calibration, unit)
    updated = handler(shape, number, ppu)
    logger.debug("Updated %s %s from %s=%s", kind.value, shape.id, key, number)
    return updated


__all__ = [
    "MIN_TRIANGLE_ANGLE",
    "MAX_TRIANGLE_ANGLE",
    "MEASUREMENT_HANDLERS",
    "editable_keys",
    "update_shape_from_measurement",
]
