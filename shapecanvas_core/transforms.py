"""Collection transforms: move, resize, rotate, select, delete.

Every function takes the current shape list and returns a new one. Shapes that
are not touched are passed through as the same objects and order is kept.
Unknown ids are silently ignored.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from .geometry import (
    EPS,
    calculate_angle_radians,
    normalize_angle_degrees,
    rotate_point_degrees,
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
    Triangle,
    line_with_points,
    triangle_sides,
    triangle_with_points,
)

logger = get_logger(__name__)

ShapeList = List[Shape]


def _apply(shapes: Sequence[Shape], shape_id: str, fn: Callable[[Shape], Shape]) -> ShapeList:
    return [fn(shape) if shape.id == shape_id else shape for shape in shapes]


def _floored_factor(factor: float, base: float) -> float:
    """Keep ``base * factor`` at or above the minimum dimension."""
    if base > EPS and base * factor < MIN_DIMENSION:
        return MIN_DIMENSION / base
    return factor


# ---------------------------------------------------------------------------
# Single-shape helpers


def moved(shape: Shape, dx: float, dy: float) -> Shape:
    if not (math.isfinite(dx) and math.isfinite(dy)):
        return shape
    if isinstance(shape, Triangle):
        return triangle_with_points(shape, [translate_point(p, dx, dy) for p in shape.points])
    if isinstance(shape, Line):
        return line_with_points(
            shape,
            translate_point(shape.start_point, dx, dy),
            translate_point(shape.end_point, dx, dy),
        )
    return replace(shape, position=translate_point(shape.position, dx, dy))


def resized(shape: Shape, factor: float) -> Shape:
    factor = abs(float(factor))
    if not math.isfinite(factor):
        return shape
    if isinstance(shape, Circle):
        return replace(shape, radius=max(MIN_DIMENSION, shape.radius * factor))
    if isinstance(shape, Rectangle):
        return replace(
            shape,
            width=max(MIN_DIMENSION, shape.width * factor),
            height=max(MIN_DIMENSION, shape.height * factor),
        )
    if isinstance(shape, Triangle):
        factor = _floored_factor(factor, min(triangle_sides(shape.points)))
        center = shape.position
        return triangle_with_points(shape, [scale_point(p, center, factor) for p in shape.points])
    if isinstance(shape, Line):
        factor = _floored_factor(factor, shape.length)
        center = shape.position
        return line_with_points(
            shape,
            scale_point(shape.start_point, center, factor),
            scale_point(shape.end_point, center, factor),
        )
    return shape


def rotated(shape: Shape, angle: float) -> Shape:
    """Rotate to the absolute ``angle`` in degrees.

    Lines have their endpoints turned about the midpoint; other kinds only
    record the angle for rendering.
    """
    if not math.isfinite(angle):
        return shape
    if isinstance(shape, Line):
        delta = angle - shape.rotation
        center = shape.position
        start = rotate_point_degrees(shape.start_point, center, delta)
        end = rotate_point_degrees(shape.end_point, center, delta)
        return replace(line_with_points(shape, start, end), length=shape.length)
    return replace(shape, rotation=normalize_angle_degrees(float(angle)))


def extend_line(line: Line, amount: float, from_start: bool = False) -> Line:
    """Grow ``line`` by ``amount`` pixels past one of its ends along its direction."""
    angle = calculate_angle_radians(line.start_point, line.end_point)
    ux, uy = math.cos(angle), math.sin(angle)
    if from_start:
        start = translate_point(line.start_point, -ux * amount, -uy * amount)
        return line_with_points(line, start, line.end_point)
    end = translate_point(line.end_point, ux * amount, uy * amount)
    return line_with_points(line, line.start_point, end)


def line_slope(line: Line) -> float:
    """dy/dx of the line; ``inf`` when it is vertical."""
    dx = line.end_point.x - line.start_point.x
    if abs(dx) < 1e-4:
        return math.inf
    return (line.end_point.y - line.start_point.y) / dx


# ---------------------------------------------------------------------------
# Collection operations


def move_shape(shapes: Sequence[Shape], shape_id: str, dx: float, dy: float) -> ShapeList:
    return _apply(shapes, shape_id, lambda shape: moved(shape, dx, dy))


def resize_shape(shapes: Sequence[Shape], shape_id: str, factor: float) -> ShapeList:
    return _apply(shapes, shape_id, lambda shape: resized(shape, factor))


def rotate_shape(shapes: Sequence[Shape], shape_id: str, angle: float) -> ShapeList:
    return _apply(shapes, shape_id, lambda shape: rotated(shape, angle))


def select_shape(shapes: Sequence[Shape], shape_id: Optional[str]) -> ShapeList:
    """Select ``shape_id`` exclusively. ``None`` or an unknown id clears the selection."""
    result: ShapeList = []
    for shape in shapes:
        wanted = shape_id is not None and shape.id == shape_id
        result.append(shape if shape.selected == wanted else replace(shape, selected=wanted))
    return result


def delete_shape(shapes: Sequence[Shape], shape_id: str) -> ShapeList:
    return [shape for shape in shapes if shape.id != shape_id]


def clear_shapes(shapes: Sequence[Shape]) -> ShapeList:
    if shapes:
        logger.debug("Clearing %d shapes", len(shapes))
    return []


def get_selected_shape(shapes: Sequence[Shape]) -> Optional[Shape]:
    for shape in shapes:
        if shape.selected:
            return shape
    return None


__all__ = [
    "ShapeList",
    "moved",
    "resized",
    "rotated",
    "extend_line",
    "line_slope",
    "move_shape",
    "resize_shape",
    "rotate_shape",
    "select_shape",
    "delete_shape",
    "clear_shapes",
    "get_selected_shape",
]
