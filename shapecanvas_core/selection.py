"""Read-only queries: hit testing, centres, bounds, area and perimeter."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence

import numpy as np

from .geometry import (
    Point,
    PointLike,
    as_point,
    distance,
    point_segment_distance,
    polygon_area,
    rotate_point_degrees,
)
from .shapes import Circle, Line, Rectangle, Shape, Triangle, triangle_sides

LINE_HIT_TOLERANCE = 5.0


class Bounds(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def _point_in_triangle(point: Point, a: Point, b: Point, c: Point) -> bool:
    def sign(p1: Point, p2: Point, p3: Point) -> float:
        return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)

    d1 = sign(point, a, b)
    d2 = sign(point, b, c)
    d3 = sign(point, c, a)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def _outline(shape: Shape) -> Sequence[Point]:
    """Corner points of a rectangle or triangle with ``rotation`` applied about its centre."""
    if isinstance(shape, Rectangle):
        x, y = shape.position
        pts = [Point(x, y), Point(x + shape.width, y), Point(x + shape.width, y + shape.height), Point(x, y + shape.height)]
    else:
        pts = list(shape.points)
    if not shape.rotation:
        return pts
    center = get_shape_center(shape)
    return [rotate_point_degrees(p, center, shape.rotation) for p in pts]


def is_point_in_shape(shape: Shape, point: PointLike) -> bool:
    """True when ``point`` lies inside (or on the edge of) ``shape``.

    Rectangles and triangles honour their ``rotation`` about the shape centre.
    """
    pt = as_point(point)
    if isinstance(shape, Circle):
        return distance(pt, shape.position) <= shape.radius
    if isinstance(shape, (Rectangle, Triangle)) and shape.rotation:
        pt = rotate_point_degrees(pt, get_shape_center(shape), -shape.rotation)
    if isinstance(shape, Rectangle):
        x, y = shape.position
        return x <= pt.x <= x + shape.width and y <= pt.y <= y + shape.height
    if isinstance(shape, Triangle):
        return _point_in_triangle(pt, *shape.points)
    if isinstance(shape, Line):
        return point_segment_distance(pt, shape.start_point, shape.end_point) <= LINE_HIT_TOLERANCE
    return False


def get_shape_center(shape: Shape) -> Point:
    if isinstance(shape, Rectangle):
        return Point(shape.position.x + shape.width / 2.0, shape.position.y + shape.height / 2.0)
    return shape.position


def get_shape_bounds(shape: Shape) -> Bounds:
    """Axis-aligned bounds of the shape as drawn, rotation included."""
    if isinstance(shape, Circle):
        cx, cy = shape.position
        r = shape.radius
        return Bounds(cx - r, cy - r, cx + r, cy + r)
    if isinstance(shape, (Rectangle, Triangle)):
        pts = _outline(shape)
    else:
        pts = (shape.start_point, shape.end_point)
    arr = np.asarray(pts, dtype=float)
    lo = arr.min(axis=0)
    hi = arr.max(axis=0)
    return Bounds(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def calculate_shape_area(shape: Shape) -> float:
    """Area in square pixels; lines have none."""
    if isinstance(shape, Circle):
        return math.pi * shape.radius ** 2
    if isinstance(shape, Rectangle):
        return shape.width * shape.height
    if isinstance(shape, Triangle):
        return polygon_area(shape.points)
    return 0.0


def calculate_shape_perimeter(shape: Shape) -> float:
    """Perimeter in pixels; for a line this is its length."""
    if isinstance(shape, Circle):
        return 2.0 * math.pi * shape.radius
    if isinstance(shape, Rectangle):
        return 2.0 * (shape.width + shape.height)
    if isinstance(shape, Triangle):
        return sum(triangle_sides(shape.points))
    if isinstance(shape, Line):
        return shape.length
    return 0.0


def find_shape_at(shapes: Sequence[Shape], point: PointLike) -> Optional[Shape]:
    """Topmost shape under ``point``; later shapes are drawn on top."""
    for shape in reversed(shapes):
        if is_point_in_shape(shape, point):
            return shape
    return None


__all__ = [
    "LINE_HIT_TOLERANCE",
    "Bounds",
    "is_point_in_shape",
    "get_shape_center",
    "get_shape_bounds",
    "calculate_shape_area",
    "calculate_shape_perimeter",
    "find_shape_at",
]
