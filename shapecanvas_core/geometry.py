"""Geometry primitives for the shape canvas.

All coordinates are canvas pixels with the y axis pointing down. Angles are
degrees unless a function name says radians.
"""
from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Sequence

import numpy as np

EPS = 1e-9


class Point(NamedTuple):
    x: float
    y: float


PointLike = Sequence[float]


def as_point(value: PointLike) -> Point:
    """Coerce any ``(x, y)`` sequence (or mapping with x/y keys) into a :class:`Point`."""
    if isinstance(value, Point):
        return value
    if isinstance(value, dict):
        return Point(float(value["x"]), float(value["y"]))
    return Point(float(value[0]), float(value[1]))


def distance(p1: PointLike, p2: PointLike) -> float:
    """Return the Euclidean distance between two points."""
    return float(math.hypot(float(p2[0]) - float(p1[0]), float(p2[1]) - float(p1[1])))


def midpoint(p1: PointLike, p2: PointLike) -> Point:
    return Point((float(p1[0]) + float(p2[0])) / 2.0, (float(p1[1]) + float(p2[1])) / 2.0)


def translate_point(point: PointLike, dx: float, dy: float) -> Point:
    return Point(float(point[0]) + dx, float(point[1]) + dy)


def scale_point(point: PointLike, center: PointLike, factor: float) -> Point:
    """Scale ``point`` away from (or toward) ``center`` by ``factor``."""
    cx, cy = float(center[0]), float(center[1])
    return Point(cx + (float(point[0]) - cx) * factor, cy + (float(point[1]) - cy) * factor)


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def normalize_angle_degrees(angle: float) -> float:
    """Map ``angle`` into ``(-180, 180]``; 180 stays 180 and 181 becomes -179."""
    reduced = math.fmod(angle, 360.0)
    if reduced > 180.0:
        reduced -= 360.0
    elif reduced <= -180.0:
        reduced += 360.0
    return reduced


def normalize_angle_radians(angle: float) -> float:
    """Map ``angle`` into ``(-pi, pi]``."""
    full = 2.0 * math.pi
    reduced = math.fmod(angle, full)
    if reduced > math.pi:
        reduced -= full
    elif reduced <= -math.pi:
        reduced += full
    return reduced


def rotate_point_radians(point: PointLike, center: PointLike, angle: float) -> Point:
    """Rotate ``point`` about ``center`` by ``angle`` radians.

    With y pointing down a positive angle turns +x toward +y, so (10, 0)
    rotated by pi/2 about the origin lands on (0, 10).
    """
    cx, cy = float(center[0]), float(center[1])
    dx = float(point[0]) - cx
    dy = float(point[1]) - cy
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Point(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)


def rotate_point_degrees(point: PointLike, center: PointLike, angle: float) -> Point:
    return rotate_point_radians(point, center, degrees_to_radians(angle))


def calculate_angle_radians(start: PointLike, end: PointLike) -> float:
    """Direction of ``start -> end`` in ``(-pi, pi]``."""
    return math.atan2(float(end[1]) - float(start[1]), float(end[0]) - float(start[0]))


def calculate_angle_degrees(start: PointLike, end: PointLike) -> float:
    return radians_to_degrees(calculate_angle_radians(start, end))


def to_clockwise_angle(angle: float) -> float:
    """Flip a mathematical (counterclockwise) angle to the clockwise UI convention."""
    if math.fmod(abs(angle), 360.0) == 0.0:
        return 0.0
    return -angle


def to_counterclockwise_angle(angle: float) -> float:
    if math.fmod(abs(angle), 360.0) == 0.0:
        return 0.0
    return -angle


def centroid(points: Iterable[PointLike]) -> Point:
    """Arithmetic mean of the vertices."""
    arr = np.asarray([(float(p[0]), float(p[1])) for p in points], dtype=float)
    if arr.size == 0:
        raise ValueError("centroid() needs at least one point")
    cx, cy = arr.mean(axis=0)
    return Point(float(cx), float(cy))


def polygon_area(points: Iterable[PointLike]) -> float:
    """Return the absolute area spanned by a closed polygon (shoelace formula)."""
    arr = np.asarray([(float(p[0]), float(p[1])) for p in points], dtype=float)
    if arr.shape[0] < 3:
        return 0.0
    x = arr[:, 0]
    y = arr[:, 1]
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def project_point_to_segment(p: PointLike, a: PointLike, b: PointLike) -> tuple[Point, float]:
    """Closest point on segment ``ab`` to ``p`` and its parameter ``t`` in [0, 1]."""
    ax, ay = float(a[0]), float(a[1])
    abx = float(b[0]) - ax
    aby = float(b[1]) - ay
    ab2 = abx * abx + aby * aby
    if ab2 < EPS:
        return Point(ax, ay), 0.0
    t = ((float(p[0]) - ax) * abx + (float(p[1]) - ay) * aby) / ab2
    t = max(0.0, min(1.0, t))
    return Point(ax + abx * t, ay + aby * t), t


def point_segment_distance(p: PointLike, a: PointLike, b: PointLike) -> float:
    closest, _ = project_point_to_segment(p, a, b)
    return distance(p, closest)


def interior_angle(vertex: PointLike, p1: PointLike, p2: PointLike) -> float:
    """Angle at ``vertex`` between the rays to ``p1`` and ``p2``, in degrees [0, 180]."""
    a1 = calculate_angle_radians(vertex, p1)
    a2 = calculate_angle_radians(vertex, p2)
    return abs(radians_to_degrees(normalize_angle_radians(a2 - a1)))


__all__ = [
    "EPS",
    "Point",
    "PointLike",
    "as_point",
    "distance",
    "midpoint",
    "translate_point",
    "scale_point",
    "degrees_to_radians",
    "radians_to_degrees",
    "normalize_angle_degrees",
    "normalize_angle_radians",
    "rotate_point_radians",
    "rotate_point_degrees",
    "calculate_angle_radians",
    "calculate_angle_degrees",
    "to_clockwise_angle",
    "to_counterclockwise_angle",
    "centroid",
    "polygon_area",
    "project_point_to_segment",
    "point_segment_distance",
    "interior_angle",
]
