"""Shape model: one frozen dataclass per kind, tagged by ``type``."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Union
from uuid import uuid4

from .errors import ShapeDataError, UnknownShapeKindError
from .geometry import (
    Point,
    PointLike,
    as_point,
    calculate_angle_degrees,
    centroid,
    distance,
    midpoint,
    polygon_area,
)

DEFAULT_FILL = "rgba(190, 227, 219, 0.5)"
DEFAULT_STROKE = "#555B6E"
DEFAULT_STROKE_WIDTH = 2.0
MIN_DIMENSION = 1.0


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"
    LINE = "line"


def coerce_kind(value: str | ShapeKind) -> ShapeKind:
    if isinstance(value, ShapeKind):
        return value
    try:
        return ShapeKind(str(value).strip().lower())
    except ValueError as exc:
        raise UnknownShapeKindError(f"Unknown shape kind '{value}'") from exc


def new_shape_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, kw_only=True)
class BaseShape:
    """Fields shared by every kind. ``rotation`` is in degrees."""

    type: ClassVar[ShapeKind]

    id: str
    position: Point
    rotation: float = 0.0
    selected: bool = False
    fill: str = DEFAULT_FILL
    stroke: str = DEFAULT_STROKE
    stroke_width: float = DEFAULT_STROKE_WIDTH


@dataclass(frozen=True, kw_only=True)
class Circle(BaseShape):
    """``position`` is the centre."""

    type: ClassVar[ShapeKind] = ShapeKind.CIRCLE
    radius: float


@dataclass(frozen=True, kw_only=True)
class Rectangle(BaseShape):
    """``position`` is the top-left (minimum) corner."""

    type: ClassVar[ShapeKind] = ShapeKind.RECTANGLE
    width: float
    height: float


@dataclass(frozen=True, kw_only=True)
class Triangle(BaseShape):
    """``position`` is the centroid of ``points``.

    ``original_dimensions`` holds the side lengths at creation and serves as the
    base for relative side edits once a side has collapsed.
    """

    type: ClassVar[ShapeKind] = ShapeKind.TRIANGLE
    points: Tuple[Point, Point, Point]
    original_dimensions: Optional[Tuple[float, float, float]] = None


@dataclass(frozen=True, kw_only=True)
class Line(BaseShape):
    """``position`` is the midpoint, ``rotation`` the direction and ``length`` a cache."""

    type: ClassVar[ShapeKind] = ShapeKind.LINE
    start_point: Point
    end_point: Point
    length: float


Shape = Union[Circle, Rectangle, Triangle, Line]


def triangle_sides(points: Sequence[PointLike]) -> Tuple[float, float, float]:
    """Side lengths ``|p0p1|``, ``|p1p2|``, ``|p2p0|``."""
    p0, p1, p2 = points
    return (distance(p0, p1), distance(p1, p2), distance(p2, p0))


def make_triangle(points: Sequence[PointLike], **fields: Any) -> Triangle:
    """Build a triangle whose ``position`` is derived from its points."""
    pts = tuple(as_point(p) for p in points)
    if len(pts) != 3:
        raise ShapeDataError(f"Triangle needs exactly 3 points, got {len(pts)}")
    fields.setdefault("original_dimensions", triangle_sides(pts))
    fields.setdefault("id", new_shape_id())
    return Triangle(points=pts, position=centroid(pts), **fields)


def make_line(start: PointLike, end: PointLike, **fields: Any) -> Line:
    """Build a line with length, midpoint and direction derived from its endpoints."""
    start_pt = as_point(start)
    end_pt = as_point(end)
    fields.setdefault("id", new_shape_id())
    return Line(
        start_point=start_pt,
        end_point=end_pt,
        length=distance(start_pt, end_pt),
        position=midpoint(start_pt, end_pt),
        rotation=calculate_angle_degrees(start_pt, end_pt),
        **fields,
    )


def triangle_with_points(triangle: Triangle, points: Sequence[PointLike]) -> Triangle:
    """Copy of ``triangle`` with new vertices and a matching centroid."""
    pts = tuple(as_point(p) for p in points)
    return replace(triangle, points=pts, position=centroid(pts))


def line_with_points(line: Line, start: PointLike, end: PointLike) -> Line:
    """Copy of ``line`` with new endpoints; derived fields follow."""
    start_pt = as_point(start)
    end_pt = as_point(end)
    return replace(
        line,
        start_point=start_pt,
        end_point=end_pt,
        length=distance(start_pt, end_pt),
        position=midpoint(start_pt, end_pt),
        rotation=calculate_angle_degrees(start_pt, end_pt),
    )


# ---------------------------------------------------------------------------
# Serialisation


def _point_json(point: Point) -> list:
    return [point.x, point.y]


def shape_to_dict(shape: Shape) -> Dict[str, Any]:
    """Return a JSON-ready representation of ``shape``."""
    data: Dict[str, Any] = {
        "id": shape.id,
        "type": shape.type.value,
        "position": _point_json(shape.position),
        "rotation": shape.rotation,
        "selected": shape.selected,
        "fill": shape.fill,
        "stroke": shape.stroke,
        "stroke_width": shape.stroke_width,
    }
    if isinstance(shape, Circle):
        data["radius"] = shape.radius
    elif isinstance(shape, Rectangle):
        data["width"] = shape.width
        data["height"] = shape.height
    elif isinstance(shape, Triangle):
        data["points"] = [_point_json(p) for p in shape.points]
        if shape.original_dimensions is not None:
            data["original_dimensions"] = list(shape.original_dimensions)
    elif isinstance(shape, Line):
        data["start_point"] = _point_json(shape.start_point)
        data["end_point"] = _point_json(shape.end_point)
        data["length"] = shape.length
    return data


def _lookup(data: Mapping[str, Any], name: str, alias: str | None = None, default: Any = ...) -> Any:
    if name in data:
        return data[name]
    if alias is not None and alias in data:
        return data[alias]
    if default is ...:
        raise ShapeDataError(f"Missing field '{name}'")
    return default


def _number(value: Any, name: str, positive: bool = False) -> float:
    if isinstance(value, bool):
        raise ShapeDataError(f"Field '{name}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ShapeDataError(f"Field '{name}' must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ShapeDataError(f"Field '{name}' must be finite")
    if positive and number <= 0.0:
        raise ShapeDataError(f"Field '{name}' must be positive, got {number}")
    return number


def _point(value: Any, name: str) -> Point:
    try:
        pt = as_point(value)
    except (TypeError, ValueError, KeyError, IndexError) as exc:
        raise ShapeDataError(f"Field '{name}' must be an [x, y] pair") from exc
    return Point(_number(pt.x, name), _number(pt.y, name))


def shape_from_dict(data: Mapping[str, Any]) -> Shape:
    """Rebuild a shape from :func:`shape_to_dict` output.

    camelCase keys (``startPoint``, ``strokeWidth`` ...) are accepted as well.
    Derived fields of triangles and lines are recomputed rather than trusted.
    """
    if not isinstance(data, Mapping):
        raise ShapeDataError("Shape payload must be an object")
    kind = coerce_kind(_lookup(data, "type"))
    common: Dict[str, Any] = {
        "id": str(_lookup(data, "id", default=None) or new_shape_id()),
        "selected": bool(_lookup(data, "selected", default=False)),
        "fill": str(_lookup(data, "fill", default=DEFAULT_FILL)),
        "stroke": str(_lookup(data, "stroke", default=DEFAULT_STROKE)),
        "stroke_width": _number(
            _lookup(data, "stroke_width", "strokeWidth", default=DEFAULT_STROKE_WIDTH), "stroke_width"
        ),
    }

    if kind is ShapeKind.LINE:
        return make_line(
            _point(_lookup(data, "start_point", "startPoint"), "start_point"),
            _point(_lookup(data, "end_point", "endPoint"), "end_point"),
            **common,
        )

    common["rotation"] = _number(_lookup(data, "rotation", default=0.0), "rotation")

    if kind is ShapeKind.TRIANGLE:
        raw_points = _lookup(data, "points")
        if not isinstance(raw_points, (list, tuple)) or len(raw_points) != 3:
            raise ShapeDataError("Field 'points' must hold exactly 3 points")
        points = [_point(p, "points") for p in raw_points]
        if polygon_area(points) < 1e-9:
            raise ShapeDataError("Triangle points must not be collinear")
        original = _lookup(data, "original_dimensions", "originalDimensions", default=None)
        if original is not None:
            if not isinstance(original, (list, tuple)) or len(original) != 3:
                raise ShapeDataError("Field 'original_dimensions' must hold 3 side lengths")
            common["original_dimensions"] = tuple(
                _number(v, "original_dimensions", positive=True) for v in original
            )
        return make_triangle(points, **common)

    position = _point(_lookup(data, "position"), "position")
    if kind is ShapeKind.CIRCLE:
        return Circle(position=position, radius=_number(_lookup(data, "radius"), "radius", positive=True), **common)
    return Rectangle(
        position=position,
        width=_number(_lookup(data, "width"), "width", positive=True),
        height=_number(_lookup(data, "height"), "height", positive=True),
        **common,
    )


__all__ = [
    "DEFAULT_FILL",
    "DEFAULT_STROKE",
    "DEFAULT_STROKE_WIDTH",
    "MIN_DIMENSION",
    "ShapeKind",
    "coerce_kind",
    "new_shape_id",
    "BaseShape",
    "Circle",
    "Rectangle",
    "Triangle",
    "Line",
    "Shape",
    "triangle_sides",
    "make_triangle",
    "make_line",
    "triangle_with_points",
    "line_with_points",
    "shape_to_dict",
    "shape_from_dict",
]
