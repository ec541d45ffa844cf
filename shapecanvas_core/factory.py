"""Create shapes from a pointer drag (start point to end point)."""
from __future__ import annotations

from typing import Optional

from .geometry import EPS, PointLike, as_point, distance
from .log import get_logger
from .shapes import Circle, Rectangle, Shape, ShapeKind, coerce_kind, make_line, make_triangle, new_shape_id

logger = get_logger(__name__)


def _create_circle(start, end, shape_id: str) -> Circle:
    return Circle(id=shape_id, position=start, radius=distance(start, end))


def _create_rectangle(start, end, shape_id: str) -> Rectangle:
    return Rectangle(
        id=shape_id,
        position=as_point((min(start.x, end.x), min(start.y, end.y))),
        width=abs(end.x - start.x),
        height=abs(end.y - start.y),
    )


def _create_triangle(start, end, shape_id: str):
    # Right angle at ``start``: one leg along the drag, the other along its perpendicular.
    dx = end.x - start.x
    dy = end.y - start.y
    if abs(dx) < EPS and abs(dy) < EPS:
        dx, dy = 1.0, 0.0
    p1 = start
    p2 = (start.x + dx, start.y + dy)
    p3 = (start.x - dy, start.y + dx)
    return make_triangle((p1, p2, p3), id=shape_id)


def _create_line(start, end, shape_id: str):
    return make_line(start, end, id=shape_id)


_CREATORS = {
    ShapeKind.CIRCLE: _create_circle,
    ShapeKind.RECTANGLE: _create_rectangle,
    ShapeKind.TRIANGLE: _create_triangle,
    ShapeKind.LINE: _create_line,
}


def create_shape(
    kind: str | ShapeKind,
    start: PointLike,
    end: PointLike,
    *,
    shape_id: Optional[str] = None,
) -> Shape:
    """Create a shape of ``kind`` from a drag gesture.

    - circle: centred on ``start``, radius reaching ``end``
    - rectangle: axis-aligned box spanning both points
    - triangle: right triangle with legs along the drag and its perpendicular
    - line: from ``start`` to ``end``

    Raises :class:`UnknownShapeKindError` for any other kind.
    """
    shape_kind = coerce_kind(kind)
    shape = _CREATORS[shape_kind](as_point(start), as_point(end), shape_id or new_shape_id())
    logger.debug("Created %s %s", shape_kind.value, shape.id)
    return shape


__all__ = ["create_shape"]
