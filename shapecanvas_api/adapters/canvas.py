"""In-memory canvas store wired to the shapecanvas_core operations."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence
from uuid import uuid4

from shapecanvas_core import selection, transforms
from shapecanvas_core.config import Calibration, load_calibration
from shapecanvas_core.factory import create_shape
from shapecanvas_core.inversion import editable_keys, update_shape_from_measurement
from shapecanvas_core.log import get_logger
from shapecanvas_core.measurements import compute_measurements, get_shape_measurements
from shapecanvas_core.shapes import Shape, shape_to_dict
from shapecanvas_core.units import Unit, coerce_unit

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Canvas:
    """A drawing session: shapes in z-order plus the display unit."""

    id: str
    name: str
    unit: Unit
    created_at: datetime
    updated_at: datetime
    shapes: List[Shape] = field(default_factory=list)


class CanvasStore:
    """Simple store backing the canvas routes."""

    def __init__(self, calibration: Calibration | None = None) -> None:
        self._items: Dict[str, Canvas] = {}
        self.calibration = calibration or Calibration()

    def create(self, name: str, unit: Unit) -> Canvas:
        now = _now()
        canvas = Canvas(id=uuid4().hex, name=name, unit=unit, created_at=now, updated_at=now)
        self._items[canvas.id] = canvas
        return canvas

    def list(self) -> List[Canvas]:
        return list(self._items.values())

    def get(self, canvas_id: str) -> Optional[Canvas]:
        return self._items.get(canvas_id)

    def require(self, canvas_id: str) -> Canvas:
        canvas = self._items.get(canvas_id)
        if canvas is None:
            raise KeyError(canvas_id)
        return canvas

    def delete(self, canvas_id: str) -> bool:
        return self._items.pop(canvas_id, None) is not None

    def apply(self, canvas_id: str, op: Callable[[Sequence[Shape]], List[Shape]]) -> Canvas:
        """Replace the canvas shapes with ``op(shapes)``."""
        canvas = self.require(canvas_id)
        updated = op(canvas.shapes)
        if updated != canvas.shapes:
            canvas.updated_at = _now()
        canvas.shapes = updated
        return canvas

    def shape(self, canvas_id: str, shape_id: str) -> Shape:
        for shape in self.require(canvas_id).shapes:
            if shape.id == shape_id:
                return shape
        raise KeyError(shape_id)


_store = CanvasStore(load_calibration())


def get_store() -> CanvasStore:
    return _store


def reset_store(calibration: Calibration | None = None) -> CanvasStore:
    """Start over with an empty store (used by tests and on reconfiguration)."""
    global _store
    _store = CanvasStore(calibration or load_calibration())
    return _store


def create_canvas(payload: Dict[str, Any]) -> Dict[str, Any]:
    canvas = _store.create(name=payload.get("name") or "Untitled", unit=coerce_unit(payload.get("unit") or "cm"))
    logger.info("Created canvas %s", canvas.id)
    return serialize_canvas(canvas)


def list_canvases() -> List[Dict[str, Any]]:
    return [serialize_canvas(item) for item in _store.list()]


def get_canvas(canvas_id: str) -> Dict[str, Any]:
    return serialize_canvas(_store.require(canvas_id))


def delete_canvas(canvas_id: str) -> None:
    if not _store.delete(canvas_id):
        raise KeyError(canvas_id)


def add_shape(canvas_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    _store.require(canvas_id)
    shape = create_shape(payload["kind"], payload["start"], payload["end"])
    _store.apply(canvas_id, lambda shapes: [*shapes, shape])
    return shape_to_dict(shape)


def move_shape(canvas_id: str, shape_id: str, dx: float, dy: float) -> Dict[str, Any]:
    canvas = _store.apply(canvas_id, lambda shapes: transforms.move_shape(shapes, shape_id, dx, dy))
    return serialize_canvas(canvas)


def resize_shape(canvas_id: str, shape_id: str, factor: float) -> Dict[str, Any]:
    canvas = _store.apply(canvas_id, lambda shapes: transforms.resize_shape(shapes, shape_id, factor))
    return serialize_canvas(canvas)


def rotate_shape(canvas_id: str, shape_id: str, angle: float) -> Dict[str, Any]:
    canvas = _store.apply(canvas_id, lambda shapes: transforms.rotate_shape(shapes, shape_id, angle))
    return serialize_canvas(canvas)


def select_shape(canvas_id: str, shape_id: Optional[str]) -> Dict[str, Any]:
    canvas = _store.apply(canvas_id, lambda shapes: transforms.select_shape(shapes, shape_id))
    return serialize_canvas(canvas)


def delete_shape(canvas_id: str, shape_id: str) -> Dict[str, Any]:
    canvas = _store.apply(canvas_id, lambda shapes: transforms.delete_shape(shapes, shape_id))
    return serialize_canvas(canvas)


def clear_shapes(canvas_id: str) -> Dict[str, Any]:
    return serialize_canvas(_store.apply(canvas_id, transforms.clear_shapes))


def _resolve_unit(canvas_id: str, unit: Optional[str]) -> Unit:
    if unit:
        return coerce_unit(unit)
    return _store.require(canvas_id).unit


def get_measurements(canvas_id: str, shape_id: str, unit: Optional[str] = None) -> Dict[str, Any]:
    shape = _store.shape(canvas_id, shape_id)
    resolved = _resolve_unit(canvas_id, unit)
    return serialize_measurements(shape, resolved, _store.calibration)


def update_measurement(
    canvas_id: str,
    shape_id: str,
    key: str,
    value: float | str,
    unit: Optional[str] = None,
) -> Dict[str, Any]:
    shape = _store.shape(canvas_id, shape_id)
    if key not in editable_keys(shape.type):
        raise ValueError(f"Measurement '{key}' cannot be edited on a {shape.type.value}")
    resolved = _resolve_unit(canvas_id, unit)
    updated = update_shape_from_measurement(shape, key, value, resolved, _store.calibration)
    _store.apply(canvas_id, lambda shapes: [updated if item.id == shape_id else item for item in shapes])
    result = serialize_measurements(updated, resolved, _store.calibration)
    result["changed"] = updated is not shape
    return result


def hit_test(canvas_id: str, x: float, y: float) -> Optional[Dict[str, Any]]:
    shape = selection.find_shape_at(_store.require(canvas_id).shapes, (x, y))
    return shape_to_dict(shape) if shape is not None else None


def serialize_measurements(shape: Shape, unit: Unit, calibration: Calibration) -> Dict[str, Any]:
    return {
        "shape": shape_to_dict(shape),
        "unit": unit.value,
        "measurements": get_shape_measurements(shape, unit, calibration),
        "values": compute_measurements(shape, unit, calibration),
        "editable": editable_keys(shape.type),
    }


def _timestamp(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def serialize_canvas(canvas: Canvas) -> Dict[str, Any]:
    return {
        "id": canvas.id,
        "name": canvas.name,
        "unit": canvas.unit.value,
        "created_at": _timestamp(canvas.created_at),
        "updated_at": _timestamp(canvas.updated_at),
        "shapes": [shape_to_dict(shape) for shape in canvas.shapes],
    }
