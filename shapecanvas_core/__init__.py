"""Shape geometry and measurement engine for the shape canvas."""
from __future__ import annotations

from .config import Calibration, load_calibration
from .factory import create_shape
from .geometry import Point
from .inversion import update_shape_from_measurement
from .measurements import compute_measurements, get_shape_measurements
from .selection import find_shape_at, is_point_in_shape
from .shapes import Circle, Line, Rectangle, Shape, ShapeKind, Triangle, shape_from_dict, shape_to_dict
from .transforms import clear_shapes, delete_shape, move_shape, resize_shape, rotate_shape, select_shape
from .units import Unit

__version__ = "0.1.0"

__all__ = [
    "Calibration",
    "load_calibration",
    "create_shape",
    "Point",
    "update_shape_from_measurement",
    "compute_measurements",
    "get_shape_measurements",
    "find_shape_at",
    "is_point_in_shape",
    "Circle",
    "Line",
    "Rectangle",
    "Shape",
    "ShapeKind",
    "Triangle",
    "shape_from_dict",
    "shape_to_dict",
    "clear_shapes",
    "delete_shape",
    "move_shape",
    "resize_shape",
    "rotate_shape",
    "select_shape",
    "Unit",
]
