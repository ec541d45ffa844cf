"""Typed errors raised by the shapecanvas outer surfaces."""
from __future__ import annotations


class ShapeCanvasError(Exception):
    """Base error for the project."""


class UnknownShapeKindError(ShapeCanvasError, ValueError):
    """Requested shape kind is not one of circle, rectangle, triangle or line."""


class UnknownUnitError(ShapeCanvasError, ValueError):
    """Measurement unit other than ``cm`` or ``in``."""


class ShapeDataError(ShapeCanvasError, ValueError):
    """Serialized shape payload is malformed."""


class CalibrationError(ShapeCanvasError, ValueError):
    """Calibration file or value cannot be used."""


__all__ = [
    "ShapeCanvasError",
    "UnknownShapeKindError",
    "UnknownUnitError",
    "ShapeDataError",
    "CalibrationError",
]
