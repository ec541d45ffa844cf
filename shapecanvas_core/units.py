"""Measurement units and pixel conversions."""
from __future__ import annotations

from enum import Enum

from .errors import UnknownUnitError


class Unit(str, Enum):
    CM = "cm"
    IN = "in"


CM_PER_INCH = 2.54


def coerce_unit(value: str | Unit) -> Unit:
    """Return ``value`` as a :class:`Unit`, accepting the enum or its string value."""
    if isinstance(value, Unit):
        return value
    try:
        return Unit(str(value).strip().lower())
    except ValueError as exc:
        raise UnknownUnitError(f"Unsupported unit '{value}'") from exc


def pixels_to_unit(pixels: float, pixels_per_unit: float) -> float:
    return float(pixels) / pixels_per_unit


def unit_to_pixels(value: float, pixels_per_unit: float) -> float:
    return float(value) * pixels_per_unit


def area_pixels_to_unit(area_px: float, pixels_per_unit: float) -> float:
    """Areas scale with the square of the linear factor."""
    return float(area_px) / (pixels_per_unit * pixels_per_unit)


def area_unit_to_pixels(area: float, pixels_per_unit: float) -> float:
    return float(area) * pixels_per_unit * pixels_per_unit


def cm_to_inches(cm: float) -> float:
    return float(cm) / CM_PER_INCH


def inches_to_cm(inches: float) -> float:
    return float(inches) * CM_PER_INCH


__all__ = [
    "Unit",
    "CM_PER_INCH",
    "coerce_unit",
    "pixels_to_unit",
    "unit_to_pixels",
    "area_pixels_to_unit",
    "area_unit_to_pixels",
    "cm_to_inches",
    "inches_to_cm",
]
