"""Pixels-per-unit calibration loaded from JSON and the environment."""
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from .errors import CalibrationError
from .log import get_logger
from .units import CM_PER_INCH, Unit, coerce_unit

logger = get_logger(__name__)

DEFAULT_PIXELS_PER_CM = 60.0
DEFAULT_PIXELS_PER_INCH = 152.4

CALIBRATION_PATH_ENV = "SHAPECANVAS_CALIBRATION"
PX_PER_CM_ENV = "SHAPECANVAS_PX_PER_CM"
PX_PER_IN_ENV = "SHAPECANVAS_PX_PER_IN"
DEFAULT_CALIBRATION_PATH = Path(__file__).with_name("calibration.json")


def _positive(name: str, value: object) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise CalibrationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number) or number <= 0.0:
        raise CalibrationError(f"{name} must be positive, got {value!r}")
    return number


@dataclass(frozen=True)
class Calibration:
    """How many canvas pixels make up one physical unit."""

    pixels_per_cm: float = DEFAULT_PIXELS_PER_CM
    pixels_per_inch: float = DEFAULT_PIXELS_PER_INCH

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels_per_cm", _positive("pixels_per_cm", self.pixels_per_cm))
        object.__setattr__(self, "pixels_per_inch", _positive("pixels_per_inch", self.pixels_per_inch))

    def pixels_per_unit(self, unit: str | Unit) -> float:
        if coerce_unit(unit) is Unit.CM:
            return self.pixels_per_cm
        return self.pixels_per_inch

    __call__ = pixels_per_unit

    def to_json(self) -> dict:
        return {"pixels_per_cm": self.pixels_per_cm, "pixels_per_inch": self.pixels_per_inch}

    @classmethod
    def from_json(cls, data: dict) -> "Calibration":
        if not isinstance(data, dict):
            raise CalibrationError("Calibration data must be a JSON object")
        return cls(
            pixels_per_cm=data.get("pixels_per_cm", DEFAULT_PIXELS_PER_CM),
            pixels_per_inch=data.get("pixels_per_inch", DEFAULT_PIXELS_PER_INCH),
        )


# Anything the measurement functions accept as a pixels-per-unit source.
CalibrationLike = Union[Calibration, float, int, Callable[[Unit], float], None]


def calibration_from_pixels_per_cm(pixels_per_cm: float) -> Calibration:
    """Build a calibration from one measured cm, deriving the inch factor."""
    ppcm = _positive("pixels_per_cm", pixels_per_cm)
    return Calibration(pixels_per_cm=ppcm, pixels_per_inch=ppcm * CM_PER_INCH)


def resolve_pixels_per_unit(calibration: CalibrationLike, unit: str | Unit) -> float:
    """Return the pixels-per-unit factor for ``unit`` from an injected calibration source."""
    unit = coerce_unit(unit)
    if calibration is None:
        return Calibration().pixels_per_unit(unit)
    if isinstance(calibration, Calibration):
        return calibration.pixels_per_unit(unit)
    if callable(calibration):
        return _positive("pixels_per_unit", calibration(unit))
    return _positive("pixels_per_unit", calibration)


def load_calibration(path: str | os.PathLike | None = None) -> Calibration:
    """Read calibration from ``path`` (or the default file) and apply env overrides.

    A missing file yields the defaults. Nothing is ever written back.
    """
    if path is None:
        path = os.getenv(CALIBRATION_PATH_ENV) or DEFAULT_CALIBRATION_PATH
    config_path = Path(path)

    data: dict = {}
    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise CalibrationError(f"Cannot read calibration file '{config_path}': {exc}") from exc
        if not isinstance(data, dict):
            raise CalibrationError(f"Calibration file '{config_path}' must hold a JSON object")
        logger.info("Loaded calibration from %s", config_path)

    env_cm = os.getenv(PX_PER_CM_ENV)
    if env_cm:
        data["pixels_per_cm"] = env_cm
    env_in = os.getenv(PX_PER_IN_ENV)
    if env_in:
        data["pixels_per_inch"] = env_in

    calibration = Calibration.from_json(data)
    logger.debug(
        "Calibration: %.4f px/cm, %.4f px/in", calibration.pixels_per_cm, calibration.pixels_per_inch
    )
    return calibration


__all__ = [
    "DEFAULT_PIXELS_PER_CM",
    "DEFAULT_PIXELS_PER_INCH",
    "Calibration",
    "CalibrationLike",
    "calibration_from_pixels_per_cm",
    "resolve_pixels_per_unit",
    "load_calibration",
]
