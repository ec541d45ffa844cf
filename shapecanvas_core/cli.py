"""Command line interface for the shape canvas engine."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterable

from .config import Calibration, load_calibration
from .errors import ShapeCanvasError, ShapeDataError
from .factory import create_shape
from .formulas import get_formula, get_formula_explanation
from .inversion import update_shape_from_measurement
from .log import get_logger, setup_logging
from .measurements import compute_measurements, get_shape_measurements
from .shapes import ShapeKind, shape_from_dict, shape_to_dict
from .units import Unit, coerce_unit

logger = get_logger(__name__)


def _read_shape(source: str) -> Dict[str, Any]:
    """Load a shape JSON document from a path, or stdin when ``source`` is ``-``."""
    try:
        if source == "-":
            data = json.load(sys.stdin)
        else:
            with Path(source).open("r", encoding="utf-8") as handle:
                data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ShapeDataError(f"Shape input is not valid JSON: {exc}") from exc
    if isinstance(data, dict) and "shape" in data:
        data = data["shape"]
    if not isinstance(data, dict):
        raise ShapeDataError("Shape input must be a JSON object.")
    return data


def _emit(payload: Any, output: str | None) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", out_path)
        return
    print(text)


def _calibration(args: argparse.Namespace) -> Calibration:
    return load_calibration(args.calibration)


def _cmd_create(args: argparse.Namespace) -> None:
    shape = create_shape(args.kind, (args.x1, args.y1), (args.x2, args.y2))
    _emit(shape_to_dict(shape), args.output)


def _cmd_measure(args: argparse.Namespace) -> None:
    shape = shape_from_dict(_read_shape(args.shape))
    unit = coerce_unit(args.unit)
    if args.raw:
        values: Dict[str, Any] = compute_measurements(shape, unit, _calibration(args))
    else:
        values = get_shape_measurements(shape, unit, _calibration(args))
    _emit({"id": shape.id, "type": shape.type.value, "unit": unit.value, "measurements": values}, None)


def _cmd_update(args: argparse.Namespace) -> None:
    shape = shape_from_dict(_read_shape(args.shape))
    updated = update_shape_from_measurement(shape, args.key, args.value, coerce_unit(args.unit), _calibration(args))
    if updated is shape:
        logger.warning("Measurement '%s' left the %s unchanged", args.key, shape.type.value)
    _emit(shape_to_dict(updated), args.output)


def _cmd_formula(args: argparse.Namespace) -> None:
    formula = get_formula(args.kind, args.key)
    if not formula:
        raise ValueError(f"No formula for {args.kind} '{args.key}'")
    print(formula)
    explanation = get_formula_explanation(args.kind, args.key)
    if explanation:
        print(explanation)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapecanvas",
        description="Create, measure and edit canvas shapes from the command line",
    )
    parser.add_argument("--calibration", help="Path to a calibration JSON file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    kinds = [kind.value for kind in ShapeKind]
    units = [unit.value for unit in Unit]

    creator = sub.add_parser("create", help="Create a shape from a drag gesture")
    creator.add_argument("kind", choices=kinds, help="Shape kind")
    creator.add_argument("x1", type=float, help="Drag start x (pixels)")
    creator.add_argument("y1", type=float, help="Drag start y (pixels)")
    creator.add_argument("x2", type=float, help="Drag end x (pixels)")
    creator.add_argument("y2", type=float, help="Drag end y (pixels)")
    creator.add_argument("--output", help="Write the shape JSON to this path")
    creator.set_defaults(func=_cmd_create)

    measurer = sub.add_parser("measure", help="Print the measurements of a shape")
    measurer.add_argument("shape", help="Shape JSON file, or '-' for stdin")
    measurer.add_argument("--unit", default=Unit.CM.value, choices=units, help="Display unit")
    measurer.add_argument("--raw", action="store_true", help="Print unrounded floats")
    measurer.set_defaults(func=_cmd_measure)

    updater = sub.add_parser("update", help="Edit one measurement and print the resulting shape")
    updater.add_argument("shape", help="Shape JSON file, or '-' for stdin")
    updater.add_argument("key", help="Measurement key, e.g. area or side1")
    updater.add_argument("value", help="New value in the chosen unit (degrees for angles)")
    updater.add_argument("--unit", default=Unit.CM.value, choices=units, help="Unit of the value")
    updater.add_argument("--output", help="Write the shape JSON to this path")
    updater.set_defaults(func=_cmd_update)

    formula = sub.add_parser("formula", help="Show the formula behind a measurement")
    formula.add_argument("kind", choices=kinds, help="Shape kind")
    formula.add_argument("key", help="Measurement key")
    formula.set_defaults(func=_cmd_formula)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level)
        args.func(args)
    except (ShapeCanvasError, ValueError, OSError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
