"""Formula templates (LaTeX) and short explanations for each measurement."""
from __future__ import annotations

from typing import Dict

from .shapes import ShapeKind

FORMULAS: Dict[ShapeKind, Dict[str, str]] = {
    ShapeKind.CIRCLE: {
        "radius": r"\text{radius} = r",
        "diameter": r"\text{diameter} = 2r",
        "area": r"\text{area} = \pi r^2",
        "circumference": r"\text{circumference} = 2\pi r",
    },
    ShapeKind.RECTANGLE: {
        "width": r"\text{width} = w",
        "height": r"\text{height} = h",
        "area": r"\text{area} = w \times h",
        "perimeter": r"\text{perimeter} = 2(w + h)",
        "diagonal": r"\text{diagonal} = \sqrt{w^2 + h^2}",
    },
    ShapeKind.TRIANGLE: {
        "side1": r"\text{side1} = a",
        "side2": r"\text{side2} = b",
        "side3": r"\text{side3} = c",
        "area": r"\text{area} = \frac{1}{2} \times \text{base} \times \text{height}",
        "perimeter": r"\text{perimeter} = a + b + c",
        "height": r"\text{height} = \frac{2 \times \text{area}}{\text{base}}",
        "angle1": r"\alpha = \arccos\left(\frac{b^2 + c^2 - a^2}{2bc}\right)",
        "angle2": r"\beta = \arccos\left(\frac{a^2 + c^2 - b^2}{2ac}\right)",
        "angle3": r"\gamma = 180^\circ - \alpha - \beta",
    },
    ShapeKind.LINE: {
        "length": r"\text{length} = \sqrt{(x_2 - x_1)^2 + (y_2 - y_1)^2}",
        "angle": r"\theta = \operatorname{atan2}(y_2 - y_1, x_2 - x_1)",
    },
}

EXPLANATIONS: Dict[ShapeKind, Dict[str, str]] = {
    ShapeKind.CIRCLE: {
        "radius": "The distance from the center to the edge of the circle.",
        "diameter": "The distance across the circle through the center: $d = 2r$.",
        "area": r"The space inside the circle: $A = \pi r^2$.",
        "circumference": r"The distance around the circle: $C = 2\pi r$.",
    },
    ShapeKind.RECTANGLE: {
        "width": "The horizontal dimension of the rectangle.",
        "height": "The vertical dimension of the rectangle.",
        "area": r"The space inside the rectangle: $A = w \times h$.",
        "perimeter": "The distance around the rectangle: $P = 2(w + h)$.",
        "diagonal": r"The distance between opposite corners: $d = \sqrt{w^2 + h^2}$.",
    },
    ShapeKind.TRIANGLE: {
        "side1": "The length of one of the sides of the triangle.",
        "side2": "The length of one of the sides of the triangle.",
        "side3": "The length of one of the sides of the triangle.",
        "area": (
            "The space inside the triangle. For a general triangle: "
            r"$A = \frac{1}{2} \times \text{base} \times \text{height}$."
        ),
        "perimeter": "The distance around the triangle: $P = a + b + c$ (sum of all sides).",
        "height": "The altitude measured onto the longest side.",
        "angle1": "The interior angle opposite side 1, from the law of cosines.",
        "angle2": "The interior angle opposite side 2, from the law of cosines.",
        "angle3": "The remaining interior angle; the three angles add up to 180 degrees.",
    },
    ShapeKind.LINE: {
        "length": "The distance between the two end points of the line.",
        "angle": "The direction of the line measured from the positive x axis.",
    },
}


def _lookup(table: Dict[ShapeKind, Dict[str, str]], kind: str | ShapeKind, key: str) -> str:
    try:
        entries = table[ShapeKind(kind)]
    except ValueError:
        return ""
    return entries.get(key, "")


def get_formula(kind: str | ShapeKind, key: str) -> str:
    """LaTeX template for ``key`` of ``kind``, or an empty string."""
    return _lookup(FORMULAS, kind, key)


def get_formula_explanation(kind: str | ShapeKind, key: str) -> str:
    return _lookup(EXPLANATIONS, kind, key)


__all__ = ["FORMULAS", "EXPLANATIONS", "get_formula", "get_formula_explanation"]
