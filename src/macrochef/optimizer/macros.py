"""Macro aggregation and the deviation objective shared by every solver."""

from __future__ import annotations

from typing import Iterable

from macrochef.optimizer.models import IngredientQuantity, MacroTargets, MacroTotals

# Error bounds for the per-macro grades, as fractions of the target
GOOD_TOLERANCE = 0.1
FAIR_TOLERANCE = 0.2


def calculate_macros(solution: Iterable[IngredientQuantity]) -> MacroTotals:
    """Sum the macros contributed by each entry of a solution.

    Each entry contributes ``density_per_100g * quantity / 100``. Calories
    come from the ingredient's declared calorie density, not from the
    macro grams. No rounding is applied.

    Args:
        solution: Ingredient/quantity entries

    Returns:
        MacroTotals (all zero for an empty solution)
    """
    protein = carbs = fats = calories = 0.0
    for entry in solution:
        factor = entry.quantity / 100
        ing = entry.ingredient
        protein += ing.protein_per_100g * factor
        carbs += ing.carbs_per_100g * factor
        fats += ing.fats_per_100g * factor
        calories += ing.calories_per_100g * factor
    return MacroTotals(protein=protein, carbs=carbs, fats=fats, calories=calories)


def deviation(macros: MacroTotals, targets: MacroTargets) -> float:
    """Sum of absolute protein, carbs and fats errors. Zero is a perfect match."""
    return (
        abs(macros.protein - targets.protein)
        + abs(macros.carbs - targets.carbs)
        + abs(macros.fats - targets.fats)
    )


def solution_deviation(
    solution: Iterable[IngredientQuantity], targets: MacroTargets
) -> float:
    """Deviation of a solution from the targets."""
    return deviation(calculate_macros(solution), targets)


def macro_errors(macros: MacroTotals, targets: MacroTargets) -> dict[str, float]:
    """Absolute error per macro."""
    return {
        "protein": abs(macros.protein - targets.protein),
        "carbs": abs(macros.carbs - targets.carbs),
        "fats": abs(macros.fats - targets.fats),
    }


def grade_error(error: float, target: float) -> str:
    if error <= target * GOOD_TOLERANCE:
        return "good"
    if error <= target * FAIR_TOLERANCE:
        return "fair"
    return "poor"


def match_quality(actual: float, target: float) -> str:
    """Grade how close an achieved macro is to its target.

    Returns:
        "good" within 10% of the target, "fair" within 20%, otherwise
        "poor". A zero target is only "good" when matched exactly.
    """
    return grade_error(abs(actual - target), target)


def grade_macros(macros: MacroTotals, targets: MacroTargets) -> dict[str, str]:
    """Per-macro grades for achieved macros against their targets."""
    return {
        name: match_quality(getattr(macros, name), getattr(targets, name))
        for name in ("protein", "carbs", "fats")
    }
