"""Serialization utilities for targets and optimization results.

Targets round-trip through plain dicts (the same shape the CLI and YAML
files use). Results serialize one way, to JSON-safe dicts for ``--json``
output and for run-recording sinks.
"""

from __future__ import annotations

import math
from typing import Any

from macrochef.optimizer.models import (
    InvalidTargetsError,
    MacroTargets,
    MacroTotals,
    MealType,
    OptimizationResult,
)


def serialize_targets(targets: MacroTargets) -> dict[str, Any]:
    """Convert MacroTargets to a JSON-serializable dict."""
    return {
        "protein": targets.protein,
        "carbs": targets.carbs,
        "fats": targets.fats,
        "meal_type": targets.meal_type.value,
    }


def deserialize_targets(data: dict[str, Any]) -> MacroTargets:
    """Build MacroTargets from a dict produced by serialize_targets().

    Args:
        data: Mapping with protein, carbs, fats and optional meal_type

    Returns:
        Validated MacroTargets

    Raises:
        InvalidTargetsError: Missing, negative or non-numeric macros
    """
    missing = {
        name: "is required" for name in ("protein", "carbs", "fats") if name not in data
    }
    if missing:
        raise InvalidTargetsError(missing)

    try:
        meal_type = MealType(data.get("meal_type", MealType.DINNER.value))
    except ValueError:
        raise InvalidTargetsError({"meal_type": f"unknown meal type {data['meal_type']!r}"})

    targets = MacroTargets(
        protein=data["protein"],
        carbs=data["carbs"],
        fats=data["fats"],
        meal_type=meal_type,
    )
    targets.validate()
    return targets


def serialize_macros(macros: MacroTotals, digits: int = 1) -> dict[str, float]:
    rounded = macros.rounded(digits)
    return {
        "protein": rounded.protein,
        "carbs": rounded.carbs,
        "fats": rounded.fats,
        "calories": rounded.calories,
    }


def _finite_or_none(value: float) -> float | None:
    return None if math.isinf(value) or math.isnan(value) else value


def serialize_result(result: OptimizationResult) -> dict[str, Any]:
    """Convert an OptimizationResult to a JSON-safe dict.

    An infinite objective (infeasible result) is written as None.
    """
    data: dict[str, Any] = {
        "strategy": result.strategy.value,
        "feasible": result.feasible,
        "objective_value": _finite_or_none(round(result.objective_value, 3)),
        "solve_time_ms": round(result.solve_time_ms, 3),
        "message": result.message,
        "ingredients": [
            {
                "id": entry.ingredient.id,
                "name": entry.ingredient.name,
                "category": entry.category.value,
                "quantity_grams": round(entry.quantity, 1),
            }
            for entry in result.ingredients
        ],
        "macros": serialize_macros(result.macros),
    }

    if result.targets is not None:
        data["targets"] = serialize_targets(result.targets)
        data["macro_errors"] = {
            name: round(err, 1) for name, err in result.macro_errors.items()
        }
        data["match_quality"] = result.match_quality

    if result.solver_info:
        data["solver_info"] = {
            key: _finite_or_none(value) if isinstance(value, float) else value
            for key, value in result.solver_info.items()
        }

    return data


def run_record(
    result: OptimizationResult,
    ingredient_ids: list[str],
    equipment: list[str],
) -> dict[str, Any]:
    """Flat record of one solve for an external run log.

    Args:
        result: Result of the solve
        ingredient_ids: Ids of the pool the solver was given
        equipment: Available equipment ids

    Returns:
        Dict with targets, inputs, strategy, timing, feasibility and errors
    """
    errors = result.macro_errors
    return {
        "macro_targets": serialize_targets(result.targets) if result.targets else None,
        "available_ingredients": list(ingredient_ids),
        "available_equipment": list(equipment),
        "model_type": result.strategy.value,
        "solve_time_ms": round(result.solve_time_ms),
        "feasibility_status": "feasible" if result.feasible else "infeasible",
        "macro_accuracy": {
            "protein_error": errors.get("protein"),
            "carbs_error": errors.get("carbs"),
            "fats_error": errors.get("fats"),
        },
    }
