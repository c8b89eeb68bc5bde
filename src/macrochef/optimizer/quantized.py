"""Portion-quantized quantity sizing ("MILP" strategy).

Uses the same ingredient choice as the continuous strategy but expresses
every quantity as a whole number of fixed-size portions. Not an integer
programming solver.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Iterable

from macrochef.optimizer.models import (
    Category,
    Ingredient,
    IngredientQuantity,
    MacroTargets,
    OptimizationResult,
    Strategy,
)
from macrochef.optimizer.pool import build_result, infeasible_result, partition_pool

logger = logging.getLogger(__name__)

DEFAULT_PORTION_GRAMS = 50.0
VEGETABLE_PORTIONS = 2
MIN_PORTIONS = 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def portions_for_target(
    target_grams: float, density_per_100g: float, portion_grams: float
) -> int:
    """Whole portions that best supply ``target_grams`` of a macro.

    Never returns fewer than one portion.
    """
    if density_per_100g <= 0:
        return MIN_PORTIONS
    portions = round_half_up(target_grams * 100 / (density_per_100g * portion_grams))
    return max(MIN_PORTIONS, portions)


def solve_quantized(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
    portion_grams: float = DEFAULT_PORTION_GRAMS,
) -> OptimizationResult:
    """Size the continuous strategy's picks in whole portions.

    Args:
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool
        portion_grams: Portion size every quantity is a multiple of

    Returns:
        OptimizationResult (infeasible when protein or carbs are missing)
    """
    start_time = time.perf_counter()
    targets.validate()
    if portion_grams <= 0:
        raise ValueError(f"portion_grams must be positive, got {portion_grams}")

    pool = partition_pool(available_ingredients)
    if not pool.feasible:
        return infeasible_result(Strategy.QUANTIZED, start_time, targets)

    protein = pool.densest(Category.PROTEIN)
    carb = pool.densest(Category.CARBS)
    vegetable = pool.first(Category.VEGETABLES)
    fat = pool.first(Category.FATS)

    portions = [
        (protein, portions_for_target(targets.protein, protein.protein_per_100g, portion_grams)),
        (carb, portions_for_target(targets.carbs, carb.carbs_per_100g, portion_grams)),
    ]
    if vegetable is not None:
        portions.append((vegetable, VEGETABLE_PORTIONS))
    if fat is not None:
        portions.append((fat, portions_for_target(targets.fats, fat.fats_per_100g, portion_grams)))

    solution = [
        IngredientQuantity(ingredient, count * portion_grams)
        for ingredient, count in portions
    ]

    logger.debug(
        "MILP selected %s",
        ", ".join(f"{ing.id}x{count}" for ing, count in portions),
    )
    return build_result(
        Strategy.QUANTIZED,
        solution,
        targets,
        start_time,
        solver_info={
            "portion_grams": portion_grams,
            "portions": {ing.id: count for ing, count in portions},
        },
    )
