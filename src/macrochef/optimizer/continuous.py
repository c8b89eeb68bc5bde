"""Continuous quantity sizing ("LP" strategy).

Not a linear programming solver: one ingredient per category is chosen
and sized in closed form so that it alone supplies its macro target.
"""

from __future__ import annotations

import logging
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

# Lower bounds (grams) per category
MIN_PROTEIN_GRAMS = 50.0
MIN_CARB_GRAMS = 50.0
MIN_FAT_GRAMS = 20.0
VEGETABLE_GRAMS = 100.0


def proportional_grams(
    target_grams: float, density_per_100g: float, floor_grams: float
) -> float:
    """Grams of an ingredient that supply ``target_grams`` of its macro.

    Args:
        target_grams: Desired grams of the macro
        density_per_100g: Grams of the macro per 100g of ingredient
        floor_grams: Minimum quantity to return

    Returns:
        ``max(floor_grams, target_grams * 100 / density)``; the floor when
        the density is zero.
    """
    if density_per_100g <= 0:
        return floor_grams
    return max(floor_grams, target_grams * 100 / density_per_100g)


def solve_continuous(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
) -> OptimizationResult:
    """Size the densest protein and carb, plus the first vegetable and fat.

    Args:
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool

    Returns:
        OptimizationResult (infeasible when protein or carbs are missing)
    """
    start_time = time.perf_counter()
    targets.validate()

    pool = partition_pool(available_ingredients)
    if not pool.feasible:
        return infeasible_result(Strategy.CONTINUOUS, start_time, targets)

    protein = pool.densest(Category.PROTEIN)
    carb = pool.densest(Category.CARBS)
    vegetable = pool.first(Category.VEGETABLES)
    fat = pool.first(Category.FATS)

    solution = [
        IngredientQuantity(
            protein,
            proportional_grams(targets.protein, protein.protein_per_100g, MIN_PROTEIN_GRAMS),
        ),
        IngredientQuantity(
            carb,
            proportional_grams(targets.carbs, carb.carbs_per_100g, MIN_CARB_GRAMS),
        ),
    ]
    if vegetable is not None:
        solution.append(IngredientQuantity(vegetable, VEGETABLE_GRAMS))
    if fat is not None:
        solution.append(
            IngredientQuantity(
                fat,
                proportional_grams(targets.fats, fat.fats_per_100g, MIN_FAT_GRAMS),
            )
        )

    logger.debug(
        "LP selected %s",
        ", ".join(f"{e.ingredient.id}={e.quantity:.1f}g" for e in solution),
    )
    return build_result(Strategy.CONTINUOUS, solution, targets, start_time)
