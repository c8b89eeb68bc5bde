"""Fixed-portion baseline ("Greedy" strategy).

Targets never influence the choice; they only feed the reported macros
and objective. Used as the reference point for the other strategies.
"""

from __future__ import annotations

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

BASELINE_GRAMS = {
    Category.PROTEIN: 150.0,
    Category.CARBS: 150.0,
    Category.VEGETABLES: 100.0,
    Category.FATS: 20.0,
}


def solve_baseline(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
) -> OptimizationResult:
    """Take the first ingredient of each category at a fixed quantity."""
    start_time = time.perf_counter()
    targets.validate()

    pool = partition_pool(available_ingredients)
    if not pool.feasible:
        return infeasible_result(Strategy.BASELINE, start_time, targets)

    solution = []
    for category, grams in BASELINE_GRAMS.items():
        ingredient = pool.first(category)
        if ingredient is not None:
            solution.append(IngredientQuantity(ingredient, grams))

    return build_result(Strategy.BASELINE, solution, targets, start_time)
