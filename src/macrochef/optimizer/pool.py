"""Partition an ingredient pool into the categories the solvers fill."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from macrochef.optimizer.macros import calculate_macros, deviation
from macrochef.optimizer.models import (
    Category,
    Ingredient,
    IngredientQuantity,
    MacroTargets,
    MacroTotals,
    OptimizationResult,
    Strategy,
)

logger = logging.getLogger(__name__)


@dataclass
class IngredientPool:
    """Available ingredients grouped by category, in pool order.

    Seasonings are never optimized and are not kept.
    """

    protein: list[Ingredient] = field(default_factory=list)
    carbs: list[Ingredient] = field(default_factory=list)
    vegetables: list[Ingredient] = field(default_factory=list)
    fats: list[Ingredient] = field(default_factory=list)

    @property
    def feasible(self) -> bool:
        """A recipe needs at least one protein and one carb source."""
        return bool(self.protein) and bool(self.carbs)

    def group(self, category: Category) -> list[Ingredient]:
        if category == Category.PROTEIN:
            return self.protein
        if category == Category.CARBS:
            return self.carbs
        if category == Category.VEGETABLES:
            return self.vegetables
        if category == Category.FATS:
            return self.fats
        return []

    def first(self, category: Category) -> Optional[Ingredient]:
        """First ingredient of a category, or None when the group is empty."""
        group = self.group(category)
        return group[0] if group else None

    def densest(self, category: Category) -> Ingredient:
        """Ingredient with the highest density of the category's macro.

        Ties go to the ingredient encountered first.
        """
        group = self.group(category)
        best = group[0]
        for candidate in group[1:]:
            if candidate.density(category) > best.density(category):
                best = candidate
        return best


def partition_pool(ingredients: Iterable[Ingredient]) -> IngredientPool:
    """Split an (already equipment-filtered) pool by category.

    Args:
        ingredients: Ordered ingredient pool

    Returns:
        IngredientPool with each group in pool order
    """
    pool = IngredientPool()
    for ingredient in ingredients:
        if ingredient.category == Category.SEASONINGS:
            continue
        pool.group(ingredient.category).append(ingredient)
    return pool


def infeasible_result(
    strategy: Strategy,
    start_time: float,
    targets: Optional[MacroTargets] = None,
) -> OptimizationResult:
    """Result reported when the pool lacks a protein or a carb source."""
    logger.info("%s: pool has no protein or no carb source, infeasible", strategy.label)
    return OptimizationResult(
        strategy=strategy,
        ingredients=[],
        macros=MacroTotals(),
        solve_time_ms=(time.perf_counter() - start_time) * 1000,
        feasible=False,
        objective_value=math.inf,
        targets=targets,
        message="Need at least one protein and one carb ingredient",
    )


def build_result(
    strategy: Strategy,
    solution: list[IngredientQuantity],
    targets: MacroTargets,
    start_time: float,
    solver_info: Optional[dict] = None,
) -> OptimizationResult:
    """Score a feasible solution and wrap it in an OptimizationResult."""
    macros = calculate_macros(solution)
    return OptimizationResult(
        strategy=strategy,
        ingredients=solution,
        macros=macros,
        solve_time_ms=(time.perf_counter() - start_time) * 1000,
        feasible=True,
        objective_value=deviation(macros, targets),
        targets=targets,
        message="Optimization successful",
        solver_info=solver_info or {},
    )
