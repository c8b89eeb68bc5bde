"""Quantity optimization strategies for macro-targeted recipes."""

from macrochef.optimizer.baseline import solve_baseline
from macrochef.optimizer.continuous import solve_continuous
from macrochef.optimizer.macros import calculate_macros, deviation, match_quality
from macrochef.optimizer.models import (
    Category,
    Ingredient,
    IngredientQuantity,
    MacroTargets,
    MacroTotals,
    MealType,
    OptimizationResult,
    Strategy,
)
from macrochef.optimizer.pool import IngredientPool, partition_pool
from macrochef.optimizer.quantized import solve_quantized
from macrochef.optimizer.solver import compare_strategies, solve
from macrochef.optimizer.stochastic import StochasticConfig, StochasticSolver, solve_stochastic

__all__ = [
    "Category",
    "Ingredient",
    "IngredientQuantity",
    "MacroTargets",
    "MacroTotals",
    "MealType",
    "OptimizationResult",
    "Strategy",
    "IngredientPool",
    "partition_pool",
    "calculate_macros",
    "deviation",
    "match_quality",
    "solve_continuous",
    "solve_quantized",
    "solve_stochastic",
    "solve_baseline",
    "StochasticConfig",
    "StochasticSolver",
    "solve",
    "compare_strategies",
]
