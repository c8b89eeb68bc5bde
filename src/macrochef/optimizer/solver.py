"""Strategy dispatch: run one (or several) solvers with a uniform result."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Sequence

from macrochef.optimizer.baseline import solve_baseline
from macrochef.optimizer.continuous import solve_continuous
from macrochef.optimizer.models import (
    Ingredient,
    MacroTargets,
    OptimizationResult,
    Strategy,
    UnknownStrategyError,
)
from macrochef.optimizer.quantized import DEFAULT_PORTION_GRAMS, solve_quantized
from macrochef.optimizer.stochastic import StochasticConfig, solve_stochastic

logger = logging.getLogger(__name__)


def resolve_strategy(
    name: "str | Strategy",
    fallback_to_continuous: bool = False,
) -> Strategy:
    """Turn a strategy name into a Strategy.

    Args:
        name: Strategy value or alias ("lp", "milp", "genetic", "greedy")
        fallback_to_continuous: Map unknown names to the continuous strategy
            instead of raising

    Raises:
        UnknownStrategyError: Unknown name and fallback disabled
    """
    try:
        return Strategy.parse(name)
    except UnknownStrategyError:
        if not fallback_to_continuous:
            raise
        logger.warning("Unknown strategy %r, using continuous", name)
        return Strategy.CONTINUOUS


def solve(
    strategy: "str | Strategy",
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    portion_grams: float = DEFAULT_PORTION_GRAMS,
    stochastic_config: Optional[StochasticConfig] = None,
    fallback_to_continuous: bool = False,
) -> OptimizationResult:
    """Run the requested strategy and return its result unchanged.

    Args:
        strategy: Which solver to run
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool
        seed: Seed for the stochastic strategy
        rng: Random source for the stochastic strategy
        portion_grams: Portion size for the quantized strategy
        stochastic_config: Search parameters for the stochastic strategy
        fallback_to_continuous: Run the continuous strategy for unknown names

    Returns:
        OptimizationResult

    Raises:
        UnknownStrategyError: Unknown strategy and fallback disabled
        InvalidTargetsError: Negative or non-numeric targets
    """
    resolved = resolve_strategy(strategy, fallback_to_continuous)
    ingredients = list(available_ingredients)

    if resolved == Strategy.CONTINUOUS:
        return solve_continuous(targets, ingredients)
    if resolved == Strategy.QUANTIZED:
        return solve_quantized(targets, ingredients, portion_grams=portion_grams)
    if resolved == Strategy.STOCHASTIC:
        return solve_stochastic(
            targets, ingredients, seed=seed, rng=rng, config=stochastic_config
        )
    if resolved == Strategy.BASELINE:
        return solve_baseline(targets, ingredients)
    raise UnknownStrategyError(strategy)


def compare_strategies(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
    strategies: Optional[Sequence["str | Strategy"]] = None,
    seed: Optional[int] = None,
    portion_grams: float = DEFAULT_PORTION_GRAMS,
    stochastic_config: Optional[StochasticConfig] = None,
    fallback_to_continuous: bool = False,
) -> list[OptimizationResult]:
    """Run several strategies on the same inputs.

    Args:
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool
        strategies: Strategies to run, in output order. Defaults to all four
        seed: Seed for the stochastic strategy
        portion_grams: Portion size for the quantized strategy
        stochastic_config: Search parameters for the stochastic strategy
        fallback_to_continuous: Run the continuous strategy for unknown names

    Returns:
        One OptimizationResult per strategy
    """
    ingredients = list(available_ingredients)
    chosen = (
        [resolve_strategy(s, fallback_to_continuous) for s in strategies]
        if strategies
        else list(Strategy)
    )

    return [
        solve(
            strategy,
            targets,
            ingredients,
            seed=seed,
            portion_grams=portion_grams,
            stochastic_config=stochastic_config,
        )
        for strategy in chosen
    ]


def best_result(results: Sequence[OptimizationResult]) -> Optional[OptimizationResult]:
    """Feasible result with the lowest objective, or None."""
    feasible = [r for r in results if r.feasible]
    if not feasible:
        return None
    return min(feasible, key=lambda r: r.objective_value)
