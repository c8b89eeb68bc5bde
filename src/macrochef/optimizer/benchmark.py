"""Repeated-trial benchmark across optimization strategies.

Runs every strategy several times on the same targets and pool, then
summarizes solve time, objective and accuracy so strategies can be
compared side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from macrochef.optimizer.macros import grade_macros
from macrochef.optimizer.models import (
    Ingredient,
    MacroTargets,
    OptimizationResult,
    Strategy,
)
from macrochef.optimizer.quantized import DEFAULT_PORTION_GRAMS
from macrochef.optimizer.solver import resolve_strategy, solve
from macrochef.optimizer.stochastic import StochasticConfig


@dataclass
class BenchmarkSummary:
    """Aggregate statistics for one strategy."""

    strategy: Strategy
    trials: int
    mean_solve_time_ms: float
    std_solve_time_ms: float
    feasible_rate: float
    mean_objective: Optional[float]  # None when no trial was feasible
    min_objective: Optional[float]
    max_objective: Optional[float]
    within_tolerance_rate: float  # share of trials with every macro graded "good"


def summarize_results(
    strategy: Strategy, results: Sequence[OptimizationResult]
) -> BenchmarkSummary:
    """Aggregate the results of repeated runs of one strategy."""
    times = np.array([r.solve_time_ms for r in results], dtype=float)
    feasible = [r for r in results if r.feasible]
    objectives = np.array([r.objective_value for r in feasible], dtype=float)

    within = [
        r for r in feasible
        if r.targets is not None
        and all(grade == "good" for grade in grade_macros(r.macros, r.targets).values())
    ]

    has_objectives = objectives.size > 0
    return BenchmarkSummary(
        strategy=strategy,
        trials=len(results),
        mean_solve_time_ms=float(times.mean()) if times.size else 0.0,
        std_solve_time_ms=float(times.std()) if times.size else 0.0,
        feasible_rate=len(feasible) / len(results) if results else 0.0,
        mean_objective=float(objectives.mean()) if has_objectives else None,
        min_objective=float(objectives.min()) if has_objectives else None,
        max_objective=float(objectives.max()) if has_objectives else None,
        within_tolerance_rate=len(within) / len(results) if results else 0.0,
    )


def run_benchmark(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
    strategies: Optional[Sequence["str | Strategy"]] = None,
    trials: int = 10,
    seed: Optional[int] = None,
    portion_grams: float = DEFAULT_PORTION_GRAMS,
    stochastic_config: Optional[StochasticConfig] = None,
    fallback_to_continuous: bool = False,
) -> list[BenchmarkSummary]:
    """Run each strategy ``trials`` times and summarize.

    Args:
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool
        strategies: Strategies to benchmark. Defaults to all four
        trials: Runs per strategy
        seed: Base seed; trial i of the stochastic strategy uses seed + i
        portion_grams: Portion size for the quantized strategy
        stochastic_config: Search parameters for the stochastic strategy
        fallback_to_continuous: Run the continuous strategy for unknown names

    Returns:
        One BenchmarkSummary per strategy, in the requested order
    """
    if trials < 1:
        raise ValueError("trials must be >= 1")

    ingredients = list(available_ingredients)
    chosen = (
        [resolve_strategy(s, fallback_to_continuous) for s in strategies]
        if strategies
        else list(Strategy)
    )

    summaries: list[BenchmarkSummary] = []
    for strategy in chosen:
        results = [
            solve(
                strategy,
                targets,
                ingredients,
                seed=seed + trial if seed is not None else None,
                portion_grams=portion_grams,
                stochastic_config=stochastic_config,
            )
            for trial in range(trials)
        ]
        summaries.append(summarize_results(strategy, results))

    return summaries
