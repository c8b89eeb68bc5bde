"""Population-based stochastic search ("Genetic" strategy).

Evolves a small population of candidate solutions with binary tournament
selection and single-point mutation (quantity nudge or ingredient swap).
There is no crossover. Pass a seed or a ``random.Random`` for
reproducible runs.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from macrochef.optimizer.macros import solution_deviation
from macrochef.optimizer.models import (
    Category,
    Ingredient,
    IngredientQuantity,
    MacroTargets,
    OPTIMIZED_CATEGORIES,
    OptimizationResult,
    Solution,
    Strategy,
)
from macrochef.optimizer.pool import (
    IngredientPool,
    build_result,
    infeasible_result,
    partition_pool,
)

logger = logging.getLogger(__name__)


def _default_quantity_ranges() -> dict[Category, tuple[float, float]]:
    return {
        Category.PROTEIN: (50.0, 250.0),
        Category.CARBS: (50.0, 250.0),
        Category.VEGETABLES: (50.0, 200.0),
        Category.FATS: (10.0, 50.0),
    }


@dataclass
class StochasticConfig:
    """Search parameters for the stochastic solver."""

    generations: int = 50
    population_size: int = 20
    mutation_rate: float = 0.2
    quantity_ranges: dict[Category, tuple[float, float]] = field(
        default_factory=_default_quantity_ranges
    )
    mutation_delta: float = 25.0  # max grams added/removed by a quantity mutation
    min_mutated_grams: float = 10.0
    elitism: bool = True  # re-insert the best solution seen if a generation loses it

    def __post_init__(self) -> None:
        if self.generations < 0:
            raise ValueError("generations must be >= 0")
        if self.population_size < 1:
            raise ValueError("population_size must be >= 1")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be between 0 and 1")


class StochasticSolver:
    """Tournament-selection search over ingredient choice and quantity."""

    def __init__(
        self,
        config: Optional[StochasticConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """Initialize the solver.

        Args:
            config: Search parameters. Defaults to StochasticConfig()
            rng: Random source. Takes precedence over seed
            seed: Seed for a private random.Random when rng is not given
        """
        self.config = config or StochasticConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.seed = seed

    def solve(
        self,
        targets: MacroTargets,
        available_ingredients: Iterable[Ingredient],
    ) -> OptimizationResult:
        """Evolve the population and return its best member.

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
            return infeasible_result(Strategy.STOCHASTIC, start_time, targets)

        cfg = self.config
        population = [self._random_solution(pool) for _ in range(cfg.population_size)]
        scores = self._evaluate(population, targets)

        best_score = min(scores)
        best = population[scores.index(best_score)]
        initial_best = best_score

        for generation in range(cfg.generations):
            fitness = [1.0 / (1.0 + score) for score in scores]

            selected = [
                self._tournament(population, fitness)
                for _ in range(cfg.population_size)
            ]
            population = [
                self._mutate(solution, pool)
                if self.rng.random() < cfg.mutation_rate
                else list(solution)
                for solution in selected
            ]
            scores = self._evaluate(population, targets)

            if cfg.elitism and min(scores) > best_score:
                worst = scores.index(max(scores))
                population[worst] = list(best)
                scores[worst] = best_score

            generation_best = min(scores)
            if generation_best < best_score:
                best_score = generation_best
                best = population[scores.index(generation_best)]

            if generation % 10 == 0:
                logger.debug(
                    "Generation %d: best deviation %.2f", generation, generation_best
                )

        # First encountered wins ties
        final_index = scores.index(min(scores))
        solution = population[final_index]

        return build_result(
            Strategy.STOCHASTIC,
            list(solution),
            targets,
            start_time,
            solver_info={
                "generations": cfg.generations,
                "population_size": cfg.population_size,
                "mutation_rate": cfg.mutation_rate,
                "initial_best_objective": initial_best,
                "seed": self.seed,
            },
        )

    def _evaluate(self, population: list[Solution], targets: MacroTargets) -> list[float]:
        return [solution_deviation(solution, targets) for solution in population]

    def _random_solution(self, pool: IngredientPool) -> Solution:
        """One uniformly random ingredient and quantity per present category."""
        solution: Solution = []
        for category in OPTIMIZED_CATEGORIES:
            group = pool.group(category)
            if not group:
                continue
            low, high = self.config.quantity_ranges[category]
            solution.append(
                IngredientQuantity(self.rng.choice(group), self.rng.uniform(low, high))
            )
        return solution

    def _tournament(self, population: list[Solution], fitness: list[float]) -> Solution:
        """Binary tournament, indices drawn with replacement."""
        first = self.rng.randrange(len(population))
        second = self.rng.randrange(len(population))
        return population[first] if fitness[first] > fitness[second] else population[second]

    def _mutate(self, solution: Solution, pool: IngredientPool) -> Solution:
        """Copy of the solution with one entry's quantity or ingredient changed."""
        mutated = list(solution)
        index = self.rng.randrange(len(mutated))
        entry = mutated[index]

        if self.rng.random() < 0.5:
            delta = self.rng.uniform(-self.config.mutation_delta, self.config.mutation_delta)
            quantity = max(self.config.min_mutated_grams, entry.quantity + delta)
            mutated[index] = IngredientQuantity(entry.ingredient, quantity)
        else:
            alternatives = [
                ing for ing in pool.group(entry.category) if ing.id != entry.ingredient.id
            ]
            if alternatives:
                mutated[index] = IngredientQuantity(
                    self.rng.choice(alternatives), entry.quantity
                )

        return mutated


def solve_stochastic(
    targets: MacroTargets,
    available_ingredients: Iterable[Ingredient],
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    config: Optional[StochasticConfig] = None,
) -> OptimizationResult:
    """Run the stochastic search once.

    Args:
        targets: Macro targets in grams
        available_ingredients: Equipment-filtered ingredient pool
        seed: Seed for reproducible runs (ignored when rng is given)
        rng: Random source to draw from
        config: Search parameters

    Returns:
        OptimizationResult
    """
    solver = StochasticSolver(config=config, rng=rng, seed=seed)
    return solver.solve(targets, available_ingredients)
