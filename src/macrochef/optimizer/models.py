"""Data models for recipe optimization requests and results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Optional


class Category(Enum):
    """Ingredient categories in the catalog."""

    PROTEIN = "protein"
    CARBS = "carbs"
    VEGETABLES = "vegetables"
    FATS = "fats"
    SEASONINGS = "seasonings"


# Categories the solvers assign quantities to, in solution order
OPTIMIZED_CATEGORIES: tuple[Category, ...] = (
    Category.PROTEIN,
    Category.CARBS,
    Category.VEGETABLES,
    Category.FATS,
)


class MealType(Enum):
    """Meal the recipe is intended for (informational only)."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Strategy(Enum):
    """Quantity optimization strategies."""

    CONTINUOUS = "continuous"
    QUANTIZED = "quantized"
    STOCHASTIC = "stochastic"
    BASELINE = "baseline"

    @property
    def label(self) -> str:
        """Short name used in tables and logs."""
        return _STRATEGY_LABELS[self]

    @classmethod
    def parse(cls, name: "str | Strategy") -> "Strategy":
        """Resolve a strategy from its value or one of its short aliases.

        Args:
            name: Strategy value ("continuous"), alias ("lp") or Strategy

        Returns:
            Matching Strategy

        Raises:
            UnknownStrategyError: If the name matches nothing
        """
        if isinstance(name, Strategy):
            return name
        key = str(name).strip().lower()
        for strategy in cls:
            if key == strategy.value:
                return strategy
        if key in _STRATEGY_ALIASES:
            return _STRATEGY_ALIASES[key]
        raise UnknownStrategyError(name)


_STRATEGY_LABELS = {
    Strategy.CONTINUOUS: "LP",
    Strategy.QUANTIZED: "MILP",
    Strategy.STOCHASTIC: "Genetic",
    Strategy.BASELINE: "Greedy",
}

_STRATEGY_ALIASES = {
    "lp": Strategy.CONTINUOUS,
    "milp": Strategy.QUANTIZED,
    "genetic": Strategy.STOCHASTIC,
    "ga": Strategy.STOCHASTIC,
    "greedy": Strategy.BASELINE,
}


@dataclass(frozen=True)
class Ingredient:
    """A catalog ingredient with macro densities per 100g.

    Instances are shared read-only by every solver.
    """

    id: str
    name: str
    category: Category
    protein_per_100g: float
    carbs_per_100g: float
    fats_per_100g: float
    calories_per_100g: float
    cooking_methods: frozenset[str] = field(default_factory=frozenset)
    equipment_needed: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for attr in (
            "protein_per_100g",
            "carbs_per_100g",
            "fats_per_100g",
            "calories_per_100g",
        ):
            value = getattr(self, attr)
            if value < 0:
                raise ValueError(f"{self.id}: {attr} must be non-negative, got {value}")

    def density(self, category: Category) -> float:
        """Macro density per 100g relevant to a category."""
        if category == Category.PROTEIN:
            return self.protein_per_100g
        if category == Category.CARBS:
            return self.carbs_per_100g
        if category == Category.FATS:
            return self.fats_per_100g
        raise ValueError(f"No macro density for category {category.value}")


@dataclass(frozen=True)
class MacroTargets:
    """Desired grams of each macro for one meal."""

    protein: float
    carbs: float
    fats: float
    meal_type: MealType = MealType.DINNER

    def validate(self) -> None:
        """Reject negative or non-numeric targets.

        Raises:
            InvalidTargetsError: If any macro target is not a finite number >= 0
        """
        errors: dict[str, str] = {}
        for name in ("protein", "carbs", "fats"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                errors[name] = f"must be a number, got {value!r}"
            elif math.isnan(value) or math.isinf(value):
                errors[name] = f"must be finite, got {value!r}"
            elif value < 0:
                errors[name] = f"must be non-negative, got {value!r}"
        if errors:
            raise InvalidTargetsError(errors)

    def for_category(self, category: Category) -> float:
        """Target grams for the macro a category supplies."""
        if category == Category.PROTEIN:
            return self.protein
        if category == Category.CARBS:
            return self.carbs
        if category == Category.FATS:
            return self.fats
        raise ValueError(f"No macro target for category {category.value}")


@dataclass(frozen=True)
class IngredientQuantity:
    """One entry of a solution: an ingredient and its grams."""

    ingredient: Ingredient
    quantity: float

    @property
    def category(self) -> Category:
        return self.ingredient.category


@dataclass(frozen=True)
class MacroTotals:
    """Aggregate macros of a solution."""

    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    calories: float = 0.0

    def rounded(self, digits: int = 1) -> "MacroTotals":
        return MacroTotals(
            protein=round(self.protein, digits),
            carbs=round(self.carbs, digits),
            fats=round(self.fats, digits),
            calories=round(self.calories, digits),
        )


Solution = list[IngredientQuantity]


@dataclass
class OptimizationResult:
    """Complete output from one solver call."""

    strategy: Strategy
    ingredients: Solution
    macros: MacroTotals
    solve_time_ms: float
    feasible: bool
    objective_value: float  # math.inf when infeasible
    targets: Optional[MacroTargets] = None
    message: str = ""
    solver_info: dict = field(default_factory=dict)  # strategy-specific stats

    @property
    def macro_errors(self) -> dict[str, float]:
        """Absolute error per macro (empty when targets are unknown)."""
        from macrochef.optimizer.macros import macro_errors

        if self.targets is None:
            return {}
        return macro_errors(self.macros, self.targets)

    @property
    def match_quality(self) -> dict[str, str]:
        """Per-macro grade ("good", "fair", "poor")."""
        from macrochef.optimizer.macros import grade_macros

        if self.targets is None:
            return {}
        return grade_macros(self.macros, self.targets)


# Custom exceptions


class MacroChefError(Exception):
    """Base exception for macrochef errors."""

    pass


class InvalidTargetsError(MacroChefError, ValueError):
    """Raised when macro targets are negative or not numbers."""

    def __init__(self, field_errors: dict[str, str]):
        detail = "; ".join(f"{name} {msg}" for name, msg in field_errors.items())
        super().__init__(f"Invalid macro targets: {detail}")
        self.field_errors = field_errors


class UnknownStrategyError(MacroChefError, ValueError):
    """Raised when a strategy name matches no known strategy."""

    def __init__(self, name: object):
        choices = ", ".join(s.value for s in Strategy)
        super().__init__(f"Unknown strategy {name!r} (choose from: {choices})")
        self.name = name


class CatalogError(MacroChefError):
    """Raised when the ingredient catalog is invalid or an id is unknown."""

    pass


class DetectionError(MacroChefError, ValueError):
    """Raised when classifier detections cannot be parsed."""

    pass
