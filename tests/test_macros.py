"""Tests for macro aggregation and the deviation objective."""

from __future__ import annotations

import math

import pytest

from macrochef.optimizer.baseline import solve_baseline
from macrochef.optimizer.macros import (
    calculate_macros,
    deviation,
    grade_macros,
    macro_errors,
    match_quality,
    solution_deviation,
)
from macrochef.optimizer.models import (
    IngredientQuantity,
    InvalidTargetsError,
    MacroTargets,
    MacroTotals,
)


class TestCalculateMacros:
    """Tests for the macro calculator."""

    def test_empty_solution(self):
        """Empty solution aggregates to all zeros."""
        assert calculate_macros([]) == MacroTotals(0, 0, 0, 0)

    def test_sums_per_entry_densities(self, chicken, rice):
        """Each entry contributes density * quantity / 100."""
        macros = calculate_macros([
            IngredientQuantity(chicken, 200),
            IngredientQuantity(rice, 50),
        ])

        assert macros.protein == pytest.approx(31 * 2 + 2.7 * 0.5)
        assert macros.carbs == pytest.approx(0 * 2 + 28 * 0.5)
        assert macros.fats == pytest.approx(3.6 * 2 + 0.3 * 0.5)
        assert macros.calories == pytest.approx(165 * 2 + 130 * 0.5)

    def test_calories_come_from_declared_density(self, olive_oil):
        """Calories are not derived from 4/4/9 macro factors."""
        macros = calculate_macros([IngredientQuantity(olive_oil, 100)])

        assert macros.calories == pytest.approx(884)
        assert macros.calories != pytest.approx(macros.fats * 9)

    def test_no_rounding(self, chicken):
        """Fractional grams are preserved."""
        macros = calculate_macros([IngredientQuantity(chicken, 33.3)])
        assert macros.protein == pytest.approx(31 * 0.333)

    def test_rounded_helper(self):
        """rounded() only affects the copy used for display."""
        macros = MacroTotals(protein=10.456, carbs=1.04, fats=0.0, calories=99.96)
        assert macros.rounded(1) == MacroTotals(10.5, 1.0, 0.0, 100.0)


class TestDeviation:
    """Tests for the objective function."""

    def test_perfect_match_is_zero(self):
        targets = MacroTargets(protein=30, carbs=40, fats=10)
        assert deviation(MacroTotals(30, 40, 10, 500), targets) == 0

    def test_sum_of_absolute_errors(self):
        """Over- and under-shoots both count; calories are ignored."""
        targets = MacroTargets(protein=30, carbs=40, fats=10)
        macros = MacroTotals(protein=35, carbs=30, fats=12, calories=9999)
        assert deviation(macros, targets) == pytest.approx(5 + 10 + 2)

    def test_solution_deviation(self, chicken, rice):
        targets = MacroTargets(protein=62, carbs=28, fats=0)
        solution = [IngredientQuantity(chicken, 200), IngredientQuantity(rice, 100)]
        # protein 62 + 2.7, carbs 28, fats 7.2 + 0.3
        assert solution_deviation(solution, targets) == pytest.approx(2.7 + 0 + 7.5)


class TestMatchQuality:
    """Tests for per-macro grading."""

    @pytest.mark.parametrize(
        "actual,target,expected",
        [
            (100, 100, "good"),
            (110, 100, "good"),
            (89.5, 100, "fair"),
            (120, 100, "fair"),
            (120.1, 100, "poor"),
            (0, 100, "poor"),
            (480, 500, "good"),
            (440, 500, "fair"),
            (22, 20, "good"),
            (25, 20, "poor"),
            (0, 0, "good"),
            (1, 0, "poor"),
        ],
    )
    def test_grades(self, actual, target, expected):
        """Bounds are 10% and 20% of the target, not fixed grams."""
        assert match_quality(actual, target) == expected

    def test_result_grades_use_targets(self, chicken, rice):
        # 150g chicken + 150g rice: protein 50.55, carbs 42, fats 5.85
        targets = MacroTargets(protein=52, carbs=40, fats=5)
        result = solve_baseline(targets, [chicken, rice])

        assert result.match_quality == {"protein": "good", "carbs": "good", "fats": "fair"}

    def test_grade_macros_exact_match(self):
        assert grade_macros(MacroTotals(1, 2, 3, 4), MacroTargets(1, 2, 3)) == {
            "protein": "good", "carbs": "good", "fats": "good",
        }

    def test_macro_errors(self):
        targets = MacroTargets(protein=30, carbs=40, fats=10)
        errors = macro_errors(MacroTotals(25, 45, 10, 0), targets)
        assert errors == {"protein": 5, "carbs": 5, "fats": 0}


class TestTargetValidation:
    """Tests for MacroTargets.validate()."""

    def test_valid_targets(self):
        MacroTargets(protein=0, carbs=0, fats=0).validate()
        MacroTargets(protein=150.5, carbs=200, fats=50).validate()

    def test_negative_target(self):
        with pytest.raises(InvalidTargetsError) as exc_info:
            MacroTargets(protein=-1, carbs=10, fats=10).validate()
        assert "protein" in exc_info.value.field_errors

    def test_non_numeric_target(self):
        with pytest.raises(InvalidTargetsError) as exc_info:
            MacroTargets(protein="lots", carbs=10, fats=10).validate()
        assert "protein" in exc_info.value.field_errors

    def test_nan_target(self):
        with pytest.raises(InvalidTargetsError):
            MacroTargets(protein=10, carbs=math.nan, fats=10).validate()

    def test_infinite_target(self):
        with pytest.raises(InvalidTargetsError):
            MacroTargets(protein=10, carbs=10, fats=math.inf).validate()

    def test_is_value_error(self):
        """Callers can catch validation failures as ValueError."""
        with pytest.raises(ValueError):
            MacroTargets(protein=10, carbs=-5, fats=10).validate()
