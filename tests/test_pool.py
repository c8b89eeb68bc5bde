"""Tests for ingredient pool partitioning."""

from __future__ import annotations

import math
import time

import pytest

from macrochef.optimizer.models import Category, Ingredient, Strategy
from macrochef.optimizer.pool import infeasible_result, partition_pool

from conftest import make_ingredient


class TestPartitionPool:
    """Tests for partition_pool()."""

    def test_groups_by_category(self, full_pool, salmon, chicken, sweet_potato, rice,
                                broccoli, avocado, olive_oil):
        pool = partition_pool(full_pool)

        assert pool.protein == [salmon, chicken]
        assert pool.carbs == [sweet_potato, rice]
        assert pool.vegetables == [broccoli]
        assert pool.fats == [avocado, olive_oil]

    def test_drops_seasonings(self, salt, chicken):
        pool = partition_pool([salt, chicken])
        groups = [pool.group(c) for c in Category]
        assert all(salt not in g for g in groups)

    def test_feasibility(self, chicken, rice, broccoli):
        assert partition_pool([chicken, rice]).feasible
        assert not partition_pool([chicken, broccoli]).feasible
        assert not partition_pool([rice]).feasible
        assert not partition_pool([]).feasible

    def test_first_returns_none_for_empty_group(self, chicken, rice):
        pool = partition_pool([chicken, rice])
        assert pool.first(Category.VEGETABLES) is None
        assert pool.first(Category.FATS) is None


class TestDensest:
    """Tests for IngredientPool.densest()."""

    def test_highest_density_wins(self, salmon, chicken):
        pool = partition_pool([salmon, chicken])
        assert pool.densest(Category.PROTEIN) is chicken

    def test_ties_go_to_first(self):
        first = make_ingredient("first", Category.CARBS, carbs=25)
        second = make_ingredient("second", Category.CARBS, carbs=25)
        pool = partition_pool([first, second])
        assert pool.densest(Category.CARBS) is first


class TestInfeasibleResult:
    """Tests for the infeasible short-circuit result."""

    def test_shape(self):
        result = infeasible_result(Strategy.CONTINUOUS, time.perf_counter())

        assert result.feasible is False
        assert result.ingredients == []
        assert result.macros.protein == 0
        assert result.macros.calories == 0
        assert math.isinf(result.objective_value)
        assert result.solve_time_ms >= 0


class TestIngredient:
    """Tests for the Ingredient record."""

    def test_is_immutable(self, chicken):
        with pytest.raises(AttributeError):
            chicken.protein_per_100g = 50

    def test_rejects_negative_density(self):
        with pytest.raises(ValueError):
            Ingredient(
                id="bad",
                name="Bad",
                category=Category.PROTEIN,
                protein_per_100g=-1,
                carbs_per_100g=0,
                fats_per_100g=0,
                calories_per_100g=0,
            )
