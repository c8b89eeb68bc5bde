"""Tests for target and result serialization."""

from __future__ import annotations

import json

import pytest

from macrochef.optimizer.continuous import solve_continuous
from macrochef.optimizer.models import InvalidTargetsError, MacroTargets, MealType
from macrochef.optimizer.serialization import (
    deserialize_targets,
    run_record,
    serialize_result,
    serialize_targets,
)


class TestTargetSerialization:
    """Tests for MacroTargets round-trip serialization."""

    def test_roundtrip(self):
        targets = MacroTargets(protein=40, carbs=55.5, fats=12, meal_type=MealType.LUNCH)
        assert deserialize_targets(serialize_targets(targets)) == targets

    def test_meal_type_defaults_to_dinner(self):
        targets = deserialize_targets({"protein": 1, "carbs": 2, "fats": 3})
        assert targets.meal_type == MealType.DINNER

    def test_missing_macro(self):
        with pytest.raises(InvalidTargetsError) as exc_info:
            deserialize_targets({"protein": 1, "carbs": 2})
        assert "fats" in exc_info.value.field_errors

    def test_unknown_meal_type(self):
        with pytest.raises(InvalidTargetsError):
            deserialize_targets({"protein": 1, "carbs": 2, "fats": 3, "meal_type": "brunch"})

    def test_negative_macro(self):
        with pytest.raises(InvalidTargetsError):
            deserialize_targets({"protein": 1, "carbs": -2, "fats": 3})


class TestResultSerialization:
    """Tests for serialize_result()."""

    def test_feasible_result(self, targets, sample_pool):
        data = serialize_result(solve_continuous(targets, sample_pool))

        assert data["strategy"] == "continuous"
        assert data["feasible"] is True
        assert [i["id"] for i in data["ingredients"]] == [
            "chicken-breast", "white-rice", "olive-oil",
        ]
        assert data["ingredients"][2]["quantity_grams"] == 50.0
        assert data["targets"]["protein"] == 150
        assert set(data["match_quality"]) == {"protein", "carbs", "fats"}
        # Must be valid strict JSON
        json.dumps(data, allow_nan=False)

    def test_infeasible_objective_is_none(self, targets, rice):
        data = serialize_result(solve_continuous(targets, [rice]))

        assert data["feasible"] is False
        assert data["objective_value"] is None
        assert data["ingredients"] == []
        json.dumps(data, allow_nan=False)


class TestRunRecord:
    """Tests for the flat run record."""

    def test_fields(self, targets, sample_pool):
        result = solve_continuous(targets, sample_pool)
        record = run_record(result, [i.id for i in sample_pool], ["stove"])

        assert record["model_type"] == "continuous"
        assert record["feasibility_status"] == "feasible"
        assert record["available_equipment"] == ["stove"]
        assert record["macro_accuracy"]["fats_error"] == pytest.approx(
            abs(result.macros.fats - 50)
        )
