"""Pytest fixtures for macrochef tests."""

from __future__ import annotations

import pytest

from macrochef.optimizer.models import Category, Ingredient, MacroTargets


def make_ingredient(
    id: str,
    category: Category,
    protein: float = 0.0,
    carbs: float = 0.0,
    fats: float = 0.0,
    calories: float = 0.0,
    equipment: tuple[str, ...] = (),
) -> Ingredient:
    """Build a test ingredient with the given densities per 100g."""
    return Ingredient(
        id=id,
        name=id.replace("-", " ").title(),
        category=category,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fats_per_100g=fats,
        calories_per_100g=calories,
        equipment_needed=frozenset(equipment),
    )


@pytest.fixture
def chicken():
    # 165 kcal, 31g protein, 0g carbs, 3.6g fat
    return make_ingredient("chicken-breast", Category.PROTEIN, 31, 0, 3.6, 165, ("stove",))


@pytest.fixture
def rice():
    # 130 kcal, 2.7g protein, 28g carbs, 0.3g fat
    return make_ingredient("white-rice", Category.CARBS, 2.7, 28, 0.3, 130, ("stove",))


@pytest.fixture
def olive_oil():
    # 884 kcal, 100g fat
    return make_ingredient("olive-oil", Category.FATS, 0, 0, 100, 884)


@pytest.fixture
def broccoli():
    # 34 kcal, 2.8g protein, 7g carbs, 0.4g fat
    return make_ingredient("broccoli", Category.VEGETABLES, 2.8, 7, 0.4, 34)


@pytest.fixture
def salmon():
    return make_ingredient("salmon", Category.PROTEIN, 20, 0, 13, 208, ("oven",))


@pytest.fixture
def sweet_potato():
    return make_ingredient("sweet-potato", Category.CARBS, 1.6, 20, 0.1, 86, ("oven",))


@pytest.fixture
def avocado():
    return make_ingredient("avocado", Category.FATS, 2, 9, 15, 160)


@pytest.fixture
def salt():
    return make_ingredient("salt", Category.SEASONINGS)


@pytest.fixture
def sample_pool(chicken, rice, olive_oil):
    """The chicken / rice / olive oil pool."""
    return [chicken, rice, olive_oil]


@pytest.fixture
def full_pool(salmon, chicken, sweet_potato, rice, broccoli, avocado, olive_oil, salt):
    """Pool with several candidates per category plus a seasoning."""
    return [salmon, chicken, sweet_potato, rice, broccoli, avocado, olive_oil, salt]


@pytest.fixture
def targets():
    return MacroTargets(protein=150, carbs=200, fats=50)
