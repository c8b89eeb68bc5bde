"""Ingredient and equipment catalog.

The built-in catalog covers common grocery-store ingredients with macro
densities per 100g. A custom catalog can be loaded from a YAML file with
the same fields. Catalog entries are created once and never mutated.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from macrochef.optimizer.models import CatalogError, Category, Ingredient

# =============================================================================
# Equipment
# =============================================================================

EQUIPMENT_OPTIONS: dict[str, str] = {
    "stove": "Stove",
    "oven": "Oven",
    "microwave": "Microwave",
    "air-fryer": "Air Fryer",
    "grill": "Grill",
    "rice-cooker": "Rice Cooker",
    "blender": "Blender",
    "none": "No Equipment",
}


def _ing(
    id: str,
    name: str,
    category: Category,
    protein: float,
    carbs: float,
    fats: float,
    calories: float,
    methods: Iterable[str] = (),
    equipment: Iterable[str] = (),
) -> Ingredient:
    return Ingredient(
        id=id,
        name=name,
        category=category,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fats_per_100g=fats,
        calories_per_100g=calories,
        cooking_methods=frozenset(methods),
        equipment_needed=frozenset(equipment),
    )


# =============================================================================
# Built-in ingredients (per 100g)
# =============================================================================

INGREDIENTS: list[Ingredient] = [
    # Protein
    _ing("chicken-breast", "Chicken Breast", Category.PROTEIN, 31, 0, 3.6, 165,
         ["bake", "pan-fry", "grill", "air-fry"], ["oven", "stove", "grill", "air-fryer"]),
    _ing("salmon", "Salmon Fillet", Category.PROTEIN, 20, 0, 13, 208,
         ["bake", "pan-fry", "grill", "air-fry"], ["oven", "stove", "grill", "air-fryer"]),
    _ing("ground-beef", "Lean Ground Beef", Category.PROTEIN, 26, 0, 15, 250,
         ["pan-fry", "grill"], ["stove", "grill"]),
    _ing("eggs", "Eggs", Category.PROTEIN, 13, 1.1, 11, 155,
         ["pan-fry", "boil"], ["stove"]),
    _ing("tofu", "Firm Tofu", Category.PROTEIN, 17, 3, 9, 144,
         ["pan-fry", "bake", "air-fry", "none"], ["stove", "oven", "air-fryer"]),
    _ing("greek-yogurt", "Greek Yogurt", Category.PROTEIN, 10, 3.6, 0.4, 59,
         ["none"], []),
    _ing("canned-tuna", "Canned Tuna", Category.PROTEIN, 26, 0, 1, 116,
         ["none"], []),
    # Carbs
    _ing("white-rice", "White Rice", Category.CARBS, 2.7, 28, 0.3, 130,
         ["boil"], ["stove", "rice-cooker"]),
    _ing("brown-rice", "Brown Rice", Category.CARBS, 2.6, 23, 0.9, 111,
         ["boil"], ["stove", "rice-cooker"]),
    _ing("pasta", "Pasta", Category.CARBS, 5, 25, 1.1, 131,
         ["boil"], ["stove"]),
    _ing("sweet-potato", "Sweet Potato", Category.CARBS, 1.6, 20, 0.1, 86,
         ["bake", "microwave", "boil"], ["oven", "microwave", "stove"]),
    _ing("oats", "Rolled Oats", Category.CARBS, 13, 68, 6.5, 379,
         ["boil", "microwave", "none"], ["stove", "microwave"]),
    _ing("quinoa", "Quinoa", Category.CARBS, 4.4, 21, 1.9, 120,
         ["boil"], ["stove", "rice-cooker"]),
    _ing("whole-wheat-bread", "Whole Wheat Bread", Category.CARBS, 13, 41, 3.4, 247,
         ["none"], []),
    _ing("banana", "Banana", Category.CARBS, 1.1, 23, 0.3, 89,
         ["none"], []),
    # Vegetables
    _ing("broccoli", "Broccoli", Category.VEGETABLES, 2.8, 7, 0.4, 34,
         ["steam", "roast", "sauté", "raw"], ["stove", "oven", "microwave"]),
    _ing("spinach", "Spinach", Category.VEGETABLES, 2.9, 3.6, 0.4, 23,
         ["sauté", "raw"], ["stove"]),
    _ing("bell-pepper", "Bell Pepper", Category.VEGETABLES, 1, 6, 0.3, 31,
         ["sauté", "roast", "raw"], ["stove", "oven"]),
    _ing("zucchini", "Zucchini", Category.VEGETABLES, 1.2, 3.1, 0.3, 17,
         ["sauté", "roast", "grill"], ["stove", "oven", "grill"]),
    _ing("carrots", "Carrots", Category.VEGETABLES, 0.9, 10, 0.2, 41,
         ["steam", "roast", "raw"], ["stove", "oven", "microwave"]),
    # Fats
    _ing("olive-oil", "Olive Oil", Category.FATS, 0, 0, 100, 884,
         ["none"], []),
    _ing("butter", "Butter", Category.FATS, 0.9, 0.1, 81, 717,
         ["none"], []),
    _ing("avocado", "Avocado", Category.FATS, 2, 9, 15, 160,
         ["none"], []),
    _ing("almonds", "Almonds", Category.FATS, 21, 22, 49, 579,
         ["none"], []),
    _ing("peanut-butter", "Peanut Butter", Category.FATS, 25, 20, 50, 588,
         ["none", "blend"], []),
    # Seasonings
    _ing("garlic", "Garlic", Category.SEASONINGS, 6.4, 33, 0.5, 149,
         ["sauté", "roast"], []),
    _ing("salt", "Salt", Category.SEASONINGS, 0, 0, 0, 0, ["none"], []),
    _ing("black-pepper", "Black Pepper", Category.SEASONINGS, 10, 64, 3.3, 251,
         ["none"], []),
]


def get_catalog(path: Optional[Path] = None) -> list[Ingredient]:
    """Return the built-in catalog, or the YAML catalog at ``path``."""
    if path is None:
        return list(INGREDIENTS)
    return load_catalog(path)


def _parse_ingredient(entry: dict[str, Any], position: int) -> Ingredient:
    """Build an Ingredient from one YAML mapping."""
    if not isinstance(entry, dict):
        raise CatalogError(f"Catalog entry {position}: expected a mapping, got {entry!r}")
    try:
        category = Category(entry["category"])
    except KeyError as e:
        raise CatalogError(f"Catalog entry {position}: missing field {e}") from e
    except ValueError as e:
        raise CatalogError(
            f"Catalog entry {position}: unknown category {entry['category']!r}"
        ) from e

    try:
        return Ingredient(
            id=str(entry["id"]),
            name=str(entry.get("name", entry["id"])),
            category=category,
            protein_per_100g=float(entry.get("protein_per_100g", 0)),
            carbs_per_100g=float(entry.get("carbs_per_100g", 0)),
            fats_per_100g=float(entry.get("fats_per_100g", 0)),
            calories_per_100g=float(entry.get("calories_per_100g", 0)),
            cooking_methods=frozenset(entry.get("cooking_methods", []) or []),
            equipment_needed=frozenset(entry.get("equipment_needed", []) or []),
        )
    except KeyError as e:
        raise CatalogError(f"Catalog entry {position}: missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Catalog entry {position}: {e}") from e


def load_catalog(path: Path) -> list[Ingredient]:
    """Load ingredients from a YAML file.

    The file holds either a list of ingredient mappings or a mapping with
    an ``ingredients`` key. Each mapping uses the Ingredient field names.

    Args:
        path: Path to the YAML catalog

    Returns:
        Ingredients in file order

    Raises:
        CatalogError: Unreadable file, bad entries or duplicate ids
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("ingredients")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of ingredients")

    ingredients = [_parse_ingredient(entry, i) for i, entry in enumerate(data)]

    seen: set[str] = set()
    for ing in ingredients:
        if ing.id in seen:
            raise CatalogError(f"Duplicate ingredient id in catalog: {ing.id}")
        seen.add(ing.id)

    return ingredients


def filter_by_equipment(
    ingredients: Iterable[Ingredient],
    equipment: Iterable[str],
) -> list[Ingredient]:
    """Keep ingredients that can be prepared with the available equipment.

    An ingredient qualifies when it needs no equipment or when any one of
    its listed equipment is available. Pool order is preserved.
    """
    available = set(equipment)
    return [
        ing for ing in ingredients
        if not ing.equipment_needed or ing.equipment_needed & available
    ]


def select_ingredients(
    catalog: Iterable[Ingredient],
    ingredient_ids: Iterable[str],
) -> list[Ingredient]:
    """Catalog entries for the given ids, in catalog order.

    Raises:
        CatalogError: If any id is not in the catalog
    """
    catalog = list(catalog)
    wanted = set(ingredient_ids)
    known = {ing.id for ing in catalog}
    unknown = sorted(wanted - known)
    if unknown:
        raise CatalogError(f"Unknown ingredient id(s): {', '.join(unknown)}")
    return [ing for ing in catalog if ing.id in wanted]


def get_ingredients_by_category(
    ingredients: Iterable[Ingredient],
    category: Category,
) -> list[Ingredient]:
    return [ing for ing in ingredients if ing.category == category]
