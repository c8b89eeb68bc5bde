"""Ingredient catalog and detection helpers."""

from macrochef.data.catalog import (
    EQUIPMENT_OPTIONS,
    INGREDIENTS,
    filter_by_equipment,
    get_catalog,
    load_catalog,
    select_ingredients,
)
from macrochef.data.detection import Detection, load_detections, merge_detections

__all__ = [
    "EQUIPMENT_OPTIONS",
    "INGREDIENTS",
    "Detection",
    "filter_by_equipment",
    "get_catalog",
    "load_catalog",
    "load_detections",
    "merge_detections",
    "select_ingredients",
]
