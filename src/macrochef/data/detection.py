"""Merge image-classifier detections into an ingredient selection.

The classifier itself is an external service; it returns one Detection
per recognized label. Only detections mapped to a catalog ingredient and
at or above the confidence threshold are added.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from macrochef.optimizer.models import DetectionError

DEFAULT_CONFIDENCE_THRESHOLD = 0.6


@dataclass(frozen=True)
class Detection:
    """One label reported by the classifier."""

    name: str
    confidence: float  # 0..1
    ingredient_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Detection":
        """Build from the classifier's JSON (``ingredientId`` or ``ingredient_id``).

        Raises:
            DetectionError: Not a mapping, missing name or confidence, or a
                non-numeric confidence
        """
        if not isinstance(data, dict):
            raise DetectionError(f"Detection must be an object, got {data!r}")
        try:
            name = str(data["name"])
            confidence = float(data["confidence"])
        except KeyError as e:
            raise DetectionError(f"Detection is missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise DetectionError(
                f"Detection {data.get('name')!r} has invalid confidence "
                f"{data.get('confidence')!r}"
            ) from e

        ingredient_id = data.get("ingredient_id", data.get("ingredientId"))
        return cls(
            name=name,
            confidence=confidence,
            ingredient_id=str(ingredient_id) if ingredient_id is not None else None,
        )


def load_detections(path: Path) -> list[Detection]:
    """Read a JSON list of classifier detections.

    Raises:
        DetectionError: Unreadable file, invalid JSON or malformed entries
    """
    try:
        with open(path) as f:
            raw = json.load(f)
    except OSError as e:
        raise DetectionError(f"Cannot read detections {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DetectionError(f"Invalid JSON in detections {path}: {e}") from e

    if not isinstance(raw, list):
        raise DetectionError(f"Detections {path} must contain a list")
    return [Detection.from_dict(entry) for entry in raw]


def accepted_detections(
    detections: Iterable[Detection],
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> list[Detection]:
    """Detections with an ingredient id and confidence >= threshold."""
    return [
        d for d in detections
        if d.ingredient_id is not None and d.confidence >= threshold
    ]


def merge_detections(
    selected_ids: Iterable[str],
    detections: Iterable[Detection],
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> list[str]:
    """Add accepted detections to the selected ingredient ids.

    Args:
        selected_ids: Ingredient ids already selected
        detections: Classifier output
        threshold: Minimum confidence to accept a detection

    Returns:
        Selected ids followed by newly detected ids, without duplicates
    """
    merged = list(dict.fromkeys(selected_ids))
    seen = set(merged)
    for detection in accepted_detections(detections, threshold):
        if detection.ingredient_id not in seen:
            merged.append(detection.ingredient_id)
            seen.add(detection.ingredient_id)
    return merged
