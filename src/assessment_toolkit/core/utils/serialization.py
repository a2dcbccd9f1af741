"""
Serialization Utilities

Provides to/from JSON utilities for question parts and weighted scoring
documents. This is the persistence boundary: the untyped
``rating_scale_mapping`` blob is checked against its schema and parsed
into a WeightedScoringConfig here, and nowhere else.

**SHAPE RESOLUTION:**

The stored document does not tag each entry with its kind. When the
question's parts are supplied, each entry is read as its part's kind;
otherwise (or when the stored shape contradicts the part) the kind is
inferred from the shape:

- JSON array                           -> numeric ranges
- object with both "true" and "false"  -> boolean
- any other object                     -> labelled scale

A contradicting entry is kept in its inferred shape so the scoring
validator can report it as the wrong kind rather than losing it here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..models.answers import ScoringKind
from ..models.parts import QuestionPart
from ..models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)
from ..schemas.validator import (
    validate_question_part,
    validate_scoring_document,
    ValidationError,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Part Scoring
# ─────────────────────────────────────────────────────────────────────────────

def infer_scoring_kind(data: Union[dict, list]) -> ScoringKind:
    """Infer a stored entry's kind from its JSON shape."""
    if isinstance(data, list):
        return ScoringKind.NUMERIC
    if "true" in data and "false" in data:
        return ScoringKind.BOOLEAN
    return ScoringKind.LABELLED_SCALE


def parse_part_scoring(
    data: Union[dict, list],
    kind: Optional[ScoringKind] = None,
) -> PartScoring:
    """
    Parse one stored ``partScoring`` entry.

    Args:
        data: The entry's JSON value
        kind: Expected kind (from the part), or None to infer from shape

    Returns:
        Typed PartScoring
    """
    shape_is_list = isinstance(data, list)
    # An object with neither boolean key is a label mapping, whatever the part says
    label_shaped = isinstance(data, dict) and bool(data) and not ({"true", "false"} & set(data))
    if (
        kind is None
        or shape_is_list != (kind == ScoringKind.NUMERIC)
        or (kind == ScoringKind.BOOLEAN and label_shaped)
    ):
        inferred = infer_scoring_kind(data)
        if kind is not None:
            logger.debug(f"Stored scoring shape is {inferred}, part expects {kind}")
        kind = inferred

    if kind == ScoringKind.NUMERIC:
        return NumericScoring.from_list(data)
    if kind == ScoringKind.BOOLEAN:
        return BooleanScoring.from_dict(data)
    return LabelledScaleScoring.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Scoring Document
# ─────────────────────────────────────────────────────────────────────────────

def serialize_config(config: Optional[WeightedScoringConfig]) -> Optional[dict[str, Any]]:
    """
    Serialize a scoring document to its stored JSON shape.

    Args:
        config: Document, or None for "no mapping configured"

    Returns:
        Dictionary suitable for JSON serialization, or None
    """
    if config is None:
        return None
    return config.to_dict()


def deserialize_config(
    data: Optional[dict[str, Any]],
    *,
    parts: Iterable[QuestionPart] | None = None,
    validate: bool = True,
) -> Optional[WeightedScoringConfig]:
    """
    Deserialize a stored scoring document.

    Args:
        data: Decoded JSON, or None when the question has no mapping
        parts: The question's parts, used to read each entry as its part's kind
        validate: Whether to check the schema first

    Returns:
        WeightedScoringConfig, or None if ``data`` is None

    Raises:
        ValidationError: If validate=True and the document is malformed
    """
    if data is None:
        return None

    if validate:
        validate_scoring_document(data)

    kinds = {part.key: part.kind for part in (parts or ())}
    entries = {
        str(key): parse_part_scoring(value, kinds.get(str(key)))
        for key, value in data["partScoring"].items()
    }
    return WeightedScoringConfig(entries, version=data["version"])


# ─────────────────────────────────────────────────────────────────────────────
# Question Parts
# ─────────────────────────────────────────────────────────────────────────────

def serialize_part(part: QuestionPart) -> dict[str, Any]:
    """Serialize a QuestionPart to a dictionary."""
    return part.to_dict()


def deserialize_part(data: dict[str, Any], *, validate: bool = True) -> QuestionPart:
    """
    Deserialize a QuestionPart from a dictionary.

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If the options contradict the answer type
    """
    if validate:
        validate_question_part(data)
    return QuestionPart.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# JSON Files
# ─────────────────────────────────────────────────────────────────────────────

def load_parts_json(path: Path, *, validate: bool = True) -> list[QuestionPart]:
    """
    Load a question's parts from a JSON array file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any part is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Parts file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])

    if not isinstance(data, list):
        raise ValidationError("Parts file must hold a JSON array", path=str(path))

    parts = []
    for index, item in enumerate(data):
        try:
            parts.append(deserialize_part(item, validate=validate))
        except (ValidationError, ValueError, KeyError) as e:
            raise ValidationError(
                f"Error parsing part {index}: {e}",
                path=str(path),
                errors=[str(e)],
            )
    return parts


def save_parts_json(parts: Iterable[QuestionPart], path: Path) -> None:
    """Save parts to a JSON array file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([serialize_part(p) for p in parts], f, indent=2, ensure_ascii=False)


def load_config_json(
    path: Path,
    *,
    parts: Iterable[QuestionPart] | None = None,
    validate: bool = True,
) -> Optional[WeightedScoringConfig]:
    """
    Load a scoring document from a JSON file.

    A file containing ``null`` loads as None (no mapping configured).
    """
    if not path.exists():
        raise FileNotFoundError(f"Scoring file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])

    return deserialize_config(data, parts=parts, validate=validate)


def save_config_json(config: Optional[WeightedScoringConfig], path: Path) -> None:
    """Save a scoring document (or ``null``) to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_config(config), f, indent=2, ensure_ascii=False)
