"""
Schema Validation Utilities

Validates stored JSON against the persistence-boundary schemas before it
is turned into typed models.

**SCOPE:**

This layer only answers "is this the right shape?": required keys, JSON
types, the version tag. Whether a well-shaped document is a *correct*
mapping for a question's parts (coverage, level ranges, unmapped labels)
is the scoring validator's job, see `scoring.validation`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.scoring import WEIGHTED_SCORING_VERSION


# Schema file names (without the .schema.json suffix)
SCORING_SCHEMA = "weighted_scoring"
PART_SCHEMA = "question_part"


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _check(data: Any, schema_name: str, what: str) -> None:
    """Run the named schema and raise one ValidationError listing every failure."""
    validator = jsonschema.Draft202012Validator(_load_schema(schema_name))
    failures = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not failures:
        return

    first = failures[0]
    path = ".".join(str(p) for p in first.absolute_path)
    raise ValidationError(
        f"{what} failed schema validation: {first.message}",
        path=path,
        errors=[
            f"{'.'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
            for e in failures
        ],
    )


def validate_scoring_document(data: Any) -> None:
    """
    Validate a stored weighted scoring document.

    Args:
        data: Decoded JSON (the ``rating_scale_mapping`` value)

    Raises:
        ValidationError: If the shape or version is wrong
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Scoring document must be a JSON object, got {type(data).__name__}"
        )

    missing = [f for f in ("version", "partScoring") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("version")
    if version != WEIGHTED_SCORING_VERSION:
        raise ValidationError(
            f"Unsupported scoring document version: {version!r} "
            f"(expected {WEIGHTED_SCORING_VERSION!r})",
            path="version",
        )

    _check(data, SCORING_SCHEMA, "Scoring document")


def validate_question_part(data: Any) -> None:
    """
    Validate a stored question part.

    Args:
        data: Decoded JSON for one part

    Raises:
        ValidationError: If required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Question part must be a JSON object, got {type(data).__name__}"
        )

    missing = [f for f in ("id", "answer_type") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    _check(data, PART_SCHEMA, f"Question part {data.get('id')!r}")
