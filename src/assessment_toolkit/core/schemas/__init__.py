"""
Schemas Package

JSON schema definitions and validation utilities for stored documents.
"""

from .validator import (
    validate_scoring_document,
    validate_question_part,
    ValidationError,
)
from ..models.scoring import WEIGHTED_SCORING_VERSION

__all__ = [
    "validate_scoring_document",
    "validate_question_part",
    "ValidationError",
    "WEIGHTED_SCORING_VERSION",
]
