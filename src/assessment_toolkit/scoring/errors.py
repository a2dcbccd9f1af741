"""Errors raised by the scoring engine.

Structural problems in a scoring document are *not* errors: the validator
returns them as a list of Violation objects. Exceptions here are reserved
for calls the engine cannot answer at all.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .validation import Violation


class ScoringError(Exception):
    """Base class for scoring engine errors."""


class PreconditionError(ScoringError, ValueError):
    """Raised when an input violates a precondition (e.g. no levels to average)."""


class UnsupportedAnswerTypeError(PreconditionError):
    """Raised when an answer type has no scoring kind the engine knows."""


class ScoringValidationError(ScoringError):
    """Raised when an explicit edit would leave blocking violations."""

    def __init__(self, message: str, violations: Sequence[Violation]):
        super().__init__(message)
        self.violations = list(violations)
