"""
Module: scoring.levels

Purpose:
    Resolves the rating level an answer earns on one part, and reduces
    the levels of all parts of a question to one overall level.

Key Functions:
    - level_for_part(part, scoring, answer): Level for one answer
    - resolve_part_level(part, scoring, answer): Same, flagged if it fell back
    - overall_level(levels): Arithmetic mean, rounded half-up
    - score_question(parts, config, answers): Per-part levels + overall

Fallbacks:
    The calculator is total over validated documents. On inputs a
    validated document cannot produce it still answers, and logs a
    warning so callers can treat it as a data-quality signal:

    - numeric answer outside every range -> highest stored level
      (an in-domain answer between two grid points, e.g. 24.5 on a
      whole-number domain, is first snapped down onto the grid)
    - anything else malformed (wrong kind, unknown label, missing
      boolean side, no ranges) -> level 1

Averaging:
    Parts weigh equally; the overall level is mean-then-round (not
    median, not weighted). Rounding is half-up: levels [1, 2] give 2.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..core.models.answers import ScoringKind
from ..core.models.parts import QuestionPart, sort_parts
from ..core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)
from .errors import PreconditionError, UnsupportedAnswerTypeError
from .numeric import is_number, numeric_domain, round_half_up, snap_answer

logger = logging.getLogger(__name__)

Answer = Union[bool, str, int, float]

# Level used when a malformed scoring cannot place an answer at all
FALLBACK_LEVEL = 1


@dataclass(frozen=True, slots=True)
class PartLevel:
    """
    Level resolved for one part's answer.

    Attributes:
        part_id: Part key
        level: Resolved level
        fallback: True if the level came from a defensive fallback rather
            than from a configured mapping
    """

    part_id: str
    level: int
    fallback: bool = False


@dataclass(frozen=True)
class QuestionScore:
    """Per-part levels (display order) and the question's overall level."""

    part_levels: Tuple[PartLevel, ...]
    overall: int

    @property
    def levels(self) -> list[int]:
        return [p.level for p in self.part_levels]

    @property
    def fallback_part_ids(self) -> list[str]:
        return [p.part_id for p in self.part_levels if p.fallback]

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "parts": [
                {"part_id": p.part_id, "level": p.level, "fallback": p.fallback}
                for p in self.part_levels
            ],
        }


# ─────────────────────────────────────────────────────────────────────────────
# Per-kind resolution
# ─────────────────────────────────────────────────────────────────────────────

def _fallback(part: QuestionPart, level: int, reason: str) -> PartLevel:
    logger.warning(f"Part {part.key}: {reason}; using level {level}")
    return PartLevel(part.key, level, fallback=True)


def _resolve_boolean(part: QuestionPart, scoring: BooleanScoring, answer: Answer) -> PartLevel:
    level = scoring.true_level if answer else scoring.false_level
    if level is None:
        return _fallback(part, FALLBACK_LEVEL, f"no level for answer {bool(answer)}")
    return PartLevel(part.key, level)


def _resolve_labelled(part: QuestionPart, scoring: LabelledScaleScoring, answer: Answer) -> PartLevel:
    level = scoring.label_levels.get(answer) if isinstance(answer, str) else None
    if level is None:
        return _fallback(part, FALLBACK_LEVEL, f"no level for label {answer!r}")
    return PartLevel(part.key, level)


def _resolve_numeric(part: QuestionPart, scoring: NumericScoring, answer: Answer) -> PartLevel:
    if not scoring.ranges:
        return _fallback(part, FALLBACK_LEVEL, "no ranges configured")
    if not is_number(answer):
        return _fallback(part, FALLBACK_LEVEL, f"non-numeric answer {answer!r}")

    # Stored order, first match wins
    for r in scoring.ranges:
        if r.contains(answer):
            return PartLevel(part.key, r.level)

    # In-domain answers between grid points belong to the range below
    snapped = snap_answer(answer, numeric_domain(part))
    if snapped != answer:
        for r in scoring.ranges:
            if r.contains(snapped):
                return PartLevel(part.key, r.level)

    highest = max(r.level for r in scoring.ranges)
    return _fallback(part, highest, f"answer {answer!r} is outside every configured range")


def resolve_part_level(
    part: QuestionPart,
    scoring: Optional[PartScoring],
    answer: Answer,
) -> PartLevel:
    """
    Resolve the level ``answer`` earns on ``part``, flagging fallbacks.

    Args:
        part: The answered part
        scoring: Its scoring entry
        answer: bool for boolean parts, the exact label for labelled
            scales, a number for numeric parts

    Returns:
        PartLevel with ``fallback=True`` when no configured mapping applied
    """
    if scoring is None:
        return _fallback(part, FALLBACK_LEVEL, "no scoring configured")

    kind = part.kind
    if scoring.kind != kind:
        return _fallback(part, FALLBACK_LEVEL, f"{kind} part has {scoring.kind} scoring")

    if kind == ScoringKind.BOOLEAN:
        return _resolve_boolean(part, scoring, answer)
    if kind == ScoringKind.LABELLED_SCALE:
        return _resolve_labelled(part, scoring, answer)
    if kind == ScoringKind.NUMERIC:
        return _resolve_numeric(part, scoring, answer)
    raise UnsupportedAnswerTypeError(f"Unhandled scoring kind: {kind!r}")


def level_for_part(part: QuestionPart, scoring: Optional[PartScoring], answer: Answer) -> int:
    """
    Level ``answer`` earns on ``part``.

    Example:
        >>> part = QuestionPart(1, "Certified?", AnswerType.BOOLEAN)
        >>> level_for_part(part, BooleanScoring(5, 1), True)
        5
    """
    return resolve_part_level(part, scoring, answer).level


# ─────────────────────────────────────────────────────────────────────────────
# Question level
# ─────────────────────────────────────────────────────────────────────────────

def overall_level(levels: Sequence[int]) -> int:
    """
    Mean of the part levels, rounded half-up.

    Raises:
        PreconditionError: If ``levels`` is empty (every question has a part)

    Example:
        >>> overall_level([1, 2])
        2
    """
    levels = list(levels)
    if not levels:
        raise PreconditionError("Cannot compute an overall level from no part levels")
    return round_half_up(sum(levels) / len(levels))


def score_question(
    parts: Iterable[QuestionPart],
    config: Optional[WeightedScoringConfig],
    answers: Mapping[Any, Answer],
) -> QuestionScore:
    """
    Score one response to a question.

    Args:
        parts: The question's live parts
        config: The question's scoring document
        answers: Part id (int or str) -> answer

    Returns:
        QuestionScore with levels in display order

    Raises:
        PreconditionError: If there are no parts, no document, or a part
            has no answer or no scoring entry
    """
    parts = sort_parts(parts)
    if not parts:
        raise PreconditionError("Question has no parts to score")
    if config is None:
        raise PreconditionError("Question has no scoring configured")

    by_key = {str(k): v for k, v in answers.items()}
    resolved = []
    for part in parts:
        if part.key not in by_key:
            raise PreconditionError(f"No answer for part {part.key}")
        scoring = config.get(part.key)
        if scoring is None:
            raise PreconditionError(f"Part {part.key} has no scoring entry")
        resolved.append(resolve_part_level(part, scoring, by_key[part.key]))

    score = QuestionScore(tuple(resolved), overall_level([p.level for p in resolved]))
    if score.fallback_part_ids:
        logger.warning(f"Score used fallback levels for parts {score.fallback_part_ids}")
    return score
