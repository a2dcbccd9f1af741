"""
Module: scoring.scenarios

Purpose:
    Preview helpers for a scoring editor: sample responses that show how
    a document behaves at its extremes, and a one-line summary of the
    levels a part can reach.

Key Functions:
    - build_test_scenarios(parts, config, max_level): Min / max / mixed previews
    - summarize_part_levels(scoring, max_level): "→ Level n" style summary

Used By:
    - cli: `preview` command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.models.answers import ScoringKind
from ..core.models.parts import QuestionPart, sort_parts
from ..core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)
from .levels import Answer, overall_level, resolve_part_level
from .numeric import numeric_domain, snap_answer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TestScenario:
    """
    One previewed response.

    Attributes:
        name: Short title ("All Minimum", ...)
        description: One-line explanation
        answers: Part key -> sample answer
        part_levels: Level of each part, display order
        average_level: Overall level of the response
    """

    # Not a pytest test class despite the name
    __test__ = False

    name: str
    description: str
    answers: dict[str, Answer] = field(default_factory=dict)
    part_levels: list[int] = field(default_factory=list)
    average_level: int = 1

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "answers": dict(self.answers),
            "part_levels": list(self.part_levels),
            "average_level": self.average_level,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Sample answers
# ─────────────────────────────────────────────────────────────────────────────

def _boolean_answer(scoring: Optional[PartScoring], max_level: int, *, lowest: bool) -> bool:
    true_level, false_level = max_level, 1
    if isinstance(scoring, BooleanScoring):
        true_level = scoring.true_level if scoring.true_level is not None else max_level
        false_level = scoring.false_level if scoring.false_level is not None else 1
    if lowest:
        return not false_level <= true_level
    return true_level >= false_level


def _label_answer(
    part: QuestionPart,
    scoring: Optional[PartScoring],
    max_level: int,
    *,
    lowest: bool,
) -> str:
    labels = part.labels
    if not labels:
        return ""
    mapped = scoring.label_levels if isinstance(scoring, LabelledScaleScoring) else {}
    # Unmapped labels sort last in either direction
    if lowest:
        return min(labels, key=lambda label: mapped.get(label, max_level))
    return max(labels, key=lambda label: mapped.get(label, 1))


def _numeric_answer(
    part: QuestionPart,
    scoring: Optional[PartScoring],
    *,
    lowest: bool,
) -> float:
    domain = numeric_domain(part)
    if not isinstance(scoring, NumericScoring) or not scoring.ranges:
        return domain.min if lowest else domain.max

    if lowest:
        target = min(scoring.ranges, key=lambda r: (r.level, r.min))
        return min(max(target.min, domain.min), domain.max)
    target = max(scoring.ranges, key=lambda r: (r.level, r.max))
    return max(min(target.max, domain.max), domain.min)


def _extreme_answer(
    part: QuestionPart,
    scoring: Optional[PartScoring],
    max_level: int,
    *,
    lowest: bool,
) -> Answer:
    kind = part.kind
    if kind == ScoringKind.BOOLEAN:
        return _boolean_answer(scoring, max_level, lowest=lowest)
    if kind == ScoringKind.LABELLED_SCALE:
        return _label_answer(part, scoring, max_level, lowest=lowest)
    return _numeric_answer(part, scoring, lowest=lowest)


def _middle_answer(part: QuestionPart) -> Answer:
    kind = part.kind
    if kind == ScoringKind.BOOLEAN:
        return True
    if kind == ScoringKind.LABELLED_SCALE:
        labels = part.labels
        return labels[len(labels) // 2] if labels else ""
    domain = numeric_domain(part)
    return snap_answer(domain.min + (domain.max - domain.min) / 2, domain)


def _scenario(
    name: str,
    description: str,
    parts: list[QuestionPart],
    config: WeightedScoringConfig,
    answers: dict[str, Answer],
) -> TestScenario:
    levels = [resolve_part_level(part, config.get(part.key), answers[part.key]).level for part in parts]
    return TestScenario(
        name=name,
        description=description,
        answers=answers,
        part_levels=levels,
        average_level=overall_level(levels),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def build_test_scenarios(
    parts: Iterable[QuestionPart],
    config: Optional[WeightedScoringConfig],
    max_level: int,
) -> list[TestScenario]:
    """
    Preview the lowest, highest and a middling response to a question.

    Args:
        parts: The question's parts
        config: Its scoring document (None previews every part at fallback)
        max_level: Number of levels on the rating scale

    Returns:
        Scenarios "All Minimum", "All Maximum" and "Mixed Values", or []
        when there is nothing to preview
    """
    parts = sort_parts(parts)
    if not parts or max_level < 1:
        return []
    if config is None:
        config = WeightedScoringConfig()

    scenarios = []
    for name, description, lowest in (
        ("All Minimum", "Lowest levels from all parts", True),
        ("All Maximum", "Highest levels from all parts", False),
    ):
        answers = {
            part.key: _extreme_answer(part, config.get(part.key), max_level, lowest=lowest)
            for part in parts
        }
        scenarios.append(_scenario(name, description, parts, config, answers))

    answers = {part.key: _middle_answer(part) for part in parts}
    scenarios.append(_scenario("Mixed Values", "Middle/median answers", parts, config, answers))

    logger.debug(f"Built {len(scenarios)} preview scenarios for {len(parts)} parts")
    return scenarios


def summarize_part_levels(scoring: Optional[PartScoring], max_level: int) -> Optional[str]:
    """
    Summarize which levels a part's scoring can produce.

    Returns:
        "→ Level n" for one level, "→ All Levels" when every level of the
        scale is reachable, "→ Levels a-b" otherwise; None if nothing is
        mapped

    Example:
        >>> summarize_part_levels(BooleanScoring(3, 1), 5)
        '→ Levels 1-3'
    """
    if scoring is None:
        return None
    levels = sorted(set(scoring.levels()))
    if not levels:
        return None
    if len(levels) == 1:
        return f"→ Level {levels[0]}"
    if len(levels) == max_level:
        return "→ All Levels"
    return f"→ Levels {levels[0]}-{levels[-1]}"
