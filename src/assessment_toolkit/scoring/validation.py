"""
Module: scoring.validation

Purpose:
    Structural validation of a question's scoring document against its
    live parts and rating scale. Pure: returns every problem found, in
    one pass, as Violation objects; never raises for a bad document.

Key Functions:
    - validate_config(config, parts, max_level): All violations
    - validate_part_scoring(part, scoring, max_level): One part's violations
    - blocking_violations(violations, policy): Those that should stop a save
    - is_valid(config, parts, max_level): No blocking violations

Checks:
    - every part has an entry of its own kind; no entry without a part
    - boolean: both answers mapped to a level in [1, N]
    - labelled scale: every current label mapped to a level in [1, N];
      labels no longer on the part are advisory (WARNING)
    - numeric: at least one range; each range inside the domain and not
      inverted; levels in [1, N]; no two ranges overlap (inclusive bounds);
      sorted by min, the ranges cover [min, max] with no gap wider than
      the domain's resolution

There are no cross-part checks: parts are scored independently.
A one-level scale gets no shortcut; structure is still checked in full.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from ..core.models.answers import NumericOptions, ScoringKind
from ..core.models.parts import QuestionPart, sort_parts
from ..core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericRange,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)
from .defaults import check_max_level
from .errors import UnsupportedAnswerTypeError
from .numeric import at_most, canonicalize_ranges, is_level, is_number, numeric_domain
from .policy import DEFAULT_POLICY, ScoringPolicy


class Severity(str, Enum):
    """How a violation should be treated by an editor."""
    ERROR = "error"      # Blocks saving the document
    WARNING = "warning"  # Shown, does not block

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Violation:
    """
    One problem found in a scoring document.

    Attributes:
        part_id: Key of the offending part (or orphan entry)
        code: Stable machine-readable identifier, e.g. "coverage_gap"
        message: Human-readable description naming the part
        severity: ERROR (blocking) or WARNING (advisory)
    """

    part_id: Optional[str]
    code: str
    message: str
    severity: Severity = Severity.ERROR

    @property
    def is_blocking(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "part_id": self.part_id,
            "code": self.code,
            "message": self.message,
            "severity": str(self.severity),
        }

    def __str__(self) -> str:
        return f"[{self.severity}] {self.message}"


def _error(part_id: Optional[str], code: str, message: str) -> Violation:
    return Violation(part_id, code, message, Severity.ERROR)


def _warning(part_id: Optional[str], code: str, message: str) -> Violation:
    return Violation(part_id, code, message, Severity.WARNING)


def _fmt(value: float) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def _span(r: NumericRange) -> str:
    return f"[{_fmt(r.min)}, {_fmt(r.max)}]"


# ─────────────────────────────────────────────────────────────────────────────
# Per-kind checks
# ─────────────────────────────────────────────────────────────────────────────

def _check_boolean(part: QuestionPart, scoring: BooleanScoring, max_level: int) -> list[Violation]:
    violations = []
    for answer, level in (("true", scoring.true_level), ("false", scoring.false_level)):
        if level is None:
            violations.append(_error(
                part.key, "missing_level",
                f"Part {part.key}: no level for answer '{answer}'",
            ))
        elif not is_level(level, max_level):
            violations.append(_error(
                part.key, "level_out_of_range",
                f"Part {part.key}: level {level!r} for answer '{answer}' "
                f"must be an integer in [1, {max_level}]",
            ))
    return violations


def _check_labelled(
    part: QuestionPart,
    scoring: LabelledScaleScoring,
    max_level: int,
) -> list[Violation]:
    violations = []
    mapped = scoring.label_levels
    live = part.labels

    for label in live:
        if label not in mapped:
            violations.append(_error(
                part.key, "unmapped_label",
                f"Part {part.key}: label {label!r} has no level",
            ))

    for label, level in mapped.items():
        if not is_level(level, max_level):
            violations.append(_error(
                part.key, "level_out_of_range",
                f"Part {part.key}: level {level!r} for label {label!r} "
                f"must be an integer in [1, {max_level}]",
            ))
        if label not in live:
            violations.append(_warning(
                part.key, "stale_label",
                f"Part {part.key}: label {label!r} is no longer offered by the part",
            ))
    return violations


def _check_numeric(part: QuestionPart, scoring: NumericScoring, max_level: int) -> list[Violation]:
    domain = numeric_domain(part)
    key = part.key

    if not scoring.ranges:
        return [_error(key, "no_ranges", f"Part {key}: no ranges configured")]

    violations = []
    well_formed: list[NumericRange] = []
    for index, r in enumerate(scoring.ranges, 1):
        if not (is_number(r.min) and is_number(r.max)):
            violations.append(_error(
                key, "invalid_range",
                f"Part {key}: range {index} bounds must be numbers ({r.min!r}, {r.max!r})",
            ))
            continue
        if not is_level(r.level, max_level):
            violations.append(_error(
                key, "level_out_of_range",
                f"Part {key}: range {_span(r)} level {r.level!r} "
                f"must be an integer in [1, {max_level}]",
            ))
        if r.min > r.max:
            violations.append(_error(
                key, "inverted_range",
                f"Part {key}: range {index} has min {_fmt(r.min)} above max {_fmt(r.max)}",
            ))
            continue
        if not (at_most(domain.min, r.min) and at_most(r.max, domain.max)):
            violations.append(_error(
                key, "range_outside_domain",
                f"Part {key}: range {_span(r)} lies outside the domain "
                f"[{_fmt(domain.min)}, {_fmt(domain.max)}]",
            ))
        well_formed.append(r)

    if not well_formed:
        return violations

    ordered = canonicalize_ranges(well_formed)
    violations.extend(_overlaps(key, ordered))
    violations.extend(_coverage(key, ordered, domain))
    return violations


def _overlaps(key: str, ordered: Sequence[NumericRange]) -> list[Violation]:
    """Every overlapping pair; ``ordered`` must be canonical."""
    violations = []
    for i, a in enumerate(ordered):
        for b in ordered[i + 1:]:
            if b.min > a.max:
                break  # sorted by min: nothing later can touch a
            if a.overlaps(b):
                violations.append(_error(
                    key, "overlapping_ranges",
                    f"Part {key}: ranges {_span(a)} and {_span(b)} overlap",
                ))
    return violations


def _coverage(key: str, ordered: Sequence[NumericRange], domain: NumericOptions) -> list[Violation]:
    """Gaps and uncovered ends; ``ordered`` must be canonical."""
    violations = []
    resolution = domain.resolution

    first = ordered[0]
    if not at_most(first.min, domain.min):
        violations.append(_error(
            key, "coverage_gap",
            f"Part {key}: values from {_fmt(domain.min)} up to {_fmt(first.min)} "
            f"are not covered by any range",
        ))

    covered_to = first.max
    for r in ordered[1:]:
        if not at_most(r.min, covered_to + resolution):
            violations.append(_error(
                key, "coverage_gap",
                f"Part {key}: gap between {_fmt(covered_to)} and {_fmt(r.min)}",
            ))
        covered_to = max(covered_to, r.max)

    if not at_most(domain.max, covered_to):
        violations.append(_error(
            key, "incomplete_coverage",
            f"Part {key}: ranges stop at {_fmt(covered_to)}, "
            f"domain maximum {_fmt(domain.max)} is not covered",
        ))
    return violations


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def validate_part_scoring(
    part: QuestionPart,
    scoring: Optional[PartScoring],
    max_level: int,
) -> list[Violation]:
    """
    Validate one part's scoring.

    Args:
        part: The live part
        scoring: Its entry in the document, or None if absent
        max_level: Number of levels on the rating scale

    Returns:
        Violations for this part (empty if valid)
    """
    check_max_level(max_level)

    if scoring is None:
        return [_error(part.key, "missing_entry", f"Part {part.key}: no scoring configured")]

    kind = part.kind
    if scoring.kind != kind:
        return [_error(
            part.key, "wrong_kind",
            f"Part {part.key}: {part.answer_type} part has {scoring.kind} scoring",
        )]

    if kind == ScoringKind.BOOLEAN:
        return _check_boolean(part, scoring, max_level)
    if kind == ScoringKind.LABELLED_SCALE:
        return _check_labelled(part, scoring, max_level)
    if kind == ScoringKind.NUMERIC:
        return _check_numeric(part, scoring, max_level)
    raise UnsupportedAnswerTypeError(f"Unhandled scoring kind: {kind!r}")


def validate_config(
    config: Optional[WeightedScoringConfig],
    parts: Iterable[QuestionPart],
    max_level: int,
) -> list[Violation]:
    """
    Validate a question's whole scoring document.

    Every part is checked independently and all violations are returned,
    so an editor can show every problem at once.

    Args:
        config: The document, or None when none is configured yet
        parts: The question's live parts
        max_level: Number of levels on the rating scale

    Returns:
        All violations, parts in display order then orphan entries
        (empty list means valid)

    Raises:
        PreconditionError: If max_level < 1
    """
    check_max_level(max_level)
    parts = sort_parts(parts)
    entries = config.part_scoring if config is not None else {}

    violations: list[Violation] = []
    for part in parts:
        violations.extend(validate_part_scoring(part, entries.get(part.key), max_level))

    live_keys = {part.key for part in parts}
    for key in sorted(entries):
        if key not in live_keys:
            violations.append(_error(
                key, "orphan_entry",
                f"Scoring entry {key} does not belong to any part of this question",
            ))
    return violations


def blocking_violations(
    violations: Iterable[Violation],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> list[Violation]:
    """Violations that should stop a save under ``policy``."""
    if policy.block_on_warnings:
        return list(violations)
    return [v for v in violations if v.is_blocking]


def is_valid(
    config: Optional[WeightedScoringConfig],
    parts: Iterable[QuestionPart],
    max_level: int,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> bool:
    """True when the document has no blocking violations."""
    return not blocking_violations(validate_config(config, parts, max_level), policy)
