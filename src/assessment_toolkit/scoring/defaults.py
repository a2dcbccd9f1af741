"""
Module: scoring.defaults

Purpose:
    Generates the initial scoring for a part from its answer type, its
    declared domain and the size of the rating scale. Every generated
    scoring passes scoring.validation for the same part and scale.

Key Functions:
    - generate_default(answer_type, options, max_level): One part's default
    - default_for_part(part, max_level): Same, from a QuestionPart
    - default_numeric_ranges(options, max_level): Equal-width ranges
    - create_default_config(parts, max_level): Whole-question document

Dependencies:
    - core.models
    - scoring.numeric, scoring.policy

Used By:
    - scoring.mutations: seeding new and duplicated parts
    - cli: `defaults` command

Policy:
    Boolean True -> top level, False -> level 1 is a business assumption,
    not derived from data. It lives in ScoringPolicy.affirmative_is_best
    so it can be reversed without touching this module.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.models.answers import (
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
    PartOptions,
    ScoringKind,
)
from ..core.models.parts import QuestionPart
from ..core.models.scoring import (
    BooleanScoring,
    LabelledScaleScoring,
    NumericRange,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)
from .errors import PreconditionError, UnsupportedAnswerTypeError
from .numeric import round_bound, round_half_up, snap_to_grid
from .policy import DEFAULT_POLICY, ScoringPolicy

logger = logging.getLogger(__name__)


def check_max_level(max_level: int) -> None:
    """Raise PreconditionError unless the rating scale has at least one level."""
    if isinstance(max_level, bool) or not isinstance(max_level, int) or max_level < 1:
        raise PreconditionError(f"max_level must be an integer >= 1: {max_level!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Per-kind generators
# ─────────────────────────────────────────────────────────────────────────────

def default_boolean(max_level: int, policy: ScoringPolicy = DEFAULT_POLICY) -> BooleanScoring:
    """Boolean default, polarity from the policy."""
    true_level, false_level = policy.boolean_levels(max_level)
    return BooleanScoring(true_level=true_level, false_level=false_level)


def default_label_levels(labels: Iterable[str], max_level: int) -> LabelledScaleScoring:
    """
    Spread labels linearly over [1, max_level] by declared order.

    A single label maps to max_level; otherwise label i of L maps to
    round_half_up(1 + i / (L - 1) * (max_level - 1)), so the first label
    is 1, the last is max_level, and levels never decrease along the list.

    Example:
        >>> default_label_levels(["Never", "Sometimes", "Always"], 5).to_dict()
        {'Never': 1, 'Sometimes': 3, 'Always': 5}
    """
    labels = list(labels)
    if len(labels) == 1:
        return LabelledScaleScoring({labels[0]: max_level})

    span = len(labels) - 1
    return LabelledScaleScoring({
        label: round_half_up(1 + index / span * (max_level - 1))
        for index, label in enumerate(labels)
    })


def default_numeric_ranges(
    options: NumericOptions,
    max_level: int,
    *,
    reversed: bool = False,
) -> NumericScoring:
    """
    Split [min, max] into max_level contiguous ranges of equal width.

    Boundaries are computed once from the shared range size and snapped
    to the domain's resolution, then each non-final range ends one
    resolution unit before the next boundary. The final range ends at
    exactly ``max``. Ranges narrower than one resolution unit (more levels
    than distinct answers) are left out rather than emitted empty, so the
    output always covers the domain without gaps or overlaps.

    Args:
        options: Declared numeric domain
        max_level: Number of rating levels
        reversed: If True, higher values map to lower levels

    Returns:
        NumericScoring ordered by ascending min

    Example:
        >>> [(r.min, r.max, r.level) for r in default_numeric_ranges(NumericOptions(0, 100), 4)]
        [(0, 24, 1), (25, 49, 2), (50, 74, 3), (75, 100, 4)]
    """
    lo, hi = options.min, options.max
    resolution = options.resolution
    range_size = (hi - lo) / max_level

    boundaries = [snap_to_grid(lo + i * range_size, lo, resolution) for i in range(1, max_level)]

    ranges: list[NumericRange] = []
    start = lo
    for i in range(max_level):
        level = max_level - i if reversed else i + 1
        if i == max_level - 1:
            ranges.append(NumericRange(min=start, max=hi, level=level))
            break

        end = round_bound(boundaries[i] - resolution, resolution)
        if end < start:
            # Level gets no answers of its own; its share folds into the next range
            logger.debug(
                f"Skipping empty default range for level {level} "
                f"(domain [{lo}, {hi}] narrower than {max_level} levels)"
            )
            continue
        ranges.append(NumericRange(min=start, max=end, level=level))
        start = boundaries[i]

    return NumericScoring(tuple(ranges))


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def generate_default(
    answer_type: AnswerType,
    options: PartOptions,
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[PartScoring]:
    """
    Generate the default scoring for one part.

    Args:
        answer_type: The part's answer type
        options: The part's declared domain (None for boolean)
        max_level: Number of levels on the question's rating scale
        policy: Polarity / direction defaults

    Returns:
        A scoring that validates against the same domain, or None for an
        answer type with no ordinal structure (none of the current types)

    Raises:
        PreconditionError: If max_level < 1 or options do not match the type
    """
    check_max_level(max_level)

    try:
        kind = AnswerType(answer_type).kind
    except ValueError:
        logger.debug(f"No default scoring for answer type {answer_type!r}")
        return None

    if kind == ScoringKind.BOOLEAN:
        return default_boolean(max_level, policy)

    if kind == ScoringKind.LABELLED_SCALE:
        if not isinstance(options, LabelledScaleOptions):
            raise PreconditionError(
                f"{answer_type} needs LabelledScaleOptions, got {type(options).__name__}"
            )
        return default_label_levels(options.labels, max_level)

    if kind == ScoringKind.NUMERIC:
        if not isinstance(options, NumericOptions):
            raise PreconditionError(
                f"{answer_type} needs NumericOptions, got {type(options).__name__}"
            )
        return default_numeric_ranges(options, max_level, reversed=policy.numeric_reversed)

    raise UnsupportedAnswerTypeError(f"Unhandled scoring kind: {kind!r}")


def default_for_part(
    part: QuestionPart,
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[PartScoring]:
    """generate_default() for an existing part."""
    return generate_default(part.answer_type, part.options, max_level, policy=policy)


def create_default_config(
    parts: Iterable[QuestionPart],
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[WeightedScoringConfig]:
    """
    Build a document holding the default scoring of every part.

    Returns:
        WeightedScoringConfig, or None when no part has a default
    """
    check_max_level(max_level)
    entries = {}
    for part in parts:
        scoring = default_for_part(part, max_level, policy=policy)
        if scoring is not None:
            entries[part.key] = scoring

    if not entries:
        return None
    logger.debug(f"Created default scoring for {len(entries)} parts at {max_level} levels")
    return WeightedScoringConfig(entries)
