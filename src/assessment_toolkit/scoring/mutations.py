"""
Module: scoring.mutations

Purpose:
    Keeps a question's scoring document in step with its parts. Each
    helper takes the current document (or None) and returns the next one;
    inputs are never modified, and a helper either returns a fully
    updated document or raises, with nothing half-applied.

Key Functions:
    - on_part_created(config, part, max_level): Seed the new part's default
    - on_part_deleted(config, part): Drop its entry; None once empty
    - on_part_duplicated(config, source, duplicate, max_level): Copy entry
    - ensure_part_defaults(config, parts, max_level): Seed missing entries
    - set_part_scoring(config, part, scoring, parts, max_level): Gated edit
    - apply_config_edit(config, parts, max_level): Gate a whole document

Lifecycle:
    None --create--> {"version": "weighted", "partScoring": {id: default}}
    {..} --create/duplicate--> one more key
    {..} --delete--> one fewer key; last key removed -> None

    None means "scoring not yet defined", not "level 1 everywhere".

Domain edits:
    Changing a part's answer type, bounds or labels does not touch its
    entry. The stale entry then fails validation, which is how callers
    learn the part needs reconfiguring; regenerating here would erase
    the user's customisation.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from ..core.models.parts import PartId, QuestionPart
from ..core.models.scoring import PartScoring, WeightedScoringConfig
from .defaults import default_for_part
from .errors import PreconditionError, ScoringValidationError
from .policy import DEFAULT_POLICY, ScoringPolicy
from .validation import blocking_violations, validate_config

logger = logging.getLogger(__name__)


def _key(part: Union[QuestionPart, PartId]) -> str:
    return part.key if isinstance(part, QuestionPart) else str(part)


def on_part_created(
    config: Optional[WeightedScoringConfig],
    part: QuestionPart,
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[WeightedScoringConfig]:
    """
    Add the default scoring for a newly created part.

    Args:
        config: Current document, or None if the question has none yet
        part: The new part
        max_level: Number of levels on the rating scale

    Returns:
        Document including the new part's default; ``config`` unchanged
        if the part's type has no default

    Raises:
        PreconditionError: If the part already has an entry, or max_level < 1
    """
    if config is not None and part.key in config:
        raise PreconditionError(f"Part {part.key} already has a scoring entry")

    scoring = default_for_part(part, max_level, policy=policy)
    if scoring is None:
        logger.debug(f"Part {part.key} ({part.answer_type}) has no default scoring")
        return config

    base = config if config is not None else WeightedScoringConfig()
    logger.debug(f"Seeded default scoring for part {part.key}")
    return base.with_entry(part.key, scoring)


def on_part_deleted(
    config: Optional[WeightedScoringConfig],
    part: Union[QuestionPart, PartId],
) -> Optional[WeightedScoringConfig]:
    """
    Remove a deleted part's entry.

    Returns:
        The document without the part, or None if that emptied it
        (deleting a part that had no entry returns ``config`` as is)
    """
    if config is None:
        return None

    key = _key(part)
    if key not in config:
        return config

    updated = config.without_entry(key)
    if updated.is_empty:
        logger.debug(f"Removed last scoring entry ({key}); question has no mapping")
        return None
    return updated


def on_part_duplicated(
    config: Optional[WeightedScoringConfig],
    source: QuestionPart,
    duplicate: QuestionPart,
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[WeightedScoringConfig]:
    """
    Give a duplicated part the same scoring as its source.

    The source's entry is copied verbatim; the duplicate has the same
    domain, so the copy needs no re-validation. If the source has no
    entry, the duplicate gets a fresh default instead.

    Raises:
        PreconditionError: If the parts' domains differ, ids collide, or
            the duplicate already has an entry
    """
    if duplicate.key == source.key:
        raise PreconditionError(f"Duplicate must have a new id, got {duplicate.key}")
    if not source.same_domain_as(duplicate):
        raise PreconditionError(
            f"Duplicate {duplicate.key} does not share the domain of part {source.key}"
        )
    if config is not None and duplicate.key in config:
        raise PreconditionError(f"Part {duplicate.key} already has a scoring entry")

    existing = config.get(source.key) if config is not None else None
    if existing is None:
        logger.debug(f"Part {source.key} had no scoring; seeding default for {duplicate.key}")
        return on_part_created(config, duplicate, max_level, policy=policy)

    logger.debug(f"Copied scoring of part {source.key} to {duplicate.key}")
    return config.with_entry(duplicate.key, existing)


def ensure_part_defaults(
    config: Optional[WeightedScoringConfig],
    parts: Iterable[QuestionPart],
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Optional[WeightedScoringConfig]:
    """
    Seed a default for every part that lacks an entry.

    Existing entries are left exactly as they are. Used before scoring a
    question whose parts were created while no rating scale existed.
    """
    updated = config
    for part in parts:
        if updated is None or part.key not in updated:
            updated = on_part_created(updated, part, max_level, policy=policy)
    return updated


def apply_config_edit(
    config: WeightedScoringConfig,
    parts: Iterable[QuestionPart],
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> WeightedScoringConfig:
    """
    Accept an explicitly edited document only if it validates.

    Returns:
        ``config`` itself when it has no blocking violations

    Raises:
        ScoringValidationError: Listing every blocking violation
    """
    violations = validate_config(config, parts, max_level)
    blocking = blocking_violations(violations, policy)
    if blocking:
        raise ScoringValidationError(
            f"Scoring update rejected: {len(blocking)} blocking violation(s)",
            blocking,
        )
    for violation in violations:
        if not violation.is_blocking:
            logger.info(f"Accepted with warning: {violation.message}")
    return config


def set_part_scoring(
    config: Optional[WeightedScoringConfig],
    part: QuestionPart,
    scoring: PartScoring,
    parts: Iterable[QuestionPart],
    max_level: int,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> WeightedScoringConfig:
    """
    Replace one part's scoring, validating the resulting document.

    Raises:
        PreconditionError: If ``part`` is not among ``parts``
        ScoringValidationError: If the result has blocking violations
    """
    parts = list(parts)
    if part.key not in {p.key for p in parts}:
        raise PreconditionError(f"Part {part.key} is not a part of this question")

    base = config if config is not None else WeightedScoringConfig()
    return apply_config_edit(base.with_entry(part.key, scoring), parts, max_level, policy=policy)
