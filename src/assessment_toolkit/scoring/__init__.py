"""
Module: scoring

Purpose:
    Weighted scoring engine for composite questions. Generates default
    part-to-level mappings, validates them against the live parts and
    rating scale, keeps them in step with part edits, and turns answers
    into per-part and overall rating levels.

Key Functions:
    - generate_default(): Default scoring for one part
    - validate_config(): Every violation in a scoring document
    - on_part_created() / on_part_deleted() / on_part_duplicated(): Lifecycle
    - level_for_part(): Level one answer earns
    - overall_level(): Mean of part levels, rounded half-up

Key Classes:
    - ScoringPolicy: Polarity and severity defaults
    - Violation: One problem in a scoring document

Dependencies:
    - assessment_toolkit.core.models: Typed parts and scoring documents

Used By:
    - assessment_toolkit.cli: Command-line front end
"""

from .defaults import create_default_config, default_for_part, generate_default
from .errors import (
    PreconditionError,
    ScoringError,
    ScoringValidationError,
    UnsupportedAnswerTypeError,
)
from .levels import (
    PartLevel,
    QuestionScore,
    level_for_part,
    overall_level,
    resolve_part_level,
    score_question,
)
from .mutations import (
    apply_config_edit,
    ensure_part_defaults,
    on_part_created,
    on_part_deleted,
    on_part_duplicated,
    set_part_scoring,
)
from .policy import DEFAULT_POLICY, ScoringPolicy, load_policy_json
from .scenarios import TestScenario, build_test_scenarios, summarize_part_levels
from .validation import (
    Severity,
    Violation,
    blocking_violations,
    is_valid,
    validate_config,
    validate_part_scoring,
)

__all__ = [
    # Defaults
    "generate_default",
    "default_for_part",
    "create_default_config",
    # Validation
    "validate_config",
    "validate_part_scoring",
    "blocking_violations",
    "is_valid",
    "Violation",
    "Severity",
    # Lifecycle
    "on_part_created",
    "on_part_deleted",
    "on_part_duplicated",
    "ensure_part_defaults",
    "apply_config_edit",
    "set_part_scoring",
    # Levels
    "level_for_part",
    "resolve_part_level",
    "overall_level",
    "score_question",
    "PartLevel",
    "QuestionScore",
    # Preview
    "build_test_scenarios",
    "summarize_part_levels",
    "TestScenario",
    # Policy
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "load_policy_json",
    # Errors
    "ScoringError",
    "PreconditionError",
    "UnsupportedAnswerTypeError",
    "ScoringValidationError",
]
