"""
Core Models Package

Immutable data models for question parts and their scoring configuration.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. Mutation helpers always return new documents, never half-edited ones
2. Safe to share between concurrent callers without locking
3. A duplicated part can reuse its source's scoring object as-is

| Stored JSON | Model |
|-------------|-------|
| part `answer_type` | `AnswerType` (+ `ScoringKind` via `.kind`) |
| part `options` | `NumericOptions` / `LabelledScaleOptions` / None |
| `{"true": n, "false": n}` | `BooleanScoring` |
| `{"<label>": n}` | `LabelledScaleScoring` |
| `[{"min", "max", "level"}]` | `NumericScoring` of `NumericRange` |
| `rating_scale_mapping` | `WeightedScoringConfig` |
"""

from .answers import (
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
    RatingScaleLevel,
    ScoringKind,
)
from .parts import QuestionPart, sort_parts
from .scoring import (
    WEIGHTED_SCORING_VERSION,
    BooleanScoring,
    LabelledScaleScoring,
    NumericRange,
    NumericScoring,
    PartScoring,
    WeightedScoringConfig,
)

__all__ = [
    "AnswerType",
    "ScoringKind",
    "NumericOptions",
    "LabelledScaleOptions",
    "RatingScaleLevel",
    "QuestionPart",
    "sort_parts",
    "WEIGHTED_SCORING_VERSION",
    "BooleanScoring",
    "LabelledScaleScoring",
    "NumericRange",
    "NumericScoring",
    "PartScoring",
    "WeightedScoringConfig",
]
