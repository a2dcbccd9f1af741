"""
Assessment Toolkit Core Package

Shared data models, persistence-boundary schemas and serialization for
question parts and weighted scoring documents. The scoring engine in
``assessment_toolkit.scoring`` only ever sees the typed models defined here.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; every edit produces a new instance

2. **Typed Inside, JSON Outside**
   - The stored `rating_scale_mapping` blob is parsed once, at the
     boundary (`core.utils.serialization`), into `WeightedScoringConfig`

3. **Explainable Documents**
   - Models accept structurally complete but semantically wrong documents
     so the validator can report every problem at once
"""

from .models import (
    AnswerType,
    ScoringKind,
    QuestionPart,
    WeightedScoringConfig,
)

__all__ = [
    "AnswerType",
    "ScoringKind",
    "QuestionPart",
    "WeightedScoringConfig",
]
