"""
Module: answers

Purpose:
    Provides the answer-type taxonomy for question parts and the
    type-specific domain declarations (options) that go with it.
    Five stored answer types collapse onto three scoring kinds:
    boolean, labelled scale and numeric.

Key Classes:
    - AnswerType: Stored answer type of a part
    - ScoringKind: The three scoring shapes the engine dispatches on
    - NumericOptions: Declared [min, max] domain (+ optional step)
    - LabelledScaleOptions: Ordered label list
    - RatingScaleLevel: One level of the question's rating scale

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.parts.QuestionPart
    - scoring.defaults, scoring.validation, scoring.levels
    - core.utils.serialization
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class ScoringKind(str, Enum):
    """Shape of a part's scoring configuration."""
    BOOLEAN = "boolean"
    LABELLED_SCALE = "labelled_scale"
    NUMERIC = "numeric"

    def __str__(self) -> str:
        return self.value


class AnswerType(str, Enum):
    """Answer type of a question part, as stored."""
    BOOLEAN = "boolean"
    LABELLED_SCALE = "labelled_scale"
    SCALE = "scale"
    NUMBER = "number"
    PERCENTAGE = "percentage"

    def __str__(self) -> str:
        return self.value

    @property
    def kind(self) -> ScoringKind:
        """Scoring kind for this answer type (scale/number/percentage are numeric)."""
        return _KIND_BY_ANSWER_TYPE[self]

    @property
    def is_numeric(self) -> bool:
        return self.kind == ScoringKind.NUMERIC


_KIND_BY_ANSWER_TYPE = {
    AnswerType.BOOLEAN: ScoringKind.BOOLEAN,
    AnswerType.LABELLED_SCALE: ScoringKind.LABELLED_SCALE,
    AnswerType.SCALE: ScoringKind.NUMERIC,
    AnswerType.NUMBER: ScoringKind.NUMERIC,
    AnswerType.PERCENTAGE: ScoringKind.NUMERIC,
}


@dataclass(frozen=True, slots=True)
class NumericOptions:
    """
    Declared domain of a numeric part (scale, number, percentage).

    Attributes:
        min: Lowest valid answer (inclusive)
        max: Highest valid answer (inclusive)
        step: Optional answer granularity

    Invariants:
        - min <= max
        - step is None or step > 0

    Example:
        >>> NumericOptions(0, 100).resolution
        1
        >>> NumericOptions(0, 1.5).resolution
        0.01
    """

    min: float
    max: float
    step: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate domain on construction."""
        for name in ("min", "max"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number: {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite: {value!r}")
        if self.min > self.max:
            raise ValueError(f"min must be <= max: {self.min} > {self.max}")
        if self.step is not None and self.step <= 0:
            raise ValueError(f"step must be positive: {self.step}")

    @property
    def resolution(self) -> float:
        """
        Smallest answer increment the domain distinguishes.

        The declared step wins; otherwise integral bounds imply whole
        numbers, and anything else is treated at 2 dp.
        """
        if self.step is not None:
            return self.step
        if float(self.min).is_integer() and float(self.max).is_integer():
            return 1
        return 0.01

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict:
        d = {"min": self.min, "max": self.max}
        if self.step is not None:
            d["step"] = self.step
        return d

    @classmethod
    def from_dict(
        cls,
        data: dict,
        *,
        default_min: float = 0,
        default_max: float = 100,
    ) -> NumericOptions:
        """
        Deserialize from dictionary.

        Missing or null bounds fall back to ``default_min``/``default_max``,
        which is how parts created without explicit bounds were always read.
        """
        data = data or {}
        lo = data.get("min")
        hi = data.get("max")
        return cls(
            min=default_min if lo is None else lo,
            max=default_max if hi is None else hi,
            step=data.get("step"),
        )


@dataclass(frozen=True, slots=True)
class LabelledScaleOptions:
    """
    Ordered, named labels of a labelled-scale part.

    Order matters: the default mapping spreads labels from level 1
    (first label) to the top level (last label).
    """

    labels: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(set(self.labels)) != len(self.labels):
            raise ValueError(f"labels must be unique: {list(self.labels)}")

    def to_dict(self) -> dict:
        return {"labels": list(self.labels)}

    @classmethod
    def from_dict(cls, data: dict) -> LabelledScaleOptions:
        labels = (data or {}).get("labels") or []
        # Blank labels are placeholders left by the editor, never answers
        return cls(labels=tuple(label for label in labels if label.strip()))


PartOptions = Union[NumericOptions, LabelledScaleOptions, None]


@dataclass(frozen=True, slots=True)
class RatingScaleLevel:
    """One level of a questionnaire's rating scale. Only the count matters here."""

    level: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError(f"level must be >= 1: {self.level}")
