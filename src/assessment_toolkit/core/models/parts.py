"""
Module: parts

Purpose:
    Provides the QuestionPart dataclass - one sub-question of a composite
    question. Each part declares its answer type and the matching domain
    (numeric bounds, a label list, or nothing for booleans). Parts are
    scored independently and averaged into the question's level.

Key Functions:
    - QuestionPart.key: String key used in the scoring document
    - QuestionPart.kind: Scoring kind derived from answer_type
    - QuestionPart.with_id(new_id): Copy for duplication
    - QuestionPart.to_dict() / QuestionPart.from_dict(): Serialization
    - sort_parts(parts): Display / tie-break ordering

Dependencies:
    - dataclasses (std)
    - .answers

Used By:
    - scoring.defaults, scoring.validation, scoring.levels
    - scoring.mutations, scoring.scenarios
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

from .answers import (
    AnswerType,
    LabelledScaleOptions,
    NumericOptions,
    PartOptions,
    ScoringKind,
)

PartId = Union[int, str]


@dataclass(frozen=True, slots=True)
class QuestionPart:
    """
    One sub-question of a composite question (immutable).

    Attributes:
        id: Identifier, stable for the part's lifetime
        text: Prompt shown to the respondent
        answer_type: Stored answer type
        options: Domain declaration matching answer_type's kind
        order_index: Display and tie-break ordering among siblings

    Invariants:
        - numeric answer types carry NumericOptions
        - labelled_scale carries LabelledScaleOptions
        - boolean carries no options

    Example:
        >>> part = QuestionPart(7, "Uptime?", AnswerType.PERCENTAGE, NumericOptions(0, 100))
        >>> part.key
        '7'
        >>> part.kind
        <ScoringKind.NUMERIC: 'numeric'>
    """

    id: PartId
    text: str
    answer_type: AnswerType
    options: PartOptions = None
    order_index: int = 0

    def __post_init__(self) -> None:
        """Check the options payload matches the answer type."""
        if not isinstance(self.answer_type, AnswerType):
            raise ValueError(f"Invalid answer type: {self.answer_type!r}")

        kind = self.answer_type.kind
        if kind == ScoringKind.NUMERIC:
            expected = NumericOptions
        elif kind == ScoringKind.LABELLED_SCALE:
            expected = LabelledScaleOptions
        else:
            expected = type(None)

        if not isinstance(self.options, expected):
            raise ValueError(
                f"Part {self.id!r} ({self.answer_type}) expects "
                f"{expected.__name__} options, got {type(self.options).__name__}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def key(self) -> str:
        """Key of this part in a scoring document (ids are stored as strings)."""
        return str(self.id)

    @property
    def kind(self) -> ScoringKind:
        return self.answer_type.kind

    @property
    def labels(self) -> tuple[str, ...]:
        """Declared labels, empty for non-labelled parts."""
        if isinstance(self.options, LabelledScaleOptions):
            return self.options.labels
        return ()

    def same_domain_as(self, other: QuestionPart) -> bool:
        """True when both parts accept exactly the same answers."""
        return self.answer_type == other.answer_type and self.options == other.options

    def with_id(self, new_id: PartId, *, order_index: Optional[int] = None) -> QuestionPart:
        """
        Copy this part under a new id (part duplication).

        Args:
            new_id: Identifier of the duplicate
            order_index: Optional new position, defaults to the source's

        Returns:
            New QuestionPart with the same text and domain
        """
        return replace(
            self,
            id=new_id,
            order_index=self.order_index if order_index is None else order_index,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict with id, text, answer_type, options and order_index
        """
        return {
            "id": self.id,
            "text": self.text,
            "answer_type": str(self.answer_type),
            "options": self.options.to_dict() if self.options is not None else None,
            "order_index": self.order_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionPart:
        """
        Deserialize from dictionary.

        Args:
            data: Dict representation

        Returns:
            QuestionPart instance
        """
        answer_type = AnswerType(data["answer_type"])
        raw_options = data.get("options")

        options: PartOptions
        if answer_type.kind == ScoringKind.NUMERIC:
            options = NumericOptions.from_dict(raw_options)
        elif answer_type.kind == ScoringKind.LABELLED_SCALE:
            options = LabelledScaleOptions.from_dict(raw_options)
        else:
            options = None

        return cls(
            id=data["id"],
            text=data.get("text", ""),
            answer_type=answer_type,
            options=options,
            order_index=data.get("order_index", 0),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"QuestionPart({self.id!r}, {self.answer_type.value}, order={self.order_index})"


def sort_parts(parts: Iterable[QuestionPart]) -> list[QuestionPart]:
    """Order parts for display: by order_index, then by id text."""
    return sorted(parts, key=lambda p: (p.order_index, p.key))
