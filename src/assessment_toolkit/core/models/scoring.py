"""
Module: scoring

Purpose:
    Provides the typed scoring configuration: one PartScoring per part,
    in one of three shapes, collected into the per-question
    WeightedScoringConfig document.

Key Classes:
    - BooleanScoring: {true: level, false: level}
    - LabelledScaleScoring: {label: level}
    - NumericRange / NumericScoring: ordered [min, max] -> level ranges
    - WeightedScoringConfig: {part key: PartScoring} + version tag

Dependencies:
    - dataclasses (std)
    - types.MappingProxyType (std)
    - .answers.ScoringKind

Used By:
    - scoring.* (engine)
    - core.utils.serialization

Notes:
    Models do not range-check levels: the rating scale size is not known
    here. Level and coverage problems are reported by
    scoring.validation.validate_config instead of raised on construction,
    so a stored document can always be loaded and then explained.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Iterator, Mapping, Optional, Tuple, Union

from .answers import ScoringKind

WEIGHTED_SCORING_VERSION = "weighted"


@dataclass(frozen=True, slots=True)
class BooleanScoring:
    """
    Levels for a boolean part's two answers.

    Either side may be None when a stored document omitted it; the
    validator reports that as a missing entry.

    Example:
        >>> BooleanScoring(true_level=5, false_level=1).to_dict()
        {'true': 5, 'false': 1}
    """

    kind: ClassVar[ScoringKind] = ScoringKind.BOOLEAN

    true_level: Optional[int]
    false_level: Optional[int]

    def levels(self) -> list[int]:
        return [lvl for lvl in (self.true_level, self.false_level) if lvl is not None]

    def to_dict(self) -> dict:
        d = {}
        if self.true_level is not None:
            d["true"] = self.true_level
        if self.false_level is not None:
            d["false"] = self.false_level
        return d

    @classmethod
    def from_dict(cls, data: Mapping) -> BooleanScoring:
        return cls(true_level=data.get("true"), false_level=data.get("false"))


@dataclass(frozen=True)
class LabelledScaleScoring:
    """
    Levels for each label of a labelled-scale part.

    The mapping is copied into a read-only proxy on construction.
    """

    kind: ClassVar[ScoringKind] = ScoringKind.LABELLED_SCALE

    label_levels: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "label_levels", MappingProxyType(dict(self.label_levels)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelledScaleScoring):
            return NotImplemented
        return dict(self.label_levels) == dict(other.label_levels)

    def __hash__(self) -> int:
        return hash(frozenset(self.label_levels.items()))

    def levels(self) -> list[int]:
        return list(self.label_levels.values())

    def to_dict(self) -> dict:
        return dict(self.label_levels)

    @classmethod
    def from_dict(cls, data: Mapping) -> LabelledScaleScoring:
        return cls(label_levels=dict(data))


@dataclass(frozen=True, slots=True)
class NumericRange:
    """
    One inclusive [min, max] band of a numeric domain and its level.

    Example:
        >>> NumericRange(25, 49, 2).contains(30)
        True
        >>> NumericRange(0, 24, 1).overlaps(NumericRange(24, 50, 2))
        True
    """

    min: float
    max: float
    level: int

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def overlaps(self, other: NumericRange) -> bool:
        """Inclusive bounds: ranges sharing an endpoint overlap."""
        return self.min <= other.max and other.min <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "level": self.level}

    @classmethod
    def from_dict(cls, data: Mapping) -> NumericRange:
        return cls(min=data["min"], max=data["max"], level=data["level"])

    def __repr__(self) -> str:
        return f"NumericRange({self.min}, {self.max}, level={self.level})"


@dataclass(frozen=True, slots=True)
class NumericScoring:
    """Ranges for a numeric part, in stored order (lookup scans in this order)."""

    kind: ClassVar[ScoringKind] = ScoringKind.NUMERIC

    ranges: Tuple[NumericRange, ...] = ()

    def __iter__(self) -> Iterator[NumericRange]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def levels(self) -> list[int]:
        return [r.level for r in self.ranges]

    def to_list(self) -> list[dict]:
        return [r.to_dict() for r in self.ranges]

    @classmethod
    def from_list(cls, data: list) -> NumericScoring:
        return cls(ranges=tuple(NumericRange.from_dict(item) for item in data))


PartScoring = Union[BooleanScoring, LabelledScaleScoring, NumericScoring]


def scoring_to_wire(scoring: PartScoring) -> Union[dict, list]:
    """Wire form of one part's scoring (numeric scoring is a bare list)."""
    if isinstance(scoring, NumericScoring):
        return scoring.to_list()
    return scoring.to_dict()


@dataclass(frozen=True)
class WeightedScoringConfig:
    """
    Per-question scoring document (immutable).

    Attributes:
        part_scoring: Part key (str) -> that part's scoring
        version: Format tag, currently always "weighted"

    Invariants:
        - Once finalized, keys equal the question's live part keys
          (checked by scoring.validation, maintained by scoring.mutations)

    Example:
        >>> cfg = WeightedScoringConfig({"1": BooleanScoring(5, 1)})
        >>> cfg.without_entry("1").is_empty
        True
    """

    part_scoring: Mapping[str, PartScoring] = field(default_factory=dict)
    version: str = WEIGHTED_SCORING_VERSION

    def __post_init__(self) -> None:
        """Normalise keys to strings and freeze the mapping."""
        if self.version != WEIGHTED_SCORING_VERSION:
            raise ValueError(
                f"Unsupported scoring config version: {self.version!r} "
                f"(expected {WEIGHTED_SCORING_VERSION!r})"
            )
        frozen = MappingProxyType({str(k): v for k, v in self.part_scoring.items()})
        object.__setattr__(self, "part_scoring", frozen)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedScoringConfig):
            return NotImplemented
        return self.version == other.version and dict(self.part_scoring) == dict(other.part_scoring)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_empty(self) -> bool:
        return not self.part_scoring

    @property
    def part_keys(self) -> frozenset[str]:
        return frozenset(self.part_scoring)

    def get(self, part_id: Union[int, str]) -> Optional[PartScoring]:
        return self.part_scoring.get(str(part_id))

    def __contains__(self, part_id: object) -> bool:
        return str(part_id) in self.part_scoring

    # ─────────────────────────────────────────────────────────────────────────
    # Copy-on-write edits
    # ─────────────────────────────────────────────────────────────────────────

    def with_entry(self, part_id: Union[int, str], scoring: PartScoring) -> WeightedScoringConfig:
        """Return a copy with ``part_id`` set to ``scoring``."""
        entries = dict(self.part_scoring)
        entries[str(part_id)] = scoring
        return WeightedScoringConfig(entries, version=self.version)

    def without_entry(self, part_id: Union[int, str]) -> WeightedScoringConfig:
        """Return a copy without ``part_id`` (no-op copy if absent)."""
        entries = {k: v for k, v in self.part_scoring.items() if k != str(part_id)}
        return WeightedScoringConfig(entries, version=self.version)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape."""
        return {
            "version": self.version,
            "partScoring": {
                key: scoring_to_wire(scoring) for key, scoring in self.part_scoring.items()
            },
        }

    def __repr__(self) -> str:
        return f"WeightedScoringConfig(parts={sorted(self.part_scoring)})"
