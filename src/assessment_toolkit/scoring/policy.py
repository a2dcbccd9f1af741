"""
Module: scoring.policy

Purpose:
    Business defaults of the scoring engine, gathered in one immutable,
    validated configuration object instead of being hard-coded in the
    generator and validator.

Key Classes:
    - ScoringPolicy: Polarity and severity knobs
    - DEFAULT_POLICY: The policy used when callers pass none

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - scoring.defaults: boolean polarity, numeric direction
    - scoring.validation: whether warnings block a save
    - cli: --policy option
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Scoring defaults (immutable).

    Attributes:
        affirmative_is_best: Boolean default maps True to the top level and
            False to level 1. Flip to reverse the polarity.
        numeric_reversed: Default numeric ranges give higher values lower levels
        block_on_warnings: Treat advisory violations (stale labels) as blocking

    Example:
        >>> policy = ScoringPolicy(affirmative_is_best=False)
        >>> policy.boolean_levels(5)
        (1, 5)
    """

    affirmative_is_best: bool = True
    numeric_reversed: bool = False
    block_on_warnings: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ValueError(f"{f.name} must be a boolean: {value!r}")

    def boolean_levels(self, max_level: int) -> tuple[int, int]:
        """
        Default (true_level, false_level) for a rating scale of ``max_level``.
        """
        if self.affirmative_is_best:
            return max_level, 1
        return 1, max_level

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoringPolicy:
        """
        Build a policy from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a known key has the wrong type
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown scoring policy key: {key}")
                continue
            kwargs[key] = value
        return cls(**kwargs)


DEFAULT_POLICY = ScoringPolicy()


def load_policy_json(path: Path) -> ScoringPolicy:
    """
    Load a ScoringPolicy from a JSON object file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a valid policy
    """
    if not path.exists():
        raise FileNotFoundError(f"Policy file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Cannot read policy {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Policy must be a JSON object: {path}")
    return ScoringPolicy.from_dict(data)
