"""
Module: scoring.numeric

Purpose:
    Numeric helpers shared by the generator, validator and calculator:
    half-up rounding, display rounding of range bounds, the one place
    ranges are put in canonical (sorted-by-min) order, and tolerant
    comparisons for bounds that went through float arithmetic.

Key Functions:
    - round_half_up(value): Nearest integer, .5 rounds up
    - round_bound(value, resolution): Display rounding of a range bound
    - canonicalize_ranges(ranges): Ranges sorted by (min, max)
    - is_level(value, max_level): Integer level within [1, max_level]
    - numeric_domain(part): A numeric part's declared domain
    - snap_answer(value, domain): In-domain answer snapped onto the domain grid

Used By:
    - scoring.defaults
    - scoring.validation
    - scoring.levels
    - scoring.scenarios
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

from ..core.models.answers import NumericOptions
from ..core.models.parts import QuestionPart
from ..core.models.scoring import NumericRange
from .errors import PreconditionError

Number = Union[int, float]

# Float slack when comparing bounds derived from the same arithmetic
_EPSILON = 1e-9


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.

    Python's round() rounds halves to even (round(2.5) == 2), which would
    make the level of a [2, 3] answer pair depend on parity.

    Example:
        >>> round_half_up(1.5), round_half_up(2.5), round_half_up(2.49)
        (2, 3, 2)
    """
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def decimal_places(resolution: Number) -> int:
    """Decimal places needed to show bounds at ``resolution`` (never fewer than 2)."""
    exponent = Decimal(repr(resolution)).normalize().as_tuple().exponent
    return max(2, -exponent) if isinstance(exponent, int) else 2


def round_bound(value: Number, resolution: Number = 0.01) -> Number:
    """
    Round a range bound for display; integral results come back as int.

    Example:
        >>> round_bound(33.3333333)
        33.33
        >>> round_bound(25.0)
        25
    """
    quantum = Decimal(1).scaleb(-decimal_places(resolution))
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return int(rounded)
    return float(rounded)


def snap_to_grid(value: Number, origin: Number, resolution: Number) -> Number:
    """
    Snap ``value`` down onto the grid ``origin + k * resolution``.
    """
    steps = math.floor((value - origin) / resolution + _EPSILON)
    return round_bound(origin + steps * resolution, resolution)


def canonicalize_ranges(ranges: Iterable[NumericRange]) -> list[NumericRange]:
    """
    Ranges in canonical order: ascending min, then ascending max.

    Every overlap, gap and coverage check walks this order; stored order
    is only meaningful to the level lookup.
    """
    return sorted(ranges, key=lambda r: (r.min, r.max))


def at_most(a: Number, b: Number) -> bool:
    """a <= b, allowing float slack."""
    return a <= b + _EPSILON * max(1.0, abs(a), abs(b))


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def is_level(value: object, max_level: int) -> bool:
    """True for an integer (not bool) in [1, max_level]."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return isinstance(value, int) and 1 <= value <= max_level


def numeric_domain(part: QuestionPart) -> NumericOptions:
    """
    Declared domain of a numeric part.

    Raises:
        PreconditionError: If the part carries no NumericOptions
    """
    domain = part.options
    if not isinstance(domain, NumericOptions):
        raise PreconditionError(
            f"Part {part.key} ({part.answer_type}) has no numeric domain"
        )
    return domain


def snap_answer(value: Number, domain: NumericOptions) -> Number:
    """
    Snap an in-domain answer down onto the domain's resolution grid.

    Answers outside the domain come back unchanged.

    Example:
        >>> snap_answer(24.5, NumericOptions(0, 100))
        24
    """
    if not domain.contains(value):
        return value
    return max(snap_to_grid(value, domain.min, domain.resolution), domain.min)
