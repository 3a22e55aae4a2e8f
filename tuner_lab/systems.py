"""Tuning systems and nearest-pitch searches.

Each system exposes one search that maps a target interval (cents above
the fundamental) to the closest pitch the system allows:

- Just Intonation: a fixed table of small-integer ratios
- Equal Temperament: the 100-cent semitone grid
- Pythagorean: the 3-limit lattice 3^b / 2^a
- Werckmeister III: 12 positions built from tempered and pure fifths

The functions here are pure and uncached; TuningEngine memoizes them.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from . import config
from .intervals import (
    HALF_OCTAVE_CENTS,
    OCTAVE_CENTS,
    format_ratio,
    from_cents,
    positive_mod,
    reduce_fraction,
    round_half_up,
    signed_delta,
    to_cents,
)


class TuningSystem(Enum):
    """Systems a cents value can be projected through."""
    JUST = "just"
    EQUAL = "equal"
    PYTHAGOREAN = "pyth"
    WERCKMEISTER = "w3"

    @classmethod
    def parse(cls, value: "str | TuningSystem") -> "TuningSystem":
        """Accept an enum member or its short name ("just", "pyth", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown tuning system {value!r} (expected one of: {names})") from None


# =============================================================================
# Just Intonation
# =============================================================================

# Ordered simplest first: earlier entries win ties
JUST_INTERVALS: list[tuple[str, tuple[int, int]]] = [
    ("1/1 (unison)", (1, 1)),
    ("16/15 (m2)", (16, 15)),
    ("10/9 (minor tone)", (10, 9)),
    ("9/8 (M2)", (9, 8)),
    ("6/5 (m3)", (6, 5)),
    ("5/4 (M3)", (5, 4)),
    ("4/3 (P4)", (4, 3)),
    ("45/32 (TT)", (45, 32)),
    ("3/2 (P5)", (3, 2)),
    ("8/5 (m6)", (8, 5)),
    ("5/3 (M6)", (5, 3)),
    ("16/9 (m7)", (16, 9)),
    ("15/8 (M7)", (15, 8)),
]


@dataclass(frozen=True)
class JustMatch:
    """Closest entry of the Just Intonation table."""
    label: str
    numerator: int
    denominator: int
    cents: float

    @property
    def ratio(self) -> float:
        return self.numerator / self.denominator

    @property
    def fraction(self) -> str:
        return format_ratio(self.numerator, self.denominator)


def nearest_just(target_cents: float) -> JustMatch:
    """Find the Just Intonation interval closest to a target.

    Distance is the circular |signed_delta|, so 1190 cents matches the
    unison rather than the major seventh.

    Args:
        target_cents: Target interval in cents

    Returns:
        The closest table entry; the earlier entry wins a tie
    """
    best: Optional[JustMatch] = None
    best_err = math.inf
    for label, (n, d) in JUST_INTERVALS:
        c = to_cents(n / d)
        err = abs(signed_delta(target_cents, c))
        if err < best_err:
            best = JustMatch(label=label, numerator=n, denominator=d, cents=c)
            best_err = err
    if best is None:
        # Only reachable for a non-finite target
        return JustMatch(label="", numerator=1, denominator=1, cents=math.nan)
    return best


# =============================================================================
# Equal Temperament
# =============================================================================

@dataclass(frozen=True)
class EqualMatch:
    """Nearest 12-TET degree."""
    cents: float
    ratio: float
    steps: int


def equal_temp_nearest(target_cents: float) -> EqualMatch:
    """Round a target to the nearest semitone.

    Halves round up (toward +infinity): 50 cents gives 100, -50 gives 0.

    Args:
        target_cents: Target interval in cents

    Returns:
        EqualMatch with cents (a multiple of 100), ratio and step count
    """
    if not math.isfinite(target_cents):
        return EqualMatch(cents=math.nan, ratio=math.nan, steps=0)
    steps = round_half_up(target_cents / 100.0)
    cents = steps * 100.0
    return EqualMatch(cents=cents, ratio=from_cents(cents), steps=steps)


# =============================================================================
# Pythagorean (3-limit)
# =============================================================================

@dataclass(frozen=True)
class PythagoreanMatch:
    """Closest point 3^b / 2^a of the 3-limit lattice, reduced to [1, 2)."""
    cents: float
    ratio: float
    numerator: int
    denominator: int
    power_of_three: int
    power_of_two: int

    @property
    def fraction(self) -> str:
        return format_ratio(self.numerator, self.denominator)


def octave_exponent_of_power_of_three(b: int) -> int:
    """floor(log2(3^b)), computed exactly on integers."""
    if b >= 0:
        return (3 ** b).bit_length() - 1
    # 3^|b| is never a power of two, so ceil(log2) equals its bit length
    return -(3 ** -b).bit_length()


def pythagorean_fraction(a: int, b: int) -> tuple[int, int]:
    """Exact positive fraction for 3^b / 2^a, in lowest terms.

    Args:
        a: Power of two in the denominator (may be negative)
        b: Power of three in the numerator (may be negative)

    Returns:
        Coprime (numerator, denominator)
    """
    if b >= 0 and a >= 0:
        numer, denom = 3 ** b, 2 ** a
    elif b >= 0:
        numer, denom = 3 ** b * 2 ** -a, 1
    elif a >= 0:
        numer, denom = 1, 3 ** -b * 2 ** a
    else:
        numer, denom = 2 ** -a, 3 ** -b
    return reduce_fraction(numer, denom)


def nearest_pythagorean(
    target_cents: float,
    max_exponent: int = config.PYTHAGOREAN_MAX_EXPONENT,
) -> PythagoreanMatch:
    """Search the 3-limit lattice for the point closest to a target.

    Walks b from -max_exponent to +max_exponent; each 3^b is brought into
    [1, 2) by a = floor(log2(3^b)). The first candidate with the smallest
    circular error wins.

    Args:
        target_cents: Target interval in cents
        max_exponent: Largest |b| searched

    Returns:
        PythagoreanMatch with cents, ratio and exact fraction
    """
    if not math.isfinite(target_cents):
        return PythagoreanMatch(
            cents=math.nan, ratio=math.nan, numerator=1, denominator=1,
            power_of_three=0, power_of_two=0,
        )

    best_err = math.inf
    best_a = best_b = 0
    best_cents = 0.0
    for b in range(-max_exponent, max_exponent + 1):
        a = octave_exponent_of_power_of_three(b)
        numer, denom = pythagorean_fraction(a, b)
        c = positive_mod(to_cents(numer / denom), OCTAVE_CENTS)
        err = abs(signed_delta(target_cents, c))
        if err < best_err:
            best_err = err
            best_a, best_b, best_cents = a, b, c

    numer, denom = pythagorean_fraction(best_a, best_b)
    return PythagoreanMatch(
        cents=best_cents,
        ratio=numer / denom,
        numerator=numer,
        denominator=denom,
        power_of_three=best_b,
        power_of_two=best_a,
    )


# =============================================================================
# Werckmeister III
# =============================================================================

@dataclass(frozen=True)
class WerckmeisterMatch:
    """Nearest Werckmeister III position."""
    cents: float
    ratio: float
    index: int


def pythagorean_comma_cents() -> float:
    """Twelve pure fifths minus seven octaves (531441/524288), in cents."""
    return to_cents(531441 / 524288)


def werckmeister_iii_positions(
    tempered_fifths: int = config.WERCKMEISTER_TEMPERED_FIFTHS,
) -> tuple[float, ...]:
    """Build the 12 pitch-class positions of Werckmeister III.

    Walks the circle of fifths from 0: the first fifths are narrowed by a
    quarter of the Pythagorean comma, the rest are pure. Eleven steps give
    the twelve positions, folded into [0, 1200) and sorted.

    Returns:
        12 ascending cents values, the first being 0
    """
    pure_fifth = to_cents(3 / 2)
    tempered_fifth = pure_fifth - pythagorean_comma_cents() / 4
    sizes = [tempered_fifth] * tempered_fifths + [pure_fifth] * (12 - tempered_fifths)

    positions = [0.0]
    acc = 0.0
    for size in sizes[:11]:
        acc += size
        positions.append(positive_mod(acc, OCTAVE_CENTS))
    return tuple(sorted(positive_mod(p, OCTAVE_CENTS) for p in positions))


def nearest_werckmeister(
    target_cents: float,
    positions: Sequence[float],
) -> WerckmeisterMatch:
    """Find the position closest to a target.

    The position at 0 is scored by the plain absolute difference. Every
    later position is scored by the absolute difference folded to
    1200 - difference when it exceeds 600. A target just below the octave
    (1195 cents) therefore matches the highest position, not 0.

    Args:
        target_cents: Target interval in cents
        positions: Position table from werckmeister_iii_positions()

    Returns:
        WerckmeisterMatch with cents, ratio and index into positions
    """
    if not math.isfinite(target_cents):
        return WerckmeisterMatch(cents=math.nan, ratio=math.nan, index=0)

    best_idx = 0
    best_err = abs(target_cents - positions[0])
    for i in range(1, len(positions)):
        err = abs(target_cents - positions[i])
        if err > HALF_OCTAVE_CENTS:
            err = OCTAVE_CENTS - err
        if err < best_err:
            best_idx, best_err = i, err
    cents = positions[best_idx]
    return WerckmeisterMatch(cents=cents, ratio=from_cents(cents), index=best_idx)
