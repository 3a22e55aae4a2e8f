"""Cents and ratio arithmetic.

This module implements the numeric core shared by every tuning system:
conversion between frequency ratios and cents, circular distance between
pitch classes, and exact fraction helpers.

A ratio outside its domain yields NaN instead of raising; callers decide
how to display it.
"""

import math

from . import config

# One octave in cents
OCTAVE_CENTS = 1200.0
HALF_OCTAVE_CENTS = 600.0


def to_cents(ratio: float) -> float:
    """Convert a frequency ratio to cents.

    Args:
        ratio: Frequency ratio (> 0)

    Returns:
        1200 * log2(ratio), or NaN when the ratio is not positive

    Examples:
        >>> round(to_cents(3 / 2), 3)
        701.955
    """
    if not ratio > 0:
        return math.nan
    return OCTAVE_CENTS * math.log2(ratio)


def from_cents(cents: float) -> float:
    """Convert cents back to a frequency ratio (inverse of to_cents)."""
    return 2.0 ** (cents / OCTAVE_CENTS)


def positive_mod(value: float, modulus: float) -> float:
    """Remainder of value / modulus, always in [0, modulus)."""
    return ((value % modulus) + modulus) % modulus


def signed_delta(reference: float, target: float) -> float:
    """Minimal circular difference target - reference, in cents.

    The result is congruent to target - reference modulo 1200 and lies in
    the half-open range [-600, 600): a difference of exactly half an octave
    resolves to -600.

    Args:
        reference: Reference position in cents
        target: Target position in cents

    Returns:
        Signed distance in cents

    Examples:
        >>> signed_delta(1190, 10)
        20.0
    """
    d = target - reference
    return positive_mod(d + HALF_OCTAVE_CENTS, OCTAVE_CENTS) - HALF_OCTAVE_CENTS


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def reduce_fraction(numerator: int, denominator: int) -> tuple[int, int]:
    """Reduce a fraction of positive integers by their greatest common divisor."""
    g = math.gcd(numerator, denominator) or 1
    return numerator // g, denominator // g


def format_ratio(numerator: int, denominator: int) -> str:
    """Display string for an exact ratio, e.g. "3/2" or "5/1"."""
    return f"{numerator}/{denominator}"


def octave_reduce(ratio: float) -> tuple[float, int]:
    """Reduce a ratio to the range [1, 2).

    Finds k such that ratio / 2^k is in [1, 2), giving the interval
    within one octave. Ratios below 1 give a negative k.

    Args:
        ratio: Frequency ratio (> 0)

    Returns:
        Tuple of (reduced_ratio, octaves_reduced)
    """
    if not ratio > 0 or math.isinf(ratio):
        return math.nan, 0
    k = math.floor(math.log2(ratio))
    reduced = ratio / (2.0 ** k)
    # log2 rounding can land a hair outside [1, 2)
    if reduced >= 2.0:
        reduced /= 2.0
        k += 1
    elif reduced < 1.0:
        reduced *= 2.0
        k -= 1
    return reduced, k


def octave_reduce_fraction(numerator: int, denominator: int) -> tuple[int, int]:
    """Reduce an exact fraction into [1, 2) and into lowest terms.

    Args:
        numerator: Positive integer numerator
        denominator: Positive integer denominator

    Returns:
        Coprime (numerator, denominator) with 1 <= n/d < 2
    """
    if numerator <= 0 or denominator <= 0:
        raise ValueError(
            f"Fraction terms must be positive, got {numerator}/{denominator}"
        )
    n, d = reduce_fraction(numerator, denominator)
    while n >= 2 * d:
        d *= 2
    while n < d:
        n *= 2
    return reduce_fraction(n, d)


def deviation_grade(cents: float) -> str:
    """Classify a deviation as "pure", "moderate" or "wide"."""
    magnitude = abs(cents)
    if magnitude < config.PURE_CENTS:
        return "pure"
    if magnitude < config.MODERATE_CENTS:
        return "moderate"
    return "wide"
