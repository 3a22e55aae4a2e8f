"""Interval comparator.

Compares a list of target pitches against a fundamental: each target's
raw interval ("EI" cents) is reduced into one octave and projected through
a chosen tuning system, then measured against a reference target.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from . import config
from .engine import Projection, TuningEngine
from .intervals import (
    format_ratio,
    octave_reduce,
    octave_reduce_fraction,
    signed_delta,
    to_cents,
)
from .pitch import parse_pitch, resolve_frequency
from .systems import TuningSystem


class DistanceMode(Enum):
    """Which target the distance column is measured from."""
    PREVIOUS = "previous"
    FIRST = "first"

    @classmethod
    def parse(cls, value: "str | DistanceMode") -> "DistanceMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown distance mode {value!r} (expected 'previous' or 'first')"
            ) from None


@dataclass(frozen=True)
class Distance:
    """Interval between two projected targets, reduced into [1, 2).

    fraction is set only when both projections are exact fractions.
    """
    cents: float
    fraction: Optional[tuple[int, int]] = None

    @property
    def ratio_text(self) -> str:
        if self.fraction is not None:
            return format_ratio(*self.fraction)
        return f"2^( {self.cents:.1f}/1200 )"


@dataclass(frozen=True)
class ComparisonRow:
    """One target measured against the fundamental."""
    target: str               # display label of the target
    frequency: float          # the target's real frequency in Hz
    ei_cents: float           # raw interval, octave-reduced
    reduced_ratio: float
    octave: int               # octaves removed by the reduction
    projection: Projection
    system_frequency: float
    deviation: float          # EI minus system, signed
    distance: Optional[Distance] = None


def split_targets(text: str) -> list[str]:
    """Split a free-text target list on commas, backslashes and whitespace."""
    return [t for t in re.split(r"[\\,\s]+", text) if t]


def interval_distance(current: Projection, reference: Projection) -> Distance:
    """Interval spanned by two projections, upward from the lower one.

    Both projections lie in the same octave, so the result is the interval
    class between them, reduced into [1, 2). E then D above C in Just
    Intonation gives 10/9.
    """
    low, high = sorted((reference, current), key=lambda p: p.ratio)
    if low.fraction is not None and high.fraction is not None:
        hn, hd = high.fraction
        ln, ld = low.fraction
        num, den = octave_reduce_fraction(hn * ld, hd * ln)
        return Distance(cents=to_cents(num / den), fraction=(num, den))
    reduced, _ = octave_reduce(high.ratio / low.ratio)
    return Distance(cents=to_cents(reduced))


def compare_intervals(
    fundamental: str,
    targets: Iterable[str],
    system: "TuningSystem | str" = config.DEFAULT_SYSTEM,
    match_octave: bool = config.DEFAULT_MATCH_OCTAVE,
    distance_mode: "DistanceMode | str" = config.DEFAULT_DISTANCE_MODE,
    a4: float = config.DEFAULT_A4,
    engine: Optional[TuningEngine] = None,
) -> list[ComparisonRow]:
    """Project each target through a tuning system relative to a fundamental.

    Targets that do not parse are skipped without producing a row. The
    fundamental falls back to middle C when it does not parse.

    Args:
        fundamental: Pitch string of the 1/1 reference
        targets: Pitch strings to compare, in order
        system: Projection system ("just", "equal", "pyth", "w3")
        match_octave: If True, system frequencies are moved into the
            target's own octave; otherwise they sit above the fundamental
        distance_mode: Measure distance from the previous target or the
            first one; the first row never has a distance
        a4: Reference frequency of A4 in Hz for note names
        engine: Engine whose caches are used (a fresh one if omitted)

    Returns:
        One ComparisonRow per parsed target
    """
    system = TuningSystem.parse(system)
    distance_mode = DistanceMode.parse(distance_mode)
    if engine is None:
        engine = TuningEngine()

    f_fund = resolve_frequency(fundamental, a4)

    rows: list[ComparisonRow] = []
    first: Optional[Projection] = None
    previous: Optional[Projection] = None

    for text in targets:
        parsed = parse_pitch(text, a4)
        if parsed.frequency is None:
            continue
        f = parsed.frequency
        reduced, octave = octave_reduce(f / f_fund)
        ei_cents = to_cents(reduced)

        projection = engine.project(system, ei_cents)
        system_hz = f_fund * projection.ratio
        if match_octave:
            system_hz *= 2.0 ** octave

        reference = previous if distance_mode is DistanceMode.PREVIOUS else first
        distance = None
        if reference is not None:
            distance = interval_distance(projection, reference)

        rows.append(ComparisonRow(
            target=parsed.label or text,
            frequency=f,
            ei_cents=ei_cents,
            reduced_ratio=reduced,
            octave=octave,
            projection=projection,
            system_frequency=system_hz,
            deviation=signed_delta(projection.cents, ei_cents),
            distance=distance,
        ))

        if first is None:
            first = projection
        previous = projection

    return rows

