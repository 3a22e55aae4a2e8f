"""Harmonic series generation.

For a fundamental f₀, partial n sounds at n·f₀. Reduced into one octave it
is the Just interval n / 2^k, which is then approximated by Equal
Temperament, the Pythagorean lattice and Werckmeister III.
"""

from dataclasses import dataclass
from typing import Optional

from . import config
from .engine import TuningEngine
from .intervals import (
    format_ratio,
    from_cents,
    reduce_fraction,
    round_half_up,
    signed_delta,
    to_cents,
)
from .pitch import pitch_class_name
from .systems import TuningSystem


@dataclass(frozen=True)
class SystemApproximation:
    """One tuning system's take on a partial."""
    cents: float
    ratio: float
    deviation: float      # signed_delta(just cents, system cents)
    ratio_text: str = ""  # exact fraction, where the system has one


@dataclass(frozen=True)
class HarmonicRow:
    """A partial of the harmonic series and its approximations."""
    n: int
    fundamental: float
    frequency: float          # n·f₀, the partial in its real octave
    numerator: int            # reduced Just fraction n / 2^k
    denominator: int
    just_cents: float
    note: str                 # nearest 12-TET name relative to the fundamental
    equal: SystemApproximation
    pythagorean: SystemApproximation
    werckmeister: SystemApproximation

    @property
    def just_ratio(self) -> float:
        return self.numerator / self.denominator

    @property
    def just_fraction(self) -> str:
        return format_ratio(self.numerator, self.denominator)

    def approximation(self, system: "TuningSystem | str") -> Optional[SystemApproximation]:
        """The approximation for a system; None for Just, which is exact."""
        system = TuningSystem.parse(system)
        return {
            TuningSystem.JUST: None,
            TuningSystem.EQUAL: self.equal,
            TuningSystem.PYTHAGOREAN: self.pythagorean,
            TuningSystem.WERCKMEISTER: self.werckmeister,
        }[system]

    def playable_frequency(
        self,
        system: "TuningSystem | str" = TuningSystem.JUST,
        real_octave: bool = config.DEFAULT_REAL_OCTAVE,
    ) -> float:
        """Frequency to sound for this partial in a given system.

        Args:
            system: Tuning system to sound
            real_octave: If True, stay in the partial's octave (n·f₀, shifted
                by the system's deviation); otherwise sound the reduced
                interval above f₀

        Returns:
            Frequency in Hz
        """
        approx = self.approximation(system)
        if approx is None:
            if real_octave:
                return self.frequency
            return self.fundamental * self.just_ratio
        if real_octave:
            return self.frequency * from_cents(approx.deviation)
        return self.fundamental * approx.ratio


def generate_harmonic_series(
    fundamental: float,
    count: int = config.DEFAULT_PARTIAL_COUNT,
    engine: Optional[TuningEngine] = None,
    base_pitch_class: int = 0,
) -> list[HarmonicRow]:
    """Compute partials 1..count of a fundamental.

    Args:
        fundamental: Fundamental frequency in Hz (> 0)
        count: Number of partials; values below 1 give a single row
        engine: Engine whose caches are used (a fresh one if omitted)
        base_pitch_class: Pitch class of the fundamental (0 = C), used for
            the note names

    Returns:
        One HarmonicRow per partial, in order
    """
    if not fundamental > 0:
        raise ValueError(f"Fundamental must be positive, got {fundamental}")
    if engine is None:
        engine = TuningEngine()

    rows = []
    for n in range(1, max(1, count) + 1):
        k = n.bit_length() - 1  # floor(log2(n))
        numer, denom = reduce_fraction(n, 2 ** k)
        just_cents = to_cents(numer / denom)

        eq = engine.equal_temp_nearest(just_cents)
        pyth = engine.nearest_pythagorean(just_cents)
        w3 = engine.nearest_werckmeister(just_cents)

        steps = round_half_up(just_cents / 100.0)
        rows.append(HarmonicRow(
            n=n,
            fundamental=fundamental,
            frequency=fundamental * n,
            numerator=numer,
            denominator=denom,
            just_cents=just_cents,
            note=pitch_class_name(base_pitch_class + steps),
            equal=SystemApproximation(
                cents=eq.cents,
                ratio=eq.ratio,
                deviation=signed_delta(just_cents, eq.cents),
            ),
            pythagorean=SystemApproximation(
                cents=pyth.cents,
                ratio=pyth.ratio,
                deviation=signed_delta(just_cents, pyth.cents),
                ratio_text=pyth.fraction,
            ),
            werckmeister=SystemApproximation(
                cents=w3.cents,
                ratio=w3.ratio,
                deviation=signed_delta(just_cents, w3.cents),
            ),
        ))
    return rows

