"""Tuning engine: memoized lattice searches and system projection.

The engine owns one cache per memoized search and the Werckmeister III
position table. Create one engine per session and pass it to the harmonic
series generator and the comparator so they share its caches.
"""

from dataclasses import dataclass
from typing import Optional

from .intervals import format_ratio
from .memo import CentsCache
from .systems import (
    EqualMatch,
    JustMatch,
    PythagoreanMatch,
    TuningSystem,
    WerckmeisterMatch,
    equal_temp_nearest,
    nearest_just,
    nearest_pythagorean,
    nearest_werckmeister,
    werckmeister_iii_positions,
)


@dataclass(frozen=True)
class Projection:
    """A cents value projected through one tuning system.

    fraction holds the exact (numerator, denominator) for systems whose
    pitches are rational (Just, Pythagorean) and None otherwise.
    """
    system: TuningSystem
    label: str
    ratio_text: str
    ratio: float
    cents: float
    fraction: Optional[tuple[int, int]] = None


class TuningEngine:
    """Nearest-pitch searches over the four tuning systems.

    Caches are created with the engine and never cleared. They may be
    injected, e.g. to share them between engines or inspect them in tests.
    """

    def __init__(
        self,
        just_cache: Optional[CentsCache[JustMatch]] = None,
        pythagorean_cache: Optional[CentsCache[PythagoreanMatch]] = None,
        werckmeister_cache: Optional[CentsCache[WerckmeisterMatch]] = None,
    ):
        self.just_cache = just_cache if just_cache is not None else CentsCache()
        self.pythagorean_cache = (
            pythagorean_cache if pythagorean_cache is not None else CentsCache()
        )
        self.werckmeister_cache = (
            werckmeister_cache if werckmeister_cache is not None else CentsCache()
        )
        self.werckmeister_positions = werckmeister_iii_positions()

    def nearest_just(self, target_cents: float) -> JustMatch:
        """Memoized Just Intonation lookup."""
        key = self.just_cache.key(target_cents)
        if key is None:
            return nearest_just(target_cents)
        hit = self.just_cache.get(key)
        if hit is not None:
            return hit
        result = nearest_just(target_cents)
        self.just_cache.put(key, result)
        return result

    def equal_temp_nearest(self, target_cents: float) -> EqualMatch:
        """Nearest semitone (closed form, not cached)."""
        return equal_temp_nearest(target_cents)

    def nearest_pythagorean(self, target_cents: float) -> PythagoreanMatch:
        """Memoized 3-limit lattice search."""
        key = self.pythagorean_cache.key(target_cents)
        if key is None:
            return nearest_pythagorean(target_cents)
        hit = self.pythagorean_cache.get(key)
        if hit is not None:
            return hit
        result = nearest_pythagorean(target_cents)
        self.pythagorean_cache.put(key, result)
        return result

    def nearest_werckmeister(self, target_cents: float) -> WerckmeisterMatch:
        """Memoized Werckmeister III lookup against the engine's positions."""
        key = self.werckmeister_cache.key(target_cents)
        if key is None:
            return nearest_werckmeister(target_cents, self.werckmeister_positions)
        hit = self.werckmeister_cache.get(key)
        if hit is not None:
            return hit
        result = nearest_werckmeister(target_cents, self.werckmeister_positions)
        self.werckmeister_cache.put(key, result)
        return result

    def project(self, system: "TuningSystem | str", target_cents: float) -> Projection:
        """Project a cents value through the chosen system.

        Args:
            system: TuningSystem member or its short name
            target_cents: Interval above the fundamental, in cents

        Returns:
            Projection with display label, ratio text, ratio and cents
        """
        system = TuningSystem.parse(system)

        if system is TuningSystem.JUST:
            j = self.nearest_just(target_cents)
            return Projection(
                system=system,
                label=j.label,
                ratio_text=j.fraction,
                ratio=j.ratio,
                cents=j.cents,
                fraction=(j.numerator, j.denominator),
            )

        if system is TuningSystem.EQUAL:
            eq = self.equal_temp_nearest(target_cents)
            return Projection(
                system=system,
                label=f"{eq.steps} st",
                ratio_text=f"2^( {eq.cents:g}/1200 )",
                ratio=eq.ratio,
                cents=eq.cents,
            )

        if system is TuningSystem.PYTHAGOREAN:
            p = self.nearest_pythagorean(target_cents)
            return Projection(
                system=system,
                label="3-limit",
                ratio_text=format_ratio(p.numerator, p.denominator),
                ratio=p.ratio,
                cents=p.cents,
                fraction=(p.numerator, p.denominator),
            )

        w = self.nearest_werckmeister(target_cents)
        return Projection(
            system=system,
            label="Werckmeister III",
            ratio_text=f"2^( {w.cents:.1f}/1200 )",
            ratio=w.ratio,
            cents=w.cents,
        )
