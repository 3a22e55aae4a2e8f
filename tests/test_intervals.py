"""Unit tests for the intervals module."""

import math
import pytest

from tuner_lab.intervals import (
    deviation_grade,
    format_ratio,
    from_cents,
    octave_reduce,
    octave_reduce_fraction,
    positive_mod,
    reduce_fraction,
    round_half_up,
    signed_delta,
    to_cents,
)


class TestToCents:
    """Tests for ratio to cents conversion."""

    def test_unison_is_zero(self):
        """1/1 = 0 cents."""
        assert to_cents(1.0) == 0.0

    def test_octave_is_1200(self):
        """2/1 = 1200 cents."""
        assert to_cents(2.0) == 1200.0

    def test_pure_fifth(self):
        """3/2 ≈ 701.955 cents."""
        # 1200 * log2(3/2) ≈ 701.955 cents
        assert abs(to_cents(3 / 2) - 701.955) < 0.1

    def test_major_third(self):
        """5/4 ≈ 386.31 cents."""
        assert abs(to_cents(5 / 4) - 386.3137) < 0.001

    def test_below_unison_is_negative(self):
        """1/2 = -1200 cents."""
        assert to_cents(0.5) == -1200.0

    def test_zero_ratio_is_nan(self):
        """Domain violations propagate NaN instead of raising."""
        assert math.isnan(to_cents(0.0))

    def test_negative_ratio_is_nan(self):
        """Negative ratios give NaN."""
        assert math.isnan(to_cents(-3.0))


class TestFromCents:
    """Tests for cents to ratio conversion."""

    def test_zero_is_unison(self):
        """0 cents = 1/1."""
        assert from_cents(0.0) == 1.0

    def test_1200_is_octave(self):
        """1200 cents = 2/1."""
        assert from_cents(1200.0) == 2.0

    def test_semitone(self):
        """100 cents = 2^(1/12)."""
        assert abs(from_cents(100.0) - 2 ** (1 / 12)) < 1e-12

    @pytest.mark.parametrize("ratio", [1e-3, 0.5, 1.0, 1.5, 81 / 64, 7.0, 1234.5])
    def test_round_trip(self, ratio):
        """from_cents(to_cents(r)) ≈ r within 1e-9 relative."""
        assert from_cents(to_cents(ratio)) == pytest.approx(ratio, rel=1e-9)


class TestSignedDelta:
    """Tests for circular cents difference."""

    def test_wraparound_upward(self):
        """From 1190 to 10 is +20, not -1180."""
        assert signed_delta(1190, 10) == pytest.approx(20.0)

    def test_wraparound_downward(self):
        """The short way round crosses 0."""
        assert signed_delta(10, 1190) == pytest.approx(-20.0)

    def test_simple_difference(self):
        """Small differences are plain subtraction."""
        assert signed_delta(386.3, 400.0) == pytest.approx(13.7)

    def test_exact_half_octave_resolves_to_minus_600(self):
        """Exactly half an octave gives -600, never +600."""
        assert signed_delta(0, 600) == -600.0
        assert signed_delta(600, 0) == -600.0

    def test_antisymmetric(self):
        """Swapping arguments flips the sign away from ±600."""
        for a, b in [(0, 100), (1190, 10), (350, 1000), (701.955, 0)]:
            assert signed_delta(a, b) == pytest.approx(-signed_delta(b, a))

    @pytest.mark.parametrize("reference,target", [
        (0, 0), (0, 599.9), (100, 1300), (-250, 4000), (1199, -1199), (50, 650.5),
    ])
    def test_result_in_half_open_range(self, reference, target):
        """Results stay in [-600, 600)."""
        d = signed_delta(reference, target)
        assert -600 <= d < 600

    @pytest.mark.parametrize("reference,target", [
        (0, 2500), (100, -700), (1190, 10), (333.3, 12.1),
    ])
    def test_congruent_to_plain_difference(self, reference, target):
        """Results differ from target - reference by whole octaves."""
        d = signed_delta(reference, target)
        octaves = (d - (target - reference)) / 1200
        assert octaves == pytest.approx(round(octaves), abs=1e-9)


class TestPositiveMod:
    """Tests for the always-positive remainder."""

    def test_negative_operand(self):
        """Negative values wrap into [0, m)."""
        assert positive_mod(-100, 1200) == 1100

    def test_positive_operand(self):
        """Positive values behave like %."""
        assert positive_mod(1300, 1200) == 100

    def test_multiple_of_modulus(self):
        """Multiples of the modulus give 0."""
        assert positive_mod(-2400, 1200) == 0


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    def test_half_rounds_up(self):
        """0.5 → 1, 2.5 → 3."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_negative_half_rounds_toward_positive(self):
        """-0.5 → 0."""
        assert round_half_up(-0.5) == 0

    def test_ordinary_values(self):
        """Non-halves round to the nearest integer."""
        assert round_half_up(3.86) == 4
        assert round_half_up(-1.2) == -1


class TestFractions:
    """Tests for exact fraction helpers."""

    def test_reduce_fraction(self):
        """6/4 → 3/2."""
        assert reduce_fraction(6, 4) == (3, 2)
        assert reduce_fraction(40, 36) == (10, 9)

    def test_reduce_fraction_already_reduced(self):
        """Coprime fractions are unchanged."""
        assert reduce_fraction(15, 8) == (15, 8)

    def test_format_ratio(self):
        """(3, 2) → "3/2"."""
        assert format_ratio(3, 2) == "3/2"

    def test_format_ratio_whole_number(self):
        """Whole numbers keep the /1."""
        assert format_ratio(5, 1) == "5/1"

    def test_octave_reduce_fraction_above(self):
        """Fractions above 2 are halved into range."""
        assert octave_reduce_fraction(9, 2) == (9, 8)

    def test_octave_reduce_fraction_below(self):
        """Fractions below 1 are doubled into range."""
        assert octave_reduce_fraction(9, 10) == (9, 5)

    def test_octave_reduce_fraction_unison(self):
        """Octaves of 1 reduce to 1/1."""
        assert octave_reduce_fraction(4, 4) == (1, 1)

    def test_octave_reduce_fraction_rejects_zero(self):
        """Non-positive terms raise ValueError."""
        with pytest.raises(ValueError):
            octave_reduce_fraction(0, 3)


class TestOctaveReduce:
    """Tests for octave_reduce function."""

    def test_already_reduced(self):
        """Ratios in [1, 2) are unchanged, k = 0."""
        assert octave_reduce(1.5) == (1.5, 0)

    def test_above_octave(self):
        """3 → 1.5 with k = 1."""
        assert octave_reduce(3.0) == (1.5, 1)

    def test_below_unison(self):
        """Ratios below 1 give a negative k."""
        assert octave_reduce(0.75) == (1.5, -1)

    def test_exact_octave(self):
        """2 → 1 with k = 1."""
        assert octave_reduce(4.0) == (1.0, 2)

    def test_result_always_in_range(self):
        """The reduced ratio is always in [1, 2)."""
        for r in [1.0, 1.999999, 2.0, 17.0, 0.1, 1 / 3]:
            reduced, _ = octave_reduce(r)
            assert 1.0 <= reduced < 2.0

    def test_invalid_ratio_is_nan(self):
        """Non-positive ratios give (NaN, 0)."""
        reduced, k = octave_reduce(0.0)
        assert math.isnan(reduced)
        assert k == 0


class TestDeviationGrade:
    """Tests for deviation classification thresholds."""

    def test_pure(self):
        """Under 5 cents either way is pure."""
        assert deviation_grade(0.0) == "pure"
        assert deviation_grade(-4.9) == "pure"

    def test_moderate(self):
        """5 to under 15 cents is moderate."""
        assert deviation_grade(10.0) == "moderate"
        assert deviation_grade(-5.0) == "moderate"

    def test_wide(self):
        """15 cents or more is wide."""
        assert deviation_grade(25.0) == "wide"
        assert deviation_grade(-15.0) == "wide"
