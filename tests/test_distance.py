"""
Distance Tests — Attenuation curves, cutoff and taper.
"""

import math

import pytest

from soundstage.spatial.distance import DistanceModel, distance_attenuation, taper


ALL_MODELS = list(DistanceModel)


class TestCutoff:
    """Sound is silent at and beyond max_distance."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_zero_at_max_distance(self, model):
        """Exactly at the cutoff is silent."""
        assert distance_attenuation(5.0, model, 1.0, 5.0) == 0.0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_zero_beyond_max_distance(self, model):
        """Beyond the cutoff is silent."""
        for d in (5.01, 6.0, 100.0):
            assert distance_attenuation(d, model, 1.0, 5.0) == 0.0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_approaches_zero_smoothly(self, model):
        """No jump at the cutoff: just inside it the gain is already tiny."""
        assert distance_attenuation(5.0 - 1e-6, model, 1.0, 5.0) < 1e-6


class TestCurves:
    """Base curve values away from the taper."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_full_gain_inside_reference(self, model):
        """Full gain at or inside the reference distance."""
        assert distance_attenuation(0.0, model) == pytest.approx(1.0)
        assert distance_attenuation(0.5, model) == pytest.approx(1.0)
        assert distance_attenuation(1.0, model) == pytest.approx(1.0)

    def test_inverse(self):
        """Inverse curve is ref / d with unit rolloff."""
        assert distance_attenuation(2.0, "inverse", 1.0, 5.0) == pytest.approx(0.5)
        assert distance_attenuation(3.0, "inverse", 1.0, 5.0) == pytest.approx(1 / 3)

    def test_linear(self):
        """Linear curve is halfway down halfway through the range."""
        assert distance_attenuation(3.0, "linear", 1.0, 5.0) == pytest.approx(0.5)

    def test_exponential(self):
        """Exponential curve raises ref / d to the rolloff."""
        assert distance_attenuation(2.0, "exponential", 1.0, 5.0) == pytest.approx(0.5)
        assert distance_attenuation(2.0, "exponential", 1.0, 5.0, rolloff=2.0) == pytest.approx(0.25)

    def test_rolloff_steepens_inverse(self):
        """Higher rolloff falls off faster."""
        gentle = distance_attenuation(3.0, "inverse", rolloff=0.5)
        steep = distance_attenuation(3.0, "inverse", rolloff=2.0)
        assert steep < gentle

    def test_linear_floor_at_zero(self):
        """A large rolloff drives the linear curve to zero, never below."""
        assert distance_attenuation(3.0, "linear", 1.0, 5.0, rolloff=10.0) == 0.0


class TestTaper:
    """Raised-cosine taper over the last 20% of the range."""

    def test_no_taper_below_start(self):
        """Taper is 1.0 up to 80% of the range."""
        assert taper(3.9, 5.0) == 1.0
        assert taper(4.0, 5.0) == 1.0

    def test_midpoint_is_half(self):
        """Halfway through the taper region is 0.5."""
        assert taper(4.5, 5.0) == pytest.approx(0.5)

    def test_taper_applied_to_curve(self):
        """The curve is multiplied by the taper."""
        assert distance_attenuation(4.5, "inverse", 1.0, 5.0) == pytest.approx((1 / 4.5) * 0.5)


class TestMonotonic:
    """Attenuation never increases with distance."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_strictly_decreasing_before_taper(self, model):
        """Strictly decreasing between ref and the taper start."""
        distances = [1.0 + 0.1 * i for i in range(30)]  # 1.0 .. 3.9
        gains = [distance_attenuation(d, model, 1.0, 5.0) for d in distances]
        assert all(a > b for a, b in zip(gains, gains[1:]))

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_non_increasing_everywhere(self, model):
        """Never increasing anywhere on the range."""
        distances = [0.05 * i for i in range(130)]  # 0 .. 6.45
        gains = [distance_attenuation(d, model, 1.0, 5.0) for d in distances]
        assert all(a >= b for a, b in zip(gains, gains[1:]))


class TestDegenerateRanges:
    """Bad ranges fall back to silence instead of NaN or infinity."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_max_equal_to_ref(self, model):
        """max_distance equal to ref_distance is silent."""
        assert distance_attenuation(0.5, model, 1.0, 1.0) == 0.0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_max_below_ref(self, model):
        """max_distance below ref_distance is silent, not NaN."""
        gain = distance_attenuation(0.2, model, 1.0, 0.5)
        assert gain == 0.0
        assert not math.isnan(gain)

    def test_non_positive_ref(self):
        """A zero reference distance is silent instead of dividing by zero."""
        assert distance_attenuation(0.0, "exponential", 0.0, 5.0) == 0.0

    def test_unknown_model_rejected(self):
        """Unknown model names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown distance model"):
            distance_attenuation(1.0, "quadratic")
