"""Tests for the saturation curve and environment factors."""

import math

import numpy as np
import pytest

from channel_mix.core.catalog import default_channels
from channel_mix.core.contracts import Channel
from channel_mix.transforms import (
    asymptote,
    content_lift_factor,
    curve_params,
    effective_base_return,
    marginal_revenue,
    rate_constant,
    response_curve,
    revenue_at,
    seasonality_factor,
)


class TestSaturationCurve:
    """Test the exponential saturation curve."""

    def test_rate_constant(self):
        """k is ln(20) / saturation spend."""
        assert rate_constant(50000) == pytest.approx(math.log(20) / 50000)

    def test_rate_constant_fallback(self):
        """Non-positive saturation spend uses a small positive rate."""
        assert rate_constant(0) == pytest.approx(1e-5)
        assert rate_constant(-100) == pytest.approx(1e-5)

    @pytest.mark.parametrize("saturation_spend", [math.inf, math.nan])
    def test_rate_constant_non_finite_fallback(self, saturation_spend):
        """Spends that give no finite positive k use the fallback rate."""
        assert rate_constant(saturation_spend) == pytest.approx(1e-5)

    def test_infinite_saturation_spend_gives_finite_revenue(self):
        """Curve parameters stay finite for an unvalidated infinite saturation spend."""
        ch = Channel.model_construct(id="x", base_return=2.0, saturation_spend=math.inf)
        A, k = curve_params(ch)

        assert k == pytest.approx(1e-5)
        assert math.isfinite(A)
        assert math.isfinite(revenue_at(10000, ch))

    def test_zero_spend_zero_revenue(self):
        """revenue_at(0) is 0 for every channel."""
        for ch in default_channels():
            assert revenue_at(0, ch, 0.3, 1.2) == 0.0

    def test_non_decreasing(self):
        """Revenue never drops as spend grows."""
        for ch in default_channels():
            values = [revenue_at(s, ch) for s in np.linspace(0, 500000, 200)]
            assert all(b >= a for a, b in zip(values, values[1:]))

    def test_95_percent_at_saturation(self):
        """The curve reaches 95% of its asymptote at the saturation spend."""
        for ch in default_channels():
            A = asymptote(ch, 0.1, 1.1)
            assert revenue_at(ch.saturation_spend, ch, 0.1, 1.1) == pytest.approx(0.95 * A)

    def test_asymptote_formula(self, search_channel):
        """A = base / k, bounded above by A."""
        k = math.log(20) / 50000
        assert asymptote(search_channel) == pytest.approx(4.0 / k)
        assert revenue_at(10_000_000, search_channel) <= asymptote(search_channel)

    def test_fallback_curve_is_finite(self):
        """A zero saturation spend still yields finite revenue."""
        ch = Channel(id="broken", base_return=2.0, saturation_spend=0)
        value = revenue_at(10000, ch)
        assert math.isfinite(value)
        assert value > 0

    def test_content_lift_only_for_affected(self):
        """Content lift boosts only content-affected channels."""
        plain = Channel(id="plain", base_return=3.0)
        affected = Channel(id="social", base_return=3.0, affected_by_content=True)

        assert effective_base_return(plain, 0.5) == pytest.approx(3.0)
        assert effective_base_return(affected, 0.5) == pytest.approx(4.5)
        assert revenue_at(20000, affected, 0.5) > revenue_at(20000, plain, 0.5)

    def test_seasonality_floor(self, search_channel):
        """Seasonality below 0.1 is floored at 0.1."""
        A_floor, _ = curve_params(search_channel, seasonality=0.1)
        A_negative, _ = curve_params(search_channel, seasonality=-3.0)
        assert A_negative == pytest.approx(A_floor)
        assert A_negative > 0

    def test_seasonality_scales_revenue(self, search_channel):
        """Revenue scales linearly with the seasonality factor."""
        base = revenue_at(20000, search_channel, seasonality=1.0)
        high = revenue_at(20000, search_channel, seasonality=1.5)
        assert high == pytest.approx(1.5 * base)

    def test_marginal_revenue_difference(self, search_channel):
        """Marginal revenue is the difference of two curve points."""
        expected = revenue_at(6000, search_channel) - revenue_at(5000, search_channel)
        assert marginal_revenue(5000, 1000, search_channel) == pytest.approx(expected)

    def test_marginal_revenue_decreasing(self, search_channel):
        """Marginal value falls as the channel's own spend rises."""
        gains = [marginal_revenue(s, 1000, search_channel) for s in range(0, 100000, 5000)]
        assert all(b < a for a, b in zip(gains, gains[1:]))

    def test_response_curve_matches_scalar(self, search_channel):
        """Vectorised curve agrees with revenue_at."""
        spends = np.array([0, 1000, 25000, 50000, 120000])
        curve = response_curve(search_channel, spends, 0.0, 1.2)

        assert curve.shape == spends.shape
        for s, v in zip(spends, curve):
            assert v == pytest.approx(revenue_at(s, search_channel, 0.0, 1.2))


class TestEnvironmentFactors:
    """Test seasonality and content-lift factors."""

    def test_neutral_seasonality(self):
        """All months active at 1.0 gives 1.0."""
        assert seasonality_factor([1.0] * 12, [True] * 12) == pytest.approx(1.0)

    def test_average_of_active_months(self):
        """Only active months are averaged."""
        seasonality = [1.5, 1.3, 0.7] + [1.0] * 9
        active = [True, True, False] + [False] * 9
        assert seasonality_factor(seasonality, active) == pytest.approx(1.4)

    def test_no_active_months(self):
        """No active month falls back to neutral."""
        assert seasonality_factor([2.0] * 12, [False] * 12) == pytest.approx(1.0)

    def test_non_positive_months_ignored(self):
        """Active months with a non-positive multiplier are skipped."""
        seasonality = [0.0, -1.0, 1.2, 0.8] + [1.0] * 8
        active = [True] * 4 + [False] * 8
        assert seasonality_factor(seasonality, active) == pytest.approx(1.0)

    def test_default_mask_uses_all_months(self):
        assert seasonality_factor([1.2] * 6 + [0.8] * 6) == pytest.approx(1.0)

    def test_content_lift(self):
        """Lift is spend / 10k times the coefficient."""
        assert content_lift_factor(20000, 0.05) == pytest.approx(0.1)
        assert content_lift_factor(0, 0.05) == 0.0

    def test_content_lift_disabled(self):
        """Non-positive coefficients produce no lift."""
        assert content_lift_factor(50000, 0.0) == 0.0
        assert content_lift_factor(50000, -0.2) == 0.0
