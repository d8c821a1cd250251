"""
Exponential saturation curve for channel revenue.

Each channel's revenue follows ``A * (1 - exp(-k * spend))``.  The rate
``k`` is chosen so the curve reaches 95% of its asymptote exactly at the
channel's saturation spend; the asymptote ``A`` scales with the
channel's (content-lifted) base return and the seasonality factor.
"""

import math

import numpy as np
import pandas as pd

from channel_mix.core.contracts import Channel


# -ln(0.05): curve reaches 95% of A at spend = saturation_spend
LN_20 = math.log(20.0)

# Rate used when saturation_spend gives no finite positive k
FALLBACK_RATE = 1e-5

# Floor on the seasonality multiplier
MIN_SEASONALITY = 0.1


def rate_constant(saturation_spend: float) -> float:
    """
    Return the decay rate ``k = ln(20) / saturation_spend``.

    Falls back to ``FALLBACK_RATE`` when the saturation spend is not
    positive or the quotient is not finite and positive (NaN, infinite
    spend).
    """
    if not saturation_spend > 0:
        return FALLBACK_RATE
    k = LN_20 / saturation_spend
    if not (k > 0 and math.isfinite(k)):
        return FALLBACK_RATE
    return k


def effective_base_return(channel: Channel, content_lift: float) -> float:
    """Base return boosted by the content-lift factor for content-affected channels."""
    if channel.affected_by_content:
        return channel.base_return * (1 + content_lift)
    return channel.base_return


def curve_params(
    channel: Channel,
    content_lift: float = 0.0,
    seasonality: float = 1.0,
) -> tuple[float, float]:
    """
    Compute the (asymptote, rate) pair for a channel.

    Args:
        channel: Channel calibration
        content_lift: Current content-lift factor
        seasonality: Seasonality multiplier (floored at 0.1)

    Returns:
        ``(A, k)``
    """
    k = rate_constant(channel.saturation_spend)
    A = effective_base_return(channel, content_lift) / k * max(MIN_SEASONALITY, seasonality)
    return A, k


def asymptote(channel: Channel, content_lift: float = 0.0, seasonality: float = 1.0) -> float:
    return curve_params(channel, content_lift, seasonality)[0]


def revenue_at(
    spend: float,
    channel: Channel,
    content_lift: float = 0.0,
    seasonality: float = 1.0,
) -> float:
    """
    Modeled (pre-incrementality) revenue at a spend level.

    Concave and non-decreasing in spend with ``revenue_at(0) == 0``.

    Example:
        >>> ch = Channel(id="search", base_return=4.0, saturation_spend=50000)
        >>> round(revenue_at(50000, ch) / asymptote(ch), 2)
        0.95
    """
    A, k = curve_params(channel, content_lift, seasonality)
    return A * (1 - math.exp(-k * spend))


def marginal_revenue(
    spend: float,
    step: float,
    channel: Channel,
    content_lift: float = 0.0,
    seasonality: float = 1.0,
) -> float:
    """Revenue gained by adding ``step`` on top of ``spend``."""
    return (
        revenue_at(spend + step, channel, content_lift, seasonality)
        - revenue_at(spend, channel, content_lift, seasonality)
    )


def response_curve(
    channel: Channel,
    spends: np.ndarray | pd.Series | list[float],
    content_lift: float = 0.0,
    seasonality: float = 1.0,
) -> np.ndarray:
    """Vectorised ``revenue_at`` over an array of spend levels."""
    A, k = curve_params(channel, content_lift, seasonality)
    x = np.maximum(np.asarray(spends, dtype=float), 0)
    return A * (1 - np.exp(-k * x))
