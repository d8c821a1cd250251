"""
Transform layer for channel-mix.

Provides the saturation curve model and the environment multipliers
(seasonality, content lift) that feed it.
"""

from channel_mix.transforms.saturation import (
    rate_constant,
    effective_base_return,
    curve_params,
    asymptote,
    revenue_at,
    marginal_revenue,
    response_curve,
)
from channel_mix.transforms.environment import (
    seasonality_factor,
    content_lift_factor,
)

__all__ = [
    # Saturation
    "rate_constant",
    "effective_base_return",
    "curve_params",
    "asymptote",
    "revenue_at",
    "marginal_revenue",
    "response_curve",
    # Environment
    "seasonality_factor",
    "content_lift_factor",
]
