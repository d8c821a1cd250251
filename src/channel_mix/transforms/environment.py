"""
Environment multipliers shared by all channel curves.

Seasonality is fixed for a run; the content-lift factor depends on the
content channel's current allocation and is the only coupling between
channels.
"""

from typing import Sequence

import numpy as np


NEUTRAL_SEASONALITY = 1.0

# Content lift is expressed per 10k of content spend
CONTENT_LIFT_UNIT = 10_000


def seasonality_factor(
    seasonality: Sequence[float],
    active_months: Sequence[bool] | None = None,
) -> float:
    """
    Average seasonality multiplier over the active months.

    Months with a non-positive multiplier count as inactive.  Returns
    1.0 (neutral) when no month qualifies.

    Example:
        >>> seasonality_factor([1.2] * 6 + [0.8] * 6, [True] * 6 + [False] * 6)
        1.2
    """
    values = np.asarray(seasonality, dtype=float)
    if active_months is None:
        mask = np.ones(len(values), dtype=bool)
    else:
        mask = np.asarray(active_months, dtype=bool)

    selected = values[mask & (values > 0)]
    if selected.size == 0:
        return NEUTRAL_SEASONALITY
    return float(selected.mean())


def content_lift_factor(content_spend: float, content_lift_per_10k: float) -> float:
    """Lift applied to content-affected channels: ``spend / 10k * coefficient``."""
    if content_lift_per_10k <= 0:
        return 0.0
    return content_spend / CONTENT_LIFT_UNIT * content_lift_per_10k
