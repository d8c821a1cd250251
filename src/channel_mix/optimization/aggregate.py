"""
Turn a converged allocation into per-channel result rows and totals.
"""

from channel_mix.core.contracts import Channel, ResultRow, Totals
from channel_mix.transforms.saturation import revenue_at


def aggregate_results(
    channels: list[Channel],
    allocation: dict[str, float],
    content_lift: float,
    seasonality: float,
) -> tuple[list[ResultRow], Totals]:
    """
    Compute attributed revenue and ROAS for each channel.

    Rows follow the order of ``channels``.  Revenue is the modeled curve
    value scaled by incrementality; ROAS is 0 for channels with no spend.

    Args:
        channels: Enabled channels, in input order
        allocation: Channel id -> final spend
        content_lift: Content-lift factor at convergence
        seasonality: Seasonality factor for the run

    Returns:
        ``(rows, totals)``
    """
    rows = []
    totals = Totals()

    for ch in channels:
        spend = allocation.get(ch.id, 0.0)
        modeled = revenue_at(spend, ch, content_lift, seasonality)
        attributed = modeled * ch.incrementality

        rows.append(ResultRow(
            id=ch.id,
            name=ch.label,
            spend=spend,
            modeled_revenue=modeled,
            revenue=attributed,
            roas=attributed / spend if spend > 0 else 0.0,
        ))
        totals.spend += spend
        totals.revenue += attributed

    return rows, totals
