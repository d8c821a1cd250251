"""
Greedy budget allocator using saturation curves.

Distributes the budget in fixed increments, each time granting one
step to the channel with the highest objective-weighted marginal
value, until the budget runs out or no channel gains anything.
"""

from dataclasses import dataclass, field
import json
import math
from pathlib import Path

import pandas as pd
from loguru import logger

from channel_mix.core.contracts import (
    Channel,
    Objective,
    ResultRow,
    RunRequest,
    StopReason,
    Totals,
)
from channel_mix.optimization.aggregate import aggregate_results
from channel_mix.transforms.environment import content_lift_factor, seasonality_factor
from channel_mix.transforms.saturation import marginal_revenue


@dataclass
class AllocationResult:
    """
    Results from one allocator run.
    """

    # Per-channel outcome
    rows: list[ResultRow] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)
    allocation: dict[str, float] = field(default_factory=dict)

    # Run context
    total_budget: float = 0.0
    objective: Objective = Objective.AUTO
    content_lift: float = 0.0
    seasonality: float = 1.0

    # Convergence details
    iterations: int = 0
    stop_reason: StopReason = StopReason.BUDGET_EXHAUSTED

    # Per-channel metrics
    channel_metrics: pd.DataFrame | None = None

    @property
    def blended_roas(self) -> float:
        return self.totals.blended_roas

    @property
    def unallocated(self) -> float:
        return self.total_budget - self.totals.spend

    def to_dict(self) -> dict:
        return {
            "rows": [row.model_dump() for row in self.rows],
            "totals": {
                "spend": self.totals.spend,
                "revenue": self.totals.revenue,
                "blended_roas": self.blended_roas,
            },
            "allocation": self.allocation,
            "total_budget": self.total_budget,
            "objective": self.objective.value,
            "content_lift": self.content_lift,
            "seasonality": self.seasonality,
            "iterations": self.iterations,
            "stop_reason": self.stop_reason.value,
        }

    def to_frame(self) -> pd.DataFrame:
        """Result rows as a DataFrame (one row per enabled channel)."""
        columns = ["id", "name", "spend", "modeled_revenue", "revenue", "roas"]
        return pd.DataFrame([row.model_dump() for row in self.rows], columns=columns)

    def save(self, path: Path | str) -> None:
        """Save results to JSON, with the CSV export alongside."""
        from channel_mix.reporting.export import write_csv

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        write_csv(self, path.with_suffix(".csv"))


class GreedyAllocator:
    """
    Allocate a budget across channels by greedy marginal value.

    Channels are seeded at their spend floor, then each iteration
    recomputes the content-lift factor and grants one ``step`` to the
    channel whose next step yields the largest weighted gain.  Ties go
    to the channel listed first.

    Example:
        >>> request = RunRequest(channels=default_channels(), total_budget=250_000)
        >>> result = GreedyAllocator(request).optimize()
        >>> result.totals.spend <= 250_000
        True
    """

    def __init__(self, request: RunRequest):
        self.request = request
        self.channels = request.enabled_channels
        self.seasonality = seasonality_factor(request.seasonality, request.active_months)

        enabled_ids = {ch.id for ch in self.channels}
        self._content_id = request.content_channel_id if request.content_channel_id in enabled_ids else None

    def effective_cap(self, channel: Channel) -> float:
        """
        Upper spend bound: ``min(max_spend, max_percent * budget)``.

        A ``max_percent`` of 0 means no percent cap and a missing
        ``max_spend`` means no absolute cap.
        """
        cap = math.inf if channel.max_spend is None else channel.max_spend
        if channel.max_percent > 0:
            cap = min(cap, channel.max_percent * self.request.total_budget)
        return cap

    def effective_floor(self, channel: Channel) -> float:
        """Lower spend bound: ``max(min_spend, min_percent * budget)``."""
        return max(channel.min_spend, channel.min_percent * self.request.total_budget)

    def seed(self) -> dict[str, float]:
        """Initial allocation: each channel's floor, clamped to its cap."""
        allocation = {}

        for ch in self.channels:
            floor = self.effective_floor(ch)
            cap = self.effective_cap(ch)
            if floor > cap:
                logger.warning(
                    f"Channel '{ch.id}': spend floor {floor:,.0f} exceeds cap {cap:,.0f}; "
                    f"seeding at the cap"
                )
                floor = cap
            allocation[ch.id] = floor

        return allocation

    def content_lift(self, allocation: dict[str, float]) -> float:
        """Content-lift factor for the current allocation."""
        if self._content_id is None:
            return 0.0
        return content_lift_factor(allocation[self._content_id], self.request.content_lift_per_10k)

    def weighted_marginal(self, channel: Channel, spend: float, content_lift: float) -> float:
        """Incrementality- and objective-weighted gain of one more step."""
        step = self.request.step
        value = marginal_revenue(spend, step, channel, content_lift, self.seasonality)
        value *= channel.incrementality

        objective = self.request.objective
        if objective == Objective.ROAS:
            value /= max(step, 1)
        elif objective == Objective.ADR:
            value *= channel.adr_uplift
        elif objective == Objective.OCCUPANCY:
            value *= channel.occ_uplift
        elif objective == Objective.AWARENESS:
            value *= channel.awareness_score

        return value

    def optimize(self) -> AllocationResult:
        """
        Run the greedy search to convergence.

        Never raises for numeric configuration problems: a non-positive
        step skips the search, and runaway inputs are cut off at
        ``max_iterations`` with whatever allocation was reached.

        Returns:
            AllocationResult with rows, totals and convergence details
        """
        request = self.request
        total_budget = request.total_budget
        step = request.step

        if not self.channels:
            logger.warning("No enabled channels; returning an empty allocation")
            return AllocationResult(
                total_budget=total_budget,
                objective=request.objective,
                seasonality=self.seasonality,
                stop_reason=StopReason.NO_CHANNELS,
            )

        logger.info(
            f"Allocating {total_budget:,.0f} across {len(self.channels)} channels "
            f"in steps of {step:,.0f} (objective={request.objective.value})"
        )
        logger.debug(f"Seasonality factor: {self.seasonality:.3f}")

        allocation = self.seed()
        caps = {ch.id: self.effective_cap(ch) for ch in self.channels}

        spent = sum(allocation.values())
        if spent > total_budget:
            logger.warning(
                f"Seeded minimums ({spent:,.0f}) exceed the total budget ({total_budget:,.0f})"
            )

        iterations = 0
        if step <= 0:
            logger.warning(f"Non-positive step ({step}); skipping allocation search")
            stop_reason = StopReason.INVALID_STEP
        else:
            stop_reason = StopReason.BUDGET_EXHAUSTED

            while max(0.0, total_budget - spent) >= step:
                if iterations >= request.max_iterations:
                    logger.warning(f"Iteration limit ({request.max_iterations:,}) reached")
                    stop_reason = StopReason.ITERATION_LIMIT
                    break
                iterations += 1

                lift = self.content_lift(allocation)
                best_id = None
                best_value = -math.inf

                for ch in self.channels:
                    current = allocation[ch.id]
                    if current + step > caps[ch.id]:
                        continue

                    value = self.weighted_marginal(ch, current, lift)
                    if value > best_value:
                        best_value = value
                        best_id = ch.id

                if best_id is None or not math.isfinite(best_value) or best_value <= 0:
                    stop_reason = StopReason.NO_POSITIVE_GAIN
                    break

                allocation[best_id] += step
                spent += step

        lift = self.content_lift(allocation)
        rows, totals = aggregate_results(self.channels, allocation, lift, self.seasonality)

        result = AllocationResult(
            rows=rows,
            totals=totals,
            allocation=dict(allocation),
            total_budget=total_budget,
            objective=request.objective,
            content_lift=lift,
            seasonality=self.seasonality,
            iterations=iterations,
            stop_reason=stop_reason,
            channel_metrics=self._channel_metrics(rows, caps, lift),
        )

        logger.info(
            f"Allocation complete ({stop_reason.value}, {iterations} iterations). "
            f"Spend: {totals.spend:,.0f}, attributed revenue: {totals.revenue:,.0f}, "
            f"blended ROAS: {result.blended_roas:.2f}x"
        )

        return result

    def _channel_metrics(
        self,
        rows: list[ResultRow],
        caps: dict[str, float],
        content_lift: float,
    ) -> pd.DataFrame:
        """Per-channel spend share, cap headroom and marginal ROI at convergence."""
        by_id = {ch.id: ch for ch in self.channels}
        total_spend = sum(row.spend for row in rows)
        delta = self.request.step if self.request.step > 0 else 1.0

        records = []
        for row in rows:
            ch = by_id[row.id]
            gain = marginal_revenue(row.spend, delta, ch, content_lift, self.seasonality)
            records.append({
                "channel": row.id,
                "name": row.name,
                "spend": row.spend,
                "spend_share": row.spend / total_spend if total_spend > 0 else 0.0,
                "floor": self.effective_floor(ch),
                "cap": caps[row.id],
                "revenue": row.revenue,
                "roas": row.roas,
                "marginal_roi": gain * ch.incrementality / delta,
            })

        return pd.DataFrame(records)


def optimize_allocation(request: RunRequest) -> AllocationResult:
    """
    Convenience function for a single optimizer run.

    Args:
        request: Channels and run parameters

    Returns:
        AllocationResult for the request
    """
    return GreedyAllocator(request).optimize()
