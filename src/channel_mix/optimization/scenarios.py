"""
Scenario planning utilities for budget allocation.

Re-run the allocator under different budgets or objectives to support
what-if analysis and strategic planning.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from loguru import logger

from channel_mix.core.contracts import Objective, RunRequest, StopReason
from channel_mix.optimization.allocator import optimize_allocation


@dataclass
class BudgetScenario:
    """
    One optimized budget level.

    ``stop_reason`` and ``unallocated`` show whether the budget was used
    up or the search stopped early because no channel had positive gain
    left within its cap.
    """

    name: str
    total_budget: float
    objective: Objective
    allocation: dict[str, float]
    revenue: float
    roas: float
    stop_reason: StopReason
    unallocated: float = 0.0

    @property
    def saturated(self) -> bool:
        return self.stop_reason == StopReason.NO_POSITIVE_GAIN

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_budget": self.total_budget,
            "objective": self.objective.value,
            "allocation": self.allocation,
            "revenue": self.revenue,
            "roas": self.roas,
            "stop_reason": self.stop_reason.value,
            "unallocated": self.unallocated,
        }


def _with_budget(request: RunRequest, budget: float) -> RunRequest:
    return request.model_copy(update={"total_budget": float(budget)})


def create_budget_scenarios(
    request: RunRequest,
    budget_multipliers: list[float] | None = None,
) -> list[BudgetScenario]:
    """
    Create optimized scenarios at several budget levels.

    Args:
        request: Base run request (its budget is the 100% level)
        budget_multipliers: List of multipliers (e.g., [0.8, 1.0, 1.2])

    Returns:
        List of BudgetScenario objects
    """
    if budget_multipliers is None:
        budget_multipliers = [0.7, 0.85, 1.0, 1.15, 1.3]

    scenarios = []

    for mult in budget_multipliers:
        budget = request.total_budget * mult
        result = optimize_allocation(_with_budget(request, budget))

        scenarios.append(BudgetScenario(
            name=f"Optimized ({mult:.0%})",
            total_budget=budget,
            objective=request.objective,
            allocation=result.allocation,
            revenue=result.totals.revenue,
            roas=result.blended_roas,
            stop_reason=result.stop_reason,
            unallocated=max(0.0, result.unallocated),
        ))
        if result.stop_reason == StopReason.NO_POSITIVE_GAIN:
            logger.info(
                f"Scenario at {budget:,.0f} saturated with {result.unallocated:,.0f} unallocated"
            )

    return scenarios


def compare_scenarios(
    scenarios: list[BudgetScenario],
) -> pd.DataFrame:
    """
    Create a comparison table of scenarios.

    Besides revenue and per-channel spend, each row reports why the
    search stopped and how much budget stayed unallocated.
    ``revenue_vs_base`` and ``marginal_roas`` compare each scenario with
    the first one: percentage revenue change, and extra revenue per
    extra unit of budget.

    Args:
        scenarios: List of BudgetScenario objects

    Returns:
        DataFrame comparing all scenarios
    """
    records = []

    all_channels = []
    for s in scenarios:
        all_channels.extend(c for c in s.allocation if c not in all_channels)

    for scenario in scenarios:
        record = {
            "scenario": scenario.name,
            "objective": scenario.objective.value,
            "total_budget": scenario.total_budget,
            "revenue": scenario.revenue,
            "roas": scenario.roas,
            "stop_reason": scenario.stop_reason.value,
            "unallocated": scenario.unallocated,
        }

        for channel in all_channels:
            record[f"{channel}_spend"] = scenario.allocation.get(channel, 0.0)

        records.append(record)

    df = pd.DataFrame(records)

    if len(df) > 0:
        base_revenue = df["revenue"].iloc[0]
        base_budget = df["total_budget"].iloc[0]
        if base_revenue > 0:
            df["revenue_vs_base"] = (df["revenue"] - base_revenue) / base_revenue * 100
        else:
            df["revenue_vs_base"] = 0.0

        extra_budget = df["total_budget"] - base_budget
        extra_revenue = df["revenue"] - base_revenue
        df["marginal_roas"] = (extra_revenue / extra_budget.where(extra_budget != 0)).fillna(0.0)

    return df


def compute_efficiency_frontier(
    request: RunRequest,
    budget_range: tuple[float, float],
    n_points: int = 20,
) -> pd.DataFrame:
    """
    Compute the efficiency frontier (optimized revenue at each budget level).

    Args:
        request: Base run request; only the budget varies
        budget_range: (min_budget, max_budget)
        n_points: Number of points on the frontier

    Returns:
        DataFrame with budget, revenue, blended ROAS and per-channel spend
    """
    budgets = np.linspace(budget_range[0], budget_range[1], n_points)
    logger.info(
        f"Computing efficiency frontier over {n_points} budgets "
        f"({budget_range[0]:,.0f} - {budget_range[1]:,.0f})"
    )

    records = []

    for budget in budgets:
        result = optimize_allocation(_with_budget(request, budget))

        record = {
            "budget": float(budget),
            "spend": result.totals.spend,
            "revenue": result.totals.revenue,
            "roas": result.blended_roas,
            "stop_reason": result.stop_reason.value,
        }

        for channel, spend in result.allocation.items():
            record[f"{channel}_spend"] = spend
            record[f"{channel}_pct"] = spend / budget * 100 if budget > 0 else 0.0

        records.append(record)

    return pd.DataFrame(records)


def compare_objectives(
    request: RunRequest,
    objectives: list[Objective] | None = None,
) -> pd.DataFrame:
    """
    Optimize the same request under each objective.

    Revenue and ROAS are always reported as attributed revenue, so the
    rows show what each objective's weighting costs in revenue terms.
    """
    if objectives is None:
        objectives = list(Objective)

    records = []

    for objective in objectives:
        result = optimize_allocation(request.model_copy(update={"objective": objective}))

        record = {
            "objective": objective.value,
            "spend": result.totals.spend,
            "revenue": result.totals.revenue,
            "roas": result.blended_roas,
        }
        for channel, spend in result.allocation.items():
            record[f"{channel}_spend"] = spend

        records.append(record)

    return pd.DataFrame(records)
