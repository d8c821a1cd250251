"""
Budget optimization layer for channel-mix.

Provides the greedy marginal-value allocator, result aggregation,
and scenario planning built on top of it.
"""

from channel_mix.optimization.allocator import (
    GreedyAllocator,
    AllocationResult,
    optimize_allocation,
)
from channel_mix.optimization.aggregate import aggregate_results
from channel_mix.optimization.scenarios import (
    BudgetScenario,
    create_budget_scenarios,
    compare_scenarios,
    compute_efficiency_frontier,
    compare_objectives,
)

__all__ = [
    "GreedyAllocator",
    "AllocationResult",
    "optimize_allocation",
    "aggregate_results",
    "BudgetScenario",
    "create_budget_scenarios",
    "compare_scenarios",
    "compute_efficiency_frontier",
    "compare_objectives",
]
