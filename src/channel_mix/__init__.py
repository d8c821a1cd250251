"""
channel-mix: Channel Mix Budget Optimizer.

Recommends how to split a fixed marketing budget across advertising
channels using diminishing-returns response curves, per-channel spend
limits, and a content-lift feedback loop.

Quickstart::

    from channel_mix import RunRequest, default_channels, optimize_allocation
    request = RunRequest(channels=default_channels(), total_budget=250_000)
    result = optimize_allocation(request)
"""

from channel_mix.core.catalog import default_channels
from channel_mix.core.contracts import Channel, Objective, RunRequest
from channel_mix.optimization.allocator import (
    AllocationResult,
    GreedyAllocator,
    optimize_allocation,
)

__version__ = "0.1.0"

__all__ = [
    "Channel",
    "Objective",
    "RunRequest",
    "AllocationResult",
    "GreedyAllocator",
    "optimize_allocation",
    "default_channels",
]
