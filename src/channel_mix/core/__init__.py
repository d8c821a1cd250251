"""
Core module for channel-mix.

Provides the data contracts, the default channel catalog, and the
exception types shared by every other layer.
"""

from channel_mix.core.contracts import (
    Objective,
    StopReason,
    Channel,
    RunRequest,
    ResultRow,
    Totals,
)
from channel_mix.core.catalog import (
    default_channels,
    make_channel_id,
    new_channel,
    get_channel,
)
from channel_mix.core.exceptions import (
    ChannelMixError,
    PlanLoadError,
    ChannelNotFoundError,
)

__all__ = [
    "Objective",
    "StopReason",
    "Channel",
    "RunRequest",
    "ResultRow",
    "Totals",
    "default_channels",
    "make_channel_id",
    "new_channel",
    "get_channel",
    "ChannelMixError",
    "PlanLoadError",
    "ChannelNotFoundError",
]
