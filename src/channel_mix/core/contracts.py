"""
Data contracts for channel-mix.

These Pydantic models define every data boundary of the optimizer:
channel calibration parameters, the immutable run request, and the
per-channel result rows.  The optimizer is a pure function of a
``RunRequest``; nothing here is mutated during a run.

Validation is limited to per-field ranges and finite numbers.
Cross-field consistency (e.g. ``min_percent <= max_percent``) is left
to the allocator, which resolves inconsistent configurations instead
of rejecting them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from channel_mix.config import ChannelMixConfig


# Safety bound on greedy loop passes per run
MAX_ITERATIONS = 2_000_000


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Objective(str, Enum):
    AUTO = "auto"
    ROAS = "roas"
    REVENUE = "revenue"
    ADR = "adr"
    OCCUPANCY = "occupancy"
    AWARENESS = "awareness"


class StopReason(str, Enum):
    BUDGET_EXHAUSTED = "budget_exhausted"
    NO_POSITIVE_GAIN = "no_positive_gain"
    ITERATION_LIMIT = "iteration_limit"
    NO_CHANNELS = "no_channels"
    INVALID_STEP = "invalid_step"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class Channel(BaseModel):
    """Calibration and constraint parameters for one advertising channel."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(min_length=1, max_length=120)
    name: str = ""
    base_return: float = Field(default=2.0, ge=0, description="Revenue per unit spend at low spend")
    saturation_spend: float = Field(default=30000, description="Spend reaching 95% of the asymptote")
    min_spend: float = Field(default=0.0, ge=0)
    max_spend: float | None = Field(default=None, ge=0, description="None = no absolute cap")
    min_percent: float = Field(default=0.0, ge=0, le=1)
    max_percent: float = Field(default=1.0, ge=0, le=1, description="0 = no percent cap")
    incrementality: float = Field(default=1.0, ge=0, le=1)
    affected_by_content: bool = False
    adr_uplift: float = 1.0
    occ_uplift: float = 1.0
    awareness_score: float = 1.0
    enabled: bool = True

    @property
    def label(self) -> str:
        return self.name or self.id


class RunRequest(BaseModel):
    """Immutable snapshot of everything one optimizer run needs."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    channels: list[Channel] = Field(default_factory=list)
    total_budget: float = Field(default=250000, ge=0)
    step: float = 1000
    content_lift_per_10k: float = 0.05
    objective: Objective = Objective.AUTO
    seasonality: list[float] = Field(default_factory=lambda: [1.0] * 12)
    active_months: list[bool] = Field(default_factory=lambda: [True] * 12)
    content_channel_id: str = "content"
    max_iterations: int = Field(default=MAX_ITERATIONS, ge=0, le=MAX_ITERATIONS)

    @field_validator("seasonality", "active_months")
    @classmethod
    def _twelve_months(cls, v: list) -> list:
        if len(v) != 12:
            raise ValueError(f"expected 12 monthly values, got {len(v)}")
        return v

    @field_validator("channels")
    @classmethod
    def _unique_ids(cls, v: list[Channel]) -> list[Channel]:
        seen = set()
        for ch in v:
            if ch.id in seen:
                raise ValueError(f"duplicate channel id '{ch.id}'")
            seen.add(ch.id)
        return v

    @property
    def enabled_channels(self) -> list[Channel]:
        return [ch for ch in self.channels if ch.enabled]

    @classmethod
    def from_config(
        cls,
        config: "ChannelMixConfig",
        channels: list[Channel],
        **overrides,
    ) -> "RunRequest":
        """Build a request from configured optimizer defaults."""
        opt = config.optimizer
        params = {
            "channels": channels,
            "total_budget": opt.total_budget,
            "step": opt.step,
            "content_lift_per_10k": opt.content_lift_per_10k,
            "objective": opt.objective,
            "content_channel_id": opt.content_channel_id,
            "max_iterations": opt.max_iterations,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class ResultRow(BaseModel):
    """Converged spend and attributed revenue for one channel."""

    id: str
    name: str
    spend: float
    modeled_revenue: float
    revenue: float
    roas: float


class Totals(BaseModel):
    spend: float = 0.0
    revenue: float = 0.0

    @property
    def blended_roas(self) -> float:
        return self.revenue / max(1.0, self.spend)
