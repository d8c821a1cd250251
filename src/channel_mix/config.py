"""
Configuration management for channel-mix.

Centralised configuration with YAML loading and sensible defaults.
The config supplies optimizer defaults (budget, step, objective,
content lift), reporting settings, and API server settings.  Run
plans (channels plus run parameters) are separate YAML/JSON files
loaded with ``load_plan``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from channel_mix.core.catalog import default_channels
from channel_mix.core.contracts import MAX_ITERATIONS, Objective, RunRequest
from channel_mix.core.exceptions import PlanLoadError


# ---------------------------------------------------------------------------
# Section configs
# ---------------------------------------------------------------------------

class OptimizerConfig(BaseModel):
    """Default run parameters."""

    total_budget: float = Field(default=250000, ge=0)
    step: float = Field(default=1000, description="Allocation increment")
    objective: Objective = Field(default=Objective.AUTO)
    content_lift_per_10k: float = Field(default=0.05, description="Lift per 10k of content spend")
    content_channel_id: str = Field(default="content")
    max_iterations: int = Field(default=MAX_ITERATIONS, ge=0, le=MAX_ITERATIONS)


class ReportingConfig(BaseModel):
    """Export and display settings."""

    currency_symbol: str = Field(default="$")
    export_filename: str = Field(default="hotel_budget_optimizer_allocation.csv")


class ServerConfig(BaseModel):
    """API server settings."""

    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------

class ChannelMixConfig(BaseModel):
    """Root configuration for channel-mix."""

    project_name: str = Field(default="channel-mix")
    environment: str = Field(default="development")

    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "ChannelMixConfig":
        """Load config from a YAML file."""
        with open(Path(path)) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Write config to a YAML file."""
        with open(Path(path), "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


# ---------------------------------------------------------------------------
# Global singleton
# ---------------------------------------------------------------------------

_config: ChannelMixConfig | None = None


def get_config() -> ChannelMixConfig:
    """Return the global config instance (creates default if needed)."""
    global _config
    if _config is None:
        _config = ChannelMixConfig()
    return _config


def set_config(config: ChannelMixConfig) -> None:
    """Override the global config instance."""
    global _config
    _config = config


def load_config(path: Path | str | None = None) -> ChannelMixConfig:
    """
    Load config from file, falling back to standard locations, then defaults.
    """
    global _config

    if path is not None:
        _config = ChannelMixConfig.from_yaml(path)
    else:
        for candidate in [Path("config.yaml"), Path("config/config.yaml")]:
            if candidate.exists():
                _config = ChannelMixConfig.from_yaml(candidate)
                break
        else:
            _config = ChannelMixConfig()

    return _config


# ---------------------------------------------------------------------------
# Run plans
# ---------------------------------------------------------------------------

def load_plan(path: Path | str, config: ChannelMixConfig | None = None) -> RunRequest:
    """
    Load a run plan (YAML or JSON) into a ``RunRequest``.

    Parameters missing from the plan fall back to the optimizer section
    of ``config``.  A plan without ``channels`` uses the default catalog.

    Raises:
        PlanLoadError: If the file is missing, unparseable, or invalid
    """
    path = Path(path)
    config = config or get_config()

    if not path.exists():
        raise PlanLoadError(f"Plan file not found: {path}", path=str(path))

    try:
        with open(path) as f:
            if path.suffix.lower() == ".json":
                data: Any = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise PlanLoadError(f"Could not parse plan {path}: {e}", path=str(path)) from e

    data = data or {}
    if not isinstance(data, dict):
        raise PlanLoadError(f"Plan {path} must be a mapping", path=str(path))

    channels = data.pop("channels", None)
    try:
        if channels is None:
            channels = default_channels()
        request = RunRequest.from_config(config, channels, **data)
    except ValidationError as e:
        raise PlanLoadError(f"Invalid plan {path}: {e}", path=str(path)) from e

    logger.info(f"Loaded plan {path}: {len(request.channels)} channels")
    return request


def dump_plan(request: RunRequest, path: Path | str) -> None:
    """Write a run request as a YAML plan."""
    with open(Path(path), "w") as f:
        yaml.dump(request.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
