"""Shared fixtures for channel-mix tests."""

import pytest

from channel_mix.config import ChannelMixConfig, set_config
from channel_mix.core.contracts import Channel, RunRequest


@pytest.fixture(autouse=True)
def default_config():
    """Keep every test on the built-in defaults."""
    config = ChannelMixConfig()
    set_config(config)
    return config


@pytest.fixture
def search_channel():
    return Channel(
        id="search",
        name="Search",
        base_return=4.0,
        saturation_spend=50000,
        incrementality=1.0,
    )


@pytest.fixture
def twin_channels():
    """Two channels with identical curves and no caps."""
    params = dict(base_return=2.0, saturation_spend=10000, incrementality=1.0)
    return [
        Channel(id="a", name="A", **params),
        Channel(id="b", name="B", **params),
    ]


@pytest.fixture
def simple_request(search_channel):
    return RunRequest(
        channels=[search_channel],
        total_budget=10000,
        step=1000,
        content_lift_per_10k=0.0,
    )
