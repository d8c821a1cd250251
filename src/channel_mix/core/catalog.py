"""
Default channel catalog and channel identifier helpers.

The defaults describe a typical hotel / resort marketing mix.  Their
calibration values are starting points to be replaced with figures
from analytics, PMS, or call-center data.
"""

import re

from channel_mix.core.contracts import Channel
from channel_mix.core.exceptions import ChannelNotFoundError


_DEFAULTS: list[dict] = [
    dict(id="paid_search_nonbrand", name="Paid Search (Non-Brand)", base_return=4.0,
         saturation_spend=50000, max_spend=999999, max_percent=1.0, incrementality=0.9,
         adr_uplift=0.9, occ_uplift=1.0, awareness_score=0.6),
    dict(id="paid_search_brand", name="Paid Search (Brand)", base_return=7.0,
         saturation_spend=15000, max_spend=30000, max_percent=0.25, incrementality=0.4,
         adr_uplift=0.7, occ_uplift=0.7, awareness_score=0.2),
    dict(id="metasearch", name="Metasearch", base_return=6.0,
         saturation_spend=30000, max_spend=80000, min_percent=0.05, max_percent=0.35,
         incrementality=0.8, adr_uplift=0.8, occ_uplift=0.9, awareness_score=0.4),
    dict(id="paid_social", name="Paid Social", base_return=3.0,
         saturation_spend=40000, max_spend=120000, max_percent=0.5, incrementality=0.85,
         affected_by_content=True, adr_uplift=1.1, occ_uplift=1.0, awareness_score=1.2),
    dict(id="ott_ctv", name="OTT / CTV", base_return=2.5,
         saturation_spend=80000, max_spend=200000, max_percent=0.6, incrementality=0.6,
         affected_by_content=True, adr_uplift=1.0, occ_uplift=0.9, awareness_score=1.4),
    dict(id="programmatic", name="Programmatic Display/Video", base_return=2.2,
         saturation_spend=50000, max_spend=150000, max_percent=0.5, incrementality=0.7,
         affected_by_content=True, adr_uplift=1.0, occ_uplift=1.0, awareness_score=1.0),
    dict(id="influencers", name="Influencers / UGC", base_return=2.0,
         saturation_spend=25000, max_spend=60000, max_percent=0.25, incrementality=0.6,
         affected_by_content=True, adr_uplift=1.1, occ_uplift=0.9, awareness_score=1.3),
    dict(id="email_crm", name="Email / CRM", base_return=8.0,
         saturation_spend=10000, max_spend=40000, max_percent=0.2, incrementality=0.3,
         adr_uplift=0.9, occ_uplift=0.8, awareness_score=0.2),
    dict(id="content", name="Content Production (Assist)", base_return=0.8,
         saturation_spend=40000, max_spend=100000, max_percent=0.25, incrementality=0.2,
         adr_uplift=1.0, occ_uplift=1.0, awareness_score=1.2),
]

# Parameters for channels added ad hoc
NEW_CHANNEL_DEFAULTS = dict(
    base_return=2.0,
    saturation_spend=30000,
    min_spend=0.0,
    max_spend=100000,
    min_percent=0.0,
    max_percent=1.0,
    incrementality=0.7,
    affected_by_content=False,
    adr_uplift=1.0,
    occ_uplift=1.0,
    awareness_score=1.0,
    enabled=True,
)


def default_channels() -> list[Channel]:
    """Return a fresh copy of the default channel list."""
    return [Channel(**params) for params in _DEFAULTS]


def make_channel_id(name: str, existing_ids: set[str] | list[str] = ()) -> str:
    """
    Derive a stable identifier from a channel name.

    Lower-cases the name and collapses non-alphanumerics to ``_``.  On a
    collision a numeric suffix is appended (``_2``, ``_3``, ...), so the
    same inputs always yield the same id.

    Example:
        >>> make_channel_id("Paid Social", {"paid_social"})
        'paid_social_2'
    """
    existing = set(existing_ids)
    base = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_") or "channel"

    candidate = base
    n = 2
    while candidate in existing:
        candidate = f"{base}_{n}"
        n += 1
    return candidate


def new_channel(name: str, existing_ids: set[str] | list[str] = (), **overrides) -> Channel:
    """Create a channel with default calibration and a fresh unique id."""
    params = dict(NEW_CHANNEL_DEFAULTS)
    params.update(overrides)
    return Channel(id=make_channel_id(name, existing_ids), name=name, **params)


def get_channel(channels: list[Channel], channel_id: str) -> Channel:
    """Look up a channel by id."""
    for ch in channels:
        if ch.id == channel_id:
            return ch
    raise ChannelNotFoundError(channel_id)
