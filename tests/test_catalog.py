"""Tests for the default channel catalog and id helpers."""

import pytest

from channel_mix.core.catalog import (
    default_channels,
    get_channel,
    make_channel_id,
    new_channel,
)
from channel_mix.core.exceptions import ChannelNotFoundError


class TestDefaultChannels:
    def test_catalog(self):
        channels = default_channels()
        ids = [ch.id for ch in channels]

        assert len(channels) == 9
        assert len(set(ids)) == len(ids)
        assert "content" in ids
        assert all(ch.enabled for ch in channels)

    def test_content_affected_channels(self):
        affected = {ch.id for ch in default_channels() if ch.affected_by_content}
        assert affected == {"paid_social", "ott_ctv", "programmatic", "influencers"}

    def test_returns_fresh_list(self):
        first = default_channels()
        first.pop()
        assert len(default_channels()) == 9


class TestChannelIds:
    def test_slug(self):
        assert make_channel_id("Paid Social (EU)") == "paid_social_eu"

    def test_collision_suffix(self):
        assert make_channel_id("Paid Social", {"paid_social"}) == "paid_social_2"
        assert make_channel_id("Paid Social", ["paid_social", "paid_social_2"]) == "paid_social_3"

    def test_deterministic(self):
        existing = {"tv"}
        assert make_channel_id("TV", existing) == make_channel_id("TV", existing)

    def test_empty_name(self):
        assert make_channel_id("!!!") == "channel"

    def test_new_channel(self):
        ch = new_channel("Podcasts", {"podcasts"}, base_return=1.5)

        assert ch.id == "podcasts_2"
        assert ch.name == "Podcasts"
        assert ch.base_return == 1.5
        assert ch.max_spend == 100000
        assert ch.incrementality == pytest.approx(0.7)

    def test_get_channel(self):
        channels = default_channels()
        assert get_channel(channels, "metasearch").name == "Metasearch"

        with pytest.raises(ChannelNotFoundError) as exc:
            get_channel(channels, "radio")
        assert exc.value.code == "CHANNEL_NOT_FOUND"
