"""Unit tests for the bounded TTL cache."""

import pytest

from variant_map.lib.geocoder.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """Tests for TTLCache."""

    def test_get_missing_returns_none(self) -> None:
        cache: TTLCache[int] = TTLCache(ttl_seconds=10, max_entries=5)
        assert cache.get("nope") is None

    def test_set_then_get(self) -> None:
        cache: TTLCache[list[str]] = TTLCache(ttl_seconds=10, max_entries=5)
        cache.set("q", ["a"])
        assert cache.get("q") == ["a"]
        assert len(cache) == 1

    def test_entry_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache: TTLCache[int] = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.set("q", 1)
        clock.now = 9.9
        assert cache.get("q") == 1
        clock.now = 10.0
        assert cache.get("q") is None
        assert len(cache) == 0

    def test_set_refreshes_timestamp(self) -> None:
        clock = FakeClock()
        cache: TTLCache[int] = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.set("q", 1)
        clock.now = 8
        cache.set("q", 2)
        clock.now = 15
        assert cache.get("q") == 2

    def test_evicts_least_recently_used(self) -> None:
        cache: TTLCache[int] = TTLCache(ttl_seconds=100, max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.get("a") == 1
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3
        assert len(cache) == 2

    def test_empty_list_is_cached(self) -> None:
        cache: TTLCache[list[str]] = TTLCache(ttl_seconds=10, max_entries=5)
        cache.set("q", [])
        assert cache.get("q") == []

    def test_invalidate_clears(self) -> None:
        cache: TTLCache[int] = TTLCache(ttl_seconds=10, max_entries=5)
        cache.set("a", 1)
        cache.invalidate()
        assert len(cache) == 0

    @pytest.mark.parametrize(("ttl", "max_entries"), [(0, 5), (-1, 5), (10, 0)])
    def test_rejects_non_positive_bounds(self, ttl: float, max_entries: int) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            TTLCache(ttl_seconds=ttl, max_entries=max_entries)
