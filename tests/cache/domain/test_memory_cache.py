"""Behaviour of the in-process cache backend."""

import pytest

from orderflow.cache.memory import MemoryCache
from orderflow.errors import CacheUnavailable


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def cache(clock):
    return MemoryCache(clock=clock)


class TestGetSet:
    def test_missing_key_returns_none(self, cache):
        assert cache.get("nope") is None

    def test_set_then_get(self, cache):
        cache.set("k", "v", ttl=60)
        assert cache.get("k") == "v"

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.set("k", "v", ttl=60)
        clock.advance(59)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None


class TestDelete:
    def test_delete_counts_removed_keys(self, cache):
        cache.set("a", "1", ttl=60)
        cache.set("b", "2", ttl=60)
        assert cache.delete("a", "b", "c") == 2
        assert cache.keys() == []

    def test_delete_by_prefix(self, cache):
        cache.set("productList::active_page_0", "x", ttl=60)
        cache.set("productList::category_1", "y", ttl=60)
        cache.set("products::1", "z", ttl=60)

        assert cache.delete_by_prefix("productList::") == 2
        assert cache.keys() == ["products::1"]


class TestAvailability:
    def test_unavailable_cache_raises(self, cache):
        cache.configure(available=False)
        with pytest.raises(CacheUnavailable):
            cache.get("k")
        with pytest.raises(CacheUnavailable):
            cache.set("k", "v", ttl=1)
        with pytest.raises(CacheUnavailable):
            cache.delete_by_prefix("k")

    def test_reset_restores_availability_and_clears(self, cache):
        cache.set("k", "v", ttl=60)
        cache.configure(available=False)
        cache.reset()
        assert cache.available is True
        assert cache.get("k") is None
