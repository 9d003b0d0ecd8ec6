"""RedisCache against a stand-in client."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from orderflow.cache.redis_cache import RedisCache
from orderflow.errors import CacheUnavailable


class StubRedis:
    """Just enough of the redis-py client surface for RedisCache."""

    def __init__(self):
        self.store = {}
        self.expiry = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiry[key] = ex

    def delete(self, *keys):
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    def scan_iter(self, match=None, count=None):
        prefix = match.rstrip("*")
        return [key for key in list(self.store) if key.startswith(prefix)]

    def ping(self):
        return True


class BrokenRedis:
    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise RedisConnectionError("connection refused")

        return _fail


class TestRedisCache:
    def test_set_passes_ttl_as_expiry(self):
        client = StubRedis()
        RedisCache(client).set("products::1", "{}", ttl=3600)
        assert client.expiry["products::1"] == 3600

    def test_get_and_delete(self):
        client = StubRedis()
        cache = RedisCache(client)
        cache.set("k", "v", ttl=10)
        assert cache.get("k") == "v"
        assert cache.delete("k") == 1
        assert cache.get("k") is None

    def test_delete_without_keys_is_a_no_op(self):
        assert RedisCache(BrokenRedis()).delete() == 0

    def test_delete_by_prefix_only_touches_matching_keys(self):
        client = StubRedis()
        cache = RedisCache(client)
        for key in ("productList::a", "productList::b", "products::1"):
            cache.set(key, "x", ttl=10)

        assert cache.delete_by_prefix("productList::") == 2
        assert list(client.store) == ["products::1"]

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.get("k"),
            lambda c: c.set("k", "v", ttl=1),
            lambda c: c.delete("k"),
            lambda c: c.delete_by_prefix("k"),
        ],
    )
    def test_redis_errors_become_cache_unavailable(self, call):
        with pytest.raises(CacheUnavailable):
            call(RedisCache(BrokenRedis()))

    def test_ping_reports_failure_instead_of_raising(self):
        assert RedisCache(BrokenRedis()).ping() is False
