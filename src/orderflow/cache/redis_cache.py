"""Redis cache backend."""

import redis
import structlog
from redis.exceptions import RedisError

from orderflow.cache.port import CacheBackend
from orderflow.errors import CacheUnavailable

logger = structlog.get_logger(__name__)

_SCAN_BATCH = 500


class RedisCache(CacheBackend):
    """Cache backend on top of a Redis server.

    Connection and protocol errors are translated into ``CacheUnavailable``.
    """

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 0.5) -> "RedisCache":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except RedisError as exc:
            raise CacheUnavailable(str(exc), key=key) from exc

    def set(self, key: str, value: str, ttl: int) -> None:
        try:
            self._client.set(key, value, ex=ttl)
        except RedisError as exc:
            raise CacheUnavailable(str(exc), key=key) from exc

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return self._client.delete(*keys)
        except RedisError as exc:
            raise CacheUnavailable(str(exc)) from exc

    def delete_by_prefix(self, prefix: str) -> int:
        removed = 0
        try:
            batch = []
            for key in self._client.scan_iter(match=f"{prefix}*", count=_SCAN_BATCH):
                batch.append(key)
                if len(batch) >= _SCAN_BATCH:
                    removed += self._client.delete(*batch)
                    batch = []
            if batch:
                removed += self._client.delete(*batch)
        except RedisError as exc:
            raise CacheUnavailable(str(exc), prefix=prefix) from exc

        logger.debug("Evicted cache keys by prefix", prefix=prefix, removed=removed)
        return removed

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError:
            return False
