"""In-process cache backend for development and testing."""

import threading
import time

from orderflow.cache.port import CacheBackend
from orderflow.errors import CacheUnavailable


class MemoryCache(CacheBackend):
    """Dictionary-backed cache honouring TTLs.

    ``configure(available=False)`` makes every call raise ``CacheUnavailable``,
    which lets tests exercise the degraded path without a real outage.
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()
        self.available = True

    def configure(self, available: bool = True):
        """Configure the backend behavior for testing."""
        self.available = available

    def _check_available(self):
        if not self.available:
            raise CacheUnavailable("In-memory cache is switched off")

    def get(self, key: str) -> str | None:
        self._check_available()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> None:
        self._check_available()
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def delete(self, *keys: str) -> int:
        self._check_available()
        with self._lock:
            return sum(1 for key in keys if self._entries.pop(key, None) is not None)

    def delete_by_prefix(self, prefix: str) -> int:
        self._check_available()
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def keys(self) -> list[str]:
        """Live keys, for test assertions."""
        with self._lock:
            now = self._clock()
            return sorted(key for key, (_, expires_at) in self._entries.items() if expires_at > now)

    def reset(self):
        """Clear all entries and restore availability (useful between tests)."""
        with self._lock:
            self._entries.clear()
        self.available = True
