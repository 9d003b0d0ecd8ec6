"""Cache backend port (abstract interface).

Values are opaque strings; serialization is the caller's business. Any
backend failure surfaces as ``CacheUnavailable`` so callers can degrade to
the system of record without knowing which backend is in play.
"""

from abc import ABC, abstractmethod


class CacheBackend(ABC):
    """Abstract key/value cache with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""
        ...

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        ...

    @abstractmethod
    def delete(self, *keys: str) -> int:
        """Remove the given keys. Missing keys are ignored.

        Returns:
            Number of keys actually removed.
        """
        ...

    @abstractmethod
    def delete_by_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``.

        Returns:
            Number of keys actually removed.
        """
        ...
