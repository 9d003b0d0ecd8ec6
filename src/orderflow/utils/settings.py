"""Application settings read from the environment.

Protean reads its own configuration (databases, brokers, event store) from
``domain.toml``. The knobs below belong to OrderFlow itself: which cache
backend serves the catalogue, how long entries live, how many times a
contended cart mutation is retried, and where order notifications go.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/1"
    catalog_cache_ttl_seconds: int = 3600
    cart_conflict_retries: int = 3
    order_conflict_retries: int = 3
    notifications_enabled: bool = True
    notifier: str = "log"
    florist_emails: tuple[str, ...] = field(default_factory=tuple)
    fallback_florist_email: str = "florist@orderflow.local"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            cache_backend=os.getenv("CACHE_BACKEND", "memory").lower(),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/1"),
            catalog_cache_ttl_seconds=int(os.getenv("CATALOG_CACHE_TTL_SECONDS", "3600")),
            cart_conflict_retries=int(os.getenv("CART_CONFLICT_RETRIES", "3")),
            order_conflict_retries=int(os.getenv("ORDER_CONFLICT_RETRIES", "3")),
            notifications_enabled=_env_bool("NOTIFICATIONS_ENABLED", True),
            notifier=os.getenv("NOTIFIER", "log").lower(),
            florist_emails=_env_list("FLORIST_EMAILS"),
            fallback_florist_email=os.getenv("FALLBACK_FLORIST_EMAIL", "florist@orderflow.local"),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them from the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Settings) -> None:
    """Override the active settings (useful for tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None
