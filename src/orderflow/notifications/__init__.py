"""Notifier factory.

Provides get_notifier() / set_notifier() to swap implementations:
- LogNotifier by default
- FakeNotifier for testing (NOTIFIER=fake)
"""

from orderflow.notifications.port import Notifier
from orderflow.utils.settings import get_settings

_current_notifier: Notifier | None = None


def _build_notifier() -> Notifier:
    kind = get_settings().notifier
    if kind == "fake":
        from orderflow.notifications.fake import FakeNotifier

        return FakeNotifier()
    if kind == "log":
        from orderflow.notifications.log_notifier import LogNotifier

        return LogNotifier()
    raise ValueError(f"Unknown notifier: {kind}")


def get_notifier() -> Notifier:
    """Return the current notifier. Built from settings on first use."""
    global _current_notifier
    if _current_notifier is None:
        _current_notifier = _build_notifier()
    return _current_notifier


def set_notifier(notifier: Notifier) -> None:
    """Override the active notifier (useful for tests)."""
    global _current_notifier
    _current_notifier = notifier


def reset_notifier() -> None:
    """Reset to the default notifier."""
    global _current_notifier
    _current_notifier = None
