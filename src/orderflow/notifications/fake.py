"""Fake notifier that records messages for testing."""

from uuid import uuid4

from orderflow.notifications.port import MessageType, NotificationMessage, Notifier


class FakeNotifier(Notifier):
    """Notifier that keeps messages in memory for test assertions."""

    def __init__(self):
        self.sent: list[NotificationMessage] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, message: NotificationMessage) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        self.sent.append(message)
        return {"message_id": f"note-{uuid4().hex[:12]}", "status": "sent"}

    def sent_of_type(self, message_type: MessageType) -> list[NotificationMessage]:
        return [m for m in self.sent if m.type == message_type]

    def reset(self):
        """Clear recorded messages (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
