"""Notifier that writes messages to the structured log.

Stands in for a mail or message-bus transport in environments that have none.
"""

from uuid import uuid4

import structlog

from orderflow.notifications.port import NotificationMessage, Notifier

logger = structlog.get_logger(__name__)


class LogNotifier(Notifier):
    def send(self, message: NotificationMessage) -> dict:
        message_id = f"log-{uuid4().hex[:12]}"
        logger.info(
            "Notification sent",
            message_id=message_id,
            type=message.type.value,
            recipient=message.recipient,
            subject=message.subject,
            order_number=message.order_number,
            status=message.status,
        )
        return {"message_id": message_id, "status": "sent"}
