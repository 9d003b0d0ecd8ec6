"""Order notifications: florist and customer messages on order events.

Delivery is fire-and-forget: a failing notifier is logged and never
propagates back into the order workflow, which has already committed by the
time these handlers run.
"""

import structlog
from protean.utils.mixins import handle

from orderflow.domain import orderflow
from orderflow.notifications import get_notifier
from orderflow.notifications.messages import customer_message, florist_message, status_update_message
from orderflow.order.events import OrderConfirmed, OrderStatusChanged
from orderflow.order.order import Order
from orderflow.utils.settings import get_settings

logger = structlog.get_logger(__name__)


def florist_recipients() -> list[str]:
    settings = get_settings()
    recipients = [email for email in settings.florist_emails if email]
    if len(recipients) < len(settings.florist_emails):
        logger.warning("Skipping florist without an email address")
    return recipients or [settings.fallback_florist_email]


def _deliver(message) -> None:
    try:
        result = get_notifier().send(message)
    except Exception as exc:
        logger.error(
            "Notification delivery raised",
            type=message.type.value,
            order_number=message.order_number,
            error=str(exc),
        )
        return

    if result.get("status") != "sent":
        logger.error(
            "Notification delivery failed",
            type=message.type.value,
            order_number=message.order_number,
            error=result.get("error", "Unknown delivery error"),
        )


@orderflow.event_handler(part_of=Order)
class OrderNotificationHandler:
    @handle(OrderConfirmed)
    def on_order_confirmed(self, event: OrderConfirmed) -> None:
        if not get_settings().notifications_enabled:
            logger.debug("Notifications disabled, skipping", order_number=event.order_number)
            return

        try:
            for recipient in florist_recipients():
                _deliver(florist_message(event, recipient))

            if event.customer_email:
                _deliver(customer_message(event))
            else:
                logger.warning("Order has no customer email, skipping customer notice", order_number=event.order_number)
        except Exception as exc:
            logger.error("Could not build order notifications", order_number=event.order_number, error=str(exc))

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        if not get_settings().notifications_enabled:
            return
        if not event.customer_email:
            logger.warning("Order has no customer email, skipping status notice", order_number=event.order_number)
            return

        try:
            _deliver(status_update_message(event))
        except Exception as exc:
            logger.error("Could not build status notification", order_number=event.order_number, error=str(exc))
