"""Notifier port: abstract interface for order notifications."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class MessageType(Enum):
    FLORIST = "FLORIST"
    CUSTOMER = "CUSTOMER"
    STATUS_UPDATE = "STATUS_UPDATE"


@dataclass(frozen=True)
class NotificationLine:
    product_name: str
    quantity: int
    unit_price: str
    total_price: str


@dataclass(frozen=True)
class NotificationMessage:
    """Everything a recipient needs to know about an order event."""

    type: MessageType
    recipient: str
    subject: str
    body: str
    order_id: str
    order_number: str
    status: str
    total_amount: str
    customer_email: str | None = None
    customer_name: str | None = None
    shipping_address: str | None = None
    payment_method: str | None = None
    notes: str | None = None
    ordered_at: str | None = None
    items: tuple[NotificationLine, ...] = field(default_factory=tuple)


class Notifier(ABC):
    """Abstract interface for notification adapters."""

    @abstractmethod
    def send(self, message: NotificationMessage) -> dict:
        """Deliver a message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
