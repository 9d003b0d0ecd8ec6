"""Domain events for the Order aggregate.

``OrderConfirmed`` and ``OrderStatusChanged`` carry everything a
notification needs, so handlers never reload the order.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from orderflow.domain import orderflow


@orderflow.event(part_of="Order")
class OrderPlaced:
    """A cart was turned into a pending order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    items = Text(required=True)  # JSON: list of line dicts
    placed_at = DateTime(required=True)


@orderflow.event(part_of="Order")
class OrderConfirmed:
    """A cash-on-delivery order was confirmed and its stock committed."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    customer_email = String()
    customer_name = String()
    status = String(required=True)
    total_amount = Float(required=True)
    shipping_address = Text()
    payment_method = String(required=True)
    notes = Text()
    items = Text(required=True)  # JSON: list of line dicts
    ordered_at = DateTime()
    confirmed_at = DateTime(required=True)


@orderflow.event(part_of="Order")
class OrderStatusChanged:
    """A florist moved an order along its lifecycle."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    customer_email = String()
    customer_name = String()
    previous_status = String(required=True)
    status = String(required=True)
    total_amount = Float(required=True)
    changed_at = DateTime(required=True)
