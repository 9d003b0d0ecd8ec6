"""Build notification messages from order events."""

import json

from orderflow.notifications.port import MessageType, NotificationLine, NotificationMessage


def _lines(items_json) -> tuple[NotificationLine, ...]:
    if not items_json:
        return ()
    items = json.loads(items_json) if isinstance(items_json, str) else items_json
    return tuple(
        NotificationLine(
            product_name=item["product_name"],
            quantity=item["quantity"],
            unit_price=str(item["unit_price"]),
            total_price=str(item["total_price"]),
        )
        for item in items
    )


def _money(amount) -> str:
    return f"{float(amount):.2f}"


def _summary(lines: tuple[NotificationLine, ...]) -> str:
    return "\n".join(f"- {line.product_name} x{line.quantity} @ {line.unit_price} = {line.total_price}" for line in lines)


def florist_message(event, recipient: str) -> NotificationMessage:
    lines = _lines(event.items)
    body = (
        f"Order {event.order_number} was confirmed and is ready to prepare.\n"
        f"Customer: {event.customer_name or event.customer_email or event.user_id}\n"
        f"Ship to: {event.shipping_address or 'not provided'}\n"
        f"Payment: {event.payment_method}\n"
        f"Total: {_money(event.total_amount)}\n"
        f"{_summary(lines)}"
    )
    if event.notes:
        body += f"\nNotes: {event.notes}"

    return NotificationMessage(
        type=MessageType.FLORIST,
        recipient=recipient,
        subject=f"New Order Confirmed - {event.order_number}",
        body=body,
        order_id=str(event.order_id),
        order_number=event.order_number,
        status=event.status,
        total_amount=_money(event.total_amount),
        customer_email=event.customer_email,
        customer_name=event.customer_name,
        shipping_address=event.shipping_address,
        payment_method=event.payment_method,
        notes=event.notes,
        ordered_at=event.ordered_at.isoformat() if event.ordered_at else None,
        items=lines,
    )


def customer_message(event) -> NotificationMessage:
    lines = _lines(event.items)
    body = (
        f"Hello {event.customer_name or 'there'},\n"
        f"your order {event.order_number} is confirmed. "
        f"Please have {_money(event.total_amount)} ready on delivery.\n"
        f"{_summary(lines)}"
    )
    return NotificationMessage(
        type=MessageType.CUSTOMER,
        recipient=event.customer_email,
        subject=f"Order Confirmed - {event.order_number}",
        body=body,
        order_id=str(event.order_id),
        order_number=event.order_number,
        status=event.status,
        total_amount=_money(event.total_amount),
        customer_email=event.customer_email,
        customer_name=event.customer_name,
        shipping_address=event.shipping_address,
        payment_method=event.payment_method,
        notes=event.notes,
        ordered_at=event.ordered_at.isoformat() if event.ordered_at else None,
        items=lines,
    )


def status_update_message(event) -> NotificationMessage:
    return NotificationMessage(
        type=MessageType.STATUS_UPDATE,
        recipient=event.customer_email,
        subject=f"Order Status Update - {event.order_number}",
        body=f"Your order {event.order_number} is now {event.status} (was {event.previous_status}).",
        order_id=str(event.order_id),
        order_number=event.order_number,
        status=event.status,
        total_amount=_money(event.total_amount),
        customer_email=event.customer_email,
        customer_name=event.customer_name,
    )
