"""Order aggregate: an immutable snapshot of a cart, plus a status lifecycle.

State Machine:
    PENDING → CONFIRMED → SHIPPED → DELIVERED
    PENDING | CONFIRMED → CANCELLED

Lines, prices and the total are fixed when the order is placed. Only the
status (and its timestamps) changes afterwards. ``PENDING → CONFIRMED`` is
reserved for cash-on-delivery confirmation, which is where stock is
committed; generic status changes cannot take that edge.
"""

import json
import time
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from orderflow.catalogue.shared.money import line_total, to_decimal, to_float, total
from orderflow.domain import orderflow
from orderflow.errors import InvalidPaymentMethod, InvalidStatusTransition, OrderAlreadyConfirmed
from orderflow.order.events import OrderConfirmed, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentMethod(Enum):
    COD = "COD"
    BANK_TRANSFER = "BANK_TRANSFER"
    CREDIT_CARD = "CREDIT_CARD"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def generate_order_number(clock=time.time) -> str:
    """``ORD-<epoch millis>-<8 upper-case hex chars>``"""
    millis = int(clock() * 1000)
    return f"ORD-{millis}-{uuid4().hex[:8].upper()}"


@orderflow.entity(part_of="Order")
class OrderItem:
    """Point-in-time copy of a cart line. Never changes after placement."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


@orderflow.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    user_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=255)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(choices=PaymentMethod, required=True)
    shipping_address = Text()
    notes = Text()
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()
    confirmed_at = DateTime()

    @invariant.post
    def total_must_match_lines(self):
        if not self.items:
            return
        lines = total(item.total_price for item in self.items)
        if lines != to_decimal(self.total_amount):
            raise ValidationError({"total_amount": ["Order total must equal the sum of its lines"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        user_id,
        lines,
        payment_method,
        customer_email=None,
        customer_name=None,
        shipping_address=None,
        notes=None,
    ):
        """Create a PENDING order.

        Args:
            lines: List of dicts with product_id, product_name, quantity, unit_price.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one line"]})

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            user_id=user_id,
            customer_email=customer_email,
            customer_name=customer_name,
            status=OrderStatus.PENDING.value,
            payment_method=PaymentMethod(payment_method).value,
            shipping_address=shipping_address,
            notes=notes,
            total_amount=0.0,
            created_at=now,
            updated_at=now,
        )
        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderItem(
                        product_id=line["product_id"],
                        product_name=line["product_name"],
                        quantity=line["quantity"],
                        unit_price=to_float(line["unit_price"]),
                        total_price=to_float(line_total(line["unit_price"], line["quantity"])),
                    )
                )
            order.total_amount = to_float(total(item.total_price for item in order.items))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=str(user_id),
                total_amount=order.total_amount,
                payment_method=order.payment_method,
                items=order.items_json(),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def items_json(self) -> str:
        return json.dumps(
            [
                {
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": str(to_decimal(item.unit_price)),
                    "total_price": str(to_decimal(item.total_price)),
                }
                for item in self.items
            ]
        )

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStatusTransition(
                f"Cannot transition from {current.value} to {target_status.value}",
                order_id=str(self.id),
            )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def confirm_cod(self):
        """Confirm a cash-on-delivery order. Stock is committed by the caller."""
        if PaymentMethod(self.payment_method) != PaymentMethod.COD:
            raise InvalidPaymentMethod(order_id=str(self.id), payment_method=self.payment_method)
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise OrderAlreadyConfirmed(order_id=str(self.id), status=self.status)

        now = datetime.now(UTC)
        self.status = OrderStatus.CONFIRMED.value
        self.confirmed_at = now
        self.updated_at = now

        self.raise_(
            OrderConfirmed(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                customer_email=self.customer_email,
                customer_name=self.customer_name,
                status=self.status,
                total_amount=self.total_amount,
                shipping_address=self.shipping_address,
                payment_method=self.payment_method,
                notes=self.notes,
                items=self.items_json(),
                ordered_at=self.created_at,
                confirmed_at=now,
            )
        )

    def change_status(self, new_status):
        """Move the order along the state machine, outside COD confirmation."""
        target = OrderStatus(new_status)
        if target == OrderStatus.CONFIRMED:
            raise InvalidStatusTransition(
                "Orders are confirmed through cash-on-delivery confirmation",
                order_id=str(self.id),
            )
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                customer_email=self.customer_email,
                customer_name=self.customer_name,
                previous_status=previous,
                status=self.status,
                total_amount=self.total_amount,
                changed_at=now,
            )
        )
