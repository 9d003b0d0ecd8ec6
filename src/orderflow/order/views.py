"""Order read model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from orderflow.catalogue.shared.money import to_decimal


class OrderItemView(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderView(BaseModel):
    id: str
    order_number: str
    user_id: str
    customer_email: str | None = None
    status: str
    payment_method: str
    shipping_address: str | None = None
    notes: str | None = None
    total_amount: Decimal
    items: list[OrderItemView]
    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderView:
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            user_id=str(order.user_id),
            customer_email=order.customer_email,
            status=order.status,
            payment_method=order.payment_method,
            shipping_address=order.shipping_address,
            notes=order.notes,
            total_amount=to_decimal(order.total_amount),
            items=[
                OrderItemView(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=to_decimal(item.unit_price),
                    total_price=to_decimal(item.total_price),
                )
                for item in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
            confirmed_at=order.confirmed_at,
        )
