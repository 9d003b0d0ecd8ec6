"""Cart read model. Totals are recomputed from the lines on every read."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from orderflow.catalogue.shared.money import line_total, to_decimal, total


class CartItemView(BaseModel):
    id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class CartView(BaseModel):
    id: str
    user_id: str
    items: list[CartItemView]
    total_items: int
    total_amount: Decimal

    @classmethod
    def from_cart(cls, cart) -> CartView:
        items = [
            CartItemView(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=to_decimal(item.unit_price),
                total_price=line_total(item.unit_price, item.quantity),
            )
            for item in cart.items
        ]
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            items=items,
            total_items=sum(i.quantity for i in items),
            total_amount=total(i.total_price for i in items),
        )
