"""Cart aggregate: one mutable cart per user, holding at most one line per product.

The cart does not own stock. Callers pass in the stock figure they read for
the product and the aggregate enforces the quantity rules against it:

- adding checks the *cumulative* quantity (existing line + new units),
- updating checks the new absolute quantity,
- merging into an existing line keeps the unit price captured on first add.

``total_amount`` is derived from the lines and recomputed after every change.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from orderflow.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
)
from orderflow.catalogue.shared.money import line_total, to_float, total
from orderflow.domain import orderflow
from orderflow.errors import CartItemNotFound, InsufficientStock, InvalidQuantity


@orderflow.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(default=0.0)
    added_at = DateTime()

    def reprice(self):
        self.total_price = to_float(line_total(self.unit_price, self.quantity))


@orderflow.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(user_id=user_id, total_amount=0.0, created_at=now, updated_at=now)
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id)))
        return cart

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def find_item(self, item_id) -> CartItem:
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise CartItemNotFound(item_id=str(item_id))
        return item

    def item_for_product(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, unit_price, available_stock, product_name=None) -> CartItem:
        """Add ``quantity`` units of a product, merging into an existing line."""
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity=quantity)

        existing = self.item_for_product(product_id)
        desired = quantity + (existing.quantity if existing else 0)
        if desired > available_stock:
            raise InsufficientStock(
                f"Insufficient stock: requested {desired}, available {available_stock}",
                product_id=str(product_id),
                requested=desired,
                available=available_stock,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = desired
            existing.reprice()
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                product_name=product_name,
                quantity=quantity,
                unit_price=to_float(unit_price),
                added_at=now,
            )
            item.reprice()
            self.add_items(item)

        self.recalculate_total()
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=desired,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity, available_stock):
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity=quantity)

        item = self.find_item(item_id)
        if quantity > available_stock:
            raise InsufficientStock(
                f"Insufficient stock: requested {quantity}, available {available_stock}",
                product_id=str(item.product_id),
                requested=quantity,
                available=available_stock,
            )

        previous_quantity = item.quantity
        item.quantity = quantity
        item.reprice()
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)
        self.total_amount = 0.0
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=len(removed)))

    def recalculate_total(self):
        self.total_amount = to_float(total(line_total(i.unit_price, i.quantity) for i in self.items))
