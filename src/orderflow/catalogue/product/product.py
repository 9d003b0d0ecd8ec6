"""Product aggregate: the catalogue's system of record for price and stock."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from orderflow.catalogue.product.events import (
    ProductActivated,
    ProductAdded,
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductRestocked,
    StockDecremented,
)
from orderflow.catalogue.shared.money import to_float
from orderflow.domain import orderflow
from orderflow.errors import InsufficientStock, ProductUnavailable


@orderflow.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    category_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_must_not_be_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, stock_quantity=0, description=None, category_id=None, is_active=True):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=to_float(price),
            stock_quantity=stock_quantity,
            is_active=is_active,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock_quantity=product.stock_quantity,
                category_id=str(category_id) if category_id else None,
                is_active=product.is_active,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def ensure_purchasable(self, quantity):
        """Raise unless ``quantity`` units can be sold right now."""
        if not self.is_active:
            raise ProductUnavailable(f"Product '{self.name}' is not available", product_id=str(self.id))
        if quantity > self.stock_quantity:
            raise InsufficientStock(
                f"Insufficient stock for '{self.name}': requested {quantity}, available {self.stock_quantity}",
                product_id=str(self.id),
                requested=quantity,
                available=self.stock_quantity,
            )

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def update_details(self, name=None, description=None, price=None, category_id=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = to_float(price)
        if category_id is not None:
            self.category_id = category_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                category_id=str(self.category_id) if self.category_id else None,
            )
        )

    def activate(self):
        if self.is_active:
            return
        self.is_active = True
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductActivated(product_id=str(self.id)))

    def deactivate(self):
        if not self.is_active:
            return
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=str(self.id)))

    def restock(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Restock quantity must be at least 1"]})
        self.stock_quantity += quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                quantity_added=quantity,
                stock_quantity=self.stock_quantity,
            )
        )

    def decrement_stock(self, quantity, order_id=None):
        """Commit ``quantity`` units to an order. Never drives stock below zero."""
        if quantity > self.stock_quantity:
            raise InsufficientStock(
                f"Insufficient stock for '{self.name}': requested {quantity}, available {self.stock_quantity}",
                product_id=str(self.id),
                requested=quantity,
                available=self.stock_quantity,
            )
        self.stock_quantity -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                stock_quantity=self.stock_quantity,
                order_id=str(order_id) if order_id else None,
            )
        )
