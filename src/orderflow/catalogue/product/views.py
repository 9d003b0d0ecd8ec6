"""Read models served from the catalogue cache."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from orderflow.catalogue.shared.money import to_decimal


class ProductView(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    is_active: bool
    category_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductView:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=to_decimal(product.price),
            stock_quantity=product.stock_quantity,
            is_active=product.is_active,
            category_id=str(product.category_id) if product.category_id else None,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPage(BaseModel):
    """One page of active products plus the metadata to navigate the rest."""

    items: list[ProductView]
    total: int
    page: int
    size: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def build(cls, items: list[ProductView], total: int, page: int, size: int) -> ProductPage:
        total_pages = math.ceil(total / size) if size else 0
        return cls(
            items=items,
            total=total,
            page=page,
            size=size,
            total_pages=total_pages,
            first=page == 0,
            last=page >= total_pages - 1,
        )


class CategoryListing(BaseModel):
    category_id: str
    items: list[ProductView]
