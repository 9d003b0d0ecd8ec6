"""Catalogue application service.

Administrative writes run as commands; once the command's unit of work has
committed, the affected cache entries are evicted in the same call.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from orderflow.catalogue.catalog_cache import CatalogCache
from orderflow.catalogue.product.management import (
    AddProduct,
    DeleteProduct,
    RestockProduct,
    SetProductActive,
    UpdateProductDetails,
)
from orderflow.catalogue.product.views import ProductPage, ProductView
from orderflow.errors import ProductNotFound

logger = structlog.get_logger(__name__)


class CatalogueService:
    def __init__(self, cache: CatalogCache | None = None):
        self.cache = cache or CatalogCache()

    # Reads
    def get_product(self, product_id) -> ProductView:
        return self.cache.get_product(product_id)

    def list_active_products(self, page=0, size=10, sort_field="name", sort_direction="ASC") -> ProductPage:
        return self.cache.list_active_products(page, size, sort_field, sort_direction)

    def list_by_category(self, category_id) -> list[ProductView]:
        return self.cache.list_by_category(category_id)

    # Writes
    def add_product(self, name, price, stock_quantity=0, description=None, category_id=None, is_active=True) -> str:
        product_id = current_domain.process(
            AddProduct(
                name=name,
                description=description,
                price=float(price),
                stock_quantity=stock_quantity,
                category_id=category_id,
                is_active=is_active,
            ),
            asynchronous=False,
        )
        # New products land in listings; product key cannot exist yet
        self.cache.invalidate(product_id)
        logger.info("Product added", product_id=product_id, name=name)
        return product_id

    def update_product(self, product_id, name=None, description=None, price=None, category_id=None) -> None:
        self._run(
            UpdateProductDetails(
                product_id=product_id,
                name=name,
                description=description,
                price=float(price) if price is not None else None,
                category_id=category_id,
            ),
            product_id,
        )

    def set_product_active(self, product_id, is_active: bool) -> None:
        self._run(SetProductActive(product_id=product_id, is_active=is_active), product_id)

    def restock_product(self, product_id, quantity: int) -> None:
        self._run(RestockProduct(product_id=product_id, quantity=quantity), product_id)

    def delete_product(self, product_id) -> None:
        self._run(DeleteProduct(product_id=product_id), product_id)
        logger.info("Product deleted", product_id=str(product_id))

    def _run(self, command, product_id) -> None:
        try:
            current_domain.process(command, asynchronous=False)
        except ObjectNotFoundError:
            raise ProductNotFound(product_id=str(product_id)) from None
        self.cache.invalidate(product_id)
