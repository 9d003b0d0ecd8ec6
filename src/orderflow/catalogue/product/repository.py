"""Repository for the Product aggregate."""

from orderflow.catalogue.product.product import Product
from orderflow.domain import orderflow

# Upper bound on a single category listing; category pages are not paginated
CATEGORY_LISTING_LIMIT = 500


@orderflow.repository(part_of=Product)
class ProductRepository:
    """Product queries used by the catalogue cache and the order workflow."""

    def find_active_page(self, offset: int, limit: int, order_by: str | None = None):
        """Return one page of active products.

        Returns:
            A ResultSet whose ``items`` hold the page and ``total`` the number
            of active products across all pages.
        """
        query = self._dao.query.filter(is_active=True)
        if order_by:
            query = query.order_by(order_by)
        return query.offset(offset).limit(limit).all()

    def find_active_by_category(self, category_id: str) -> list[Product]:
        return (
            self._dao.query.filter(category_id=category_id, is_active=True)
            .order_by("name")
            .limit(CATEGORY_LISTING_LIMIT)
            .all()
            .items
        )

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
