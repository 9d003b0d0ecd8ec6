"""Cache-aside access to the product catalogue.

Reads check the cache first and fall back to the Product store, populating
the cache on the way out. Writers never update cached values in place; they
evict, and the next reader repopulates from the store.

Key layout:

    products::<product_id>
    productList::category_<category_id>
    productList::active_page_<page>_size_<size>_sort_<field>_<ASC|DESC>
    productList::active_page_<page>_size_<size>_sort_none

Every listing lives under ``productList::`` so a single prefix eviction
drops all pages and category listings, whatever their parameters.

The cache is optional. An unreachable backend turns every call into a store
round trip, and an entry that cannot be decoded is evicted and treated as a
miss.
"""

from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from orderflow.cache import get_cache
from orderflow.cache.port import CacheBackend
from orderflow.catalogue.product.product import Product
# Domain traversal stops one package deep; register the repository here
from orderflow.catalogue.product.repository import ProductRepository  # noqa: F401
from orderflow.catalogue.product.views import CategoryListing, ProductPage, ProductView
from orderflow.errors import CacheUnavailable, InvalidPageRequest, ProductNotFound
from orderflow.utils.settings import get_settings

logger = structlog.get_logger(__name__)

PRODUCT_PREFIX = "products::"
LISTING_PREFIX = "productList::"
GUARD_PREFIX = "productGuard::"
LISTING_GUARD_KEY = f"{GUARD_PREFIX}listings"

# Entries repopulated this soon after an eviction may hold a row read before
# the write committed; they are cached only for this long
RECENT_WRITE_TTL_SECONDS = 5

SORTABLE_FIELDS = frozenset({"name", "price", "stock_quantity", "created_at", "updated_at"})
MAX_PAGE_SIZE = 100


class SortDirection(Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value) -> "SortDirection":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidPageRequest(f"Unknown sort direction: {value}") from None


class CachedPage(BaseModel):
    """Serialized form of a listing page: the items plus the unpaged total."""

    items: list[ProductView]
    total: int


# ---------------------------------------------------------------------------
# Key builders
# ---------------------------------------------------------------------------
def product_key(product_id) -> str:
    return f"{PRODUCT_PREFIX}{product_id}"


def guard_key(product_id) -> str:
    return f"{GUARD_PREFIX}{product_id}"


def category_key(category_id) -> str:
    return f"{LISTING_PREFIX}category_{category_id}"


def active_page_key(page: int, size: int, sort_field: str | None, direction: SortDirection | None) -> str:
    base = f"{LISTING_PREFIX}active_page_{page}_size_{size}"
    if not sort_field:
        return f"{base}_sort_none"
    direction = direction or SortDirection.ASC
    return f"{base}_sort_{sort_field}_{direction.value}"


class CatalogCache:
    """Cache-aside reads and explicit invalidation for products."""

    def __init__(self, backend: CacheBackend | None = None, ttl: int | None = None):
        self._backend = backend
        self._ttl = ttl

    @property
    def backend(self) -> CacheBackend:
        return self._backend or get_cache()

    @property
    def ttl(self) -> int:
        return self._ttl or get_settings().catalog_cache_ttl_seconds

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_product(self, product_id) -> ProductView:
        key = product_key(product_id)
        cached = self._read(key, ProductView)
        if cached is not None:
            return cached

        try:
            product = current_domain.repository_for(Product).get(str(product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(product_id=str(product_id)) from None

        view = ProductView.from_product(product)
        self._write(key, view, guard_key(product_id))
        return view

    def list_active_products(
        self,
        page: int = 0,
        size: int = 10,
        sort_field: str | None = "name",
        sort_direction="ASC",
    ) -> ProductPage:
        direction = self._validate_page_request(page, size, sort_field, sort_direction)
        key = active_page_key(page, size, sort_field, direction)

        cached = self._read(key, CachedPage)
        if cached is not None:
            return ProductPage.build(cached.items, cached.total, page, size)

        order_by = None
        if sort_field:
            order_by = sort_field if direction == SortDirection.ASC else f"-{sort_field}"

        results = current_domain.repository_for(Product).find_active_page(
            offset=page * size,
            limit=size,
            order_by=order_by,
        )
        snapshot = CachedPage(
            items=[ProductView.from_product(p) for p in results.items],
            total=results.total,
        )
        self._write(key, snapshot, LISTING_GUARD_KEY)
        return ProductPage.build(snapshot.items, snapshot.total, page, size)

    def list_by_category(self, category_id) -> list[ProductView]:
        key = category_key(category_id)
        cached = self._read(key, CategoryListing)
        if cached is not None:
            return cached.items

        products = current_domain.repository_for(Product).find_active_by_category(str(category_id))
        views = [ProductView.from_product(p) for p in products]
        # An empty listing is not cached; the first product added shows up at once
        if views:
            self._write(key, CategoryListing(category_id=str(category_id), items=views), LISTING_GUARD_KEY)
        return views

    # -------------------------------------------------------------------
    # Invalidation
    # -------------------------------------------------------------------
    def invalidate(self, product_id) -> None:
        """Evict a product and every listing that might contain it."""
        self.invalidate_many([product_id])

    def invalidate_many(self, product_ids) -> None:
        keys = [product_key(pid) for pid in product_ids]
        try:
            # Mark before evicting so an in-flight reader cannot cache for the full TTL
            for pid in product_ids:
                self.backend.set(guard_key(pid), "1", RECENT_WRITE_TTL_SECONDS)
            self.backend.set(LISTING_GUARD_KEY, "1", RECENT_WRITE_TTL_SECONDS)
            if keys:
                self.backend.delete(*keys)
            removed = self.backend.delete_by_prefix(LISTING_PREFIX)
        except CacheUnavailable as exc:
            logger.warning("Cache invalidation skipped, backend unavailable", product_ids=keys, error=str(exc))
            return
        logger.debug("Invalidated product cache", product_keys=keys, listings_removed=removed)

    def invalidate_all(self) -> None:
        """Evict every product and listing entry."""
        try:
            self.backend.set(LISTING_GUARD_KEY, "1", RECENT_WRITE_TTL_SECONDS)
            self.backend.delete_by_prefix(PRODUCT_PREFIX)
            self.backend.delete_by_prefix(LISTING_PREFIX)
        except CacheUnavailable as exc:
            logger.warning("Full cache invalidation skipped, backend unavailable", error=str(exc))
            return
        logger.info("Invalidated entire product cache")

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @staticmethod
    def _validate_page_request(page, size, sort_field, sort_direction) -> SortDirection:
        if page < 0:
            raise InvalidPageRequest("Page index must not be negative", page=page)
        if size < 1 or size > MAX_PAGE_SIZE:
            raise InvalidPageRequest(f"Page size must be between 1 and {MAX_PAGE_SIZE}", size=size)
        if sort_field and sort_field not in SORTABLE_FIELDS:
            raise InvalidPageRequest(f"Cannot sort by '{sort_field}'", sort_field=sort_field)
        return SortDirection.parse(sort_direction)

    def _read(self, key: str, model: type[BaseModel]):
        try:
            raw = self.backend.get(key)
        except CacheUnavailable as exc:
            logger.warning("Cache read failed, falling back to store", cache_key=key, error=str(exc))
            return None

        if raw is None:
            logger.debug("Cache miss", cache_key=key)
            return None

        try:
            value = model.model_validate_json(raw)
        except (PydanticValidationError, ValueError, TypeError):
            logger.warning("Discarding undecodable cache entry", cache_key=key)
            self._evict(key)
            return None

        logger.debug("Cache hit", cache_key=key)
        return value

    def _write(self, key: str, value: BaseModel, guard: str) -> None:
        try:
            ttl = self.ttl
            if self.backend.get(guard) is not None:
                ttl = min(ttl, RECENT_WRITE_TTL_SECONDS)
            self.backend.set(key, value.model_dump_json(), ttl)
        except CacheUnavailable as exc:
            logger.warning("Cache write failed", cache_key=key, error=str(exc))

    def _evict(self, key: str) -> None:
        try:
            self.backend.delete(key)
        except CacheUnavailable:
            logger.warning("Could not evict cache entry", cache_key=key)
