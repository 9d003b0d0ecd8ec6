"""Cache key layout for catalogue entries."""

import pytest

from orderflow.catalogue.catalog_cache import (
    LISTING_PREFIX,
    PRODUCT_PREFIX,
    SortDirection,
    active_page_key,
    category_key,
    product_key,
)
from orderflow.errors import InvalidPageRequest


class TestKeyBuilders:
    def test_product_key(self):
        assert product_key("p-1") == "products::p-1"

    def test_category_key(self):
        assert category_key("c-9") == "productList::category_c-9"

    def test_active_page_key_with_sort(self):
        key = active_page_key(2, 20, "price", SortDirection.DESC)
        assert key == "productList::active_page_2_size_20_sort_price_DESC"

    def test_active_page_key_unsorted(self):
        assert active_page_key(0, 10, None, None) == "productList::active_page_0_size_10_sort_none"

    def test_same_parameters_give_same_key(self):
        assert active_page_key(1, 10, "name", SortDirection.ASC) == active_page_key(1, 10, "name", SortDirection.ASC)

    @pytest.mark.parametrize(
        "other",
        [
            (2, 10, "name", SortDirection.ASC),
            (1, 20, "name", SortDirection.ASC),
            (1, 10, "price", SortDirection.ASC),
            (1, 10, "name", SortDirection.DESC),
        ],
    )
    def test_any_parameter_change_gives_a_different_key(self, other):
        assert active_page_key(1, 10, "name", SortDirection.ASC) != active_page_key(*other)

    def test_all_listing_keys_share_the_listing_prefix(self):
        assert category_key("c").startswith(LISTING_PREFIX)
        assert active_page_key(0, 10, "name", SortDirection.ASC).startswith(LISTING_PREFIX)
        assert not product_key("p").startswith(LISTING_PREFIX)
        assert product_key("p").startswith(PRODUCT_PREFIX)


class TestSortDirection:
    @pytest.mark.parametrize("raw", ["asc", "ASC", "Asc"])
    def test_parse_is_case_insensitive(self, raw):
        assert SortDirection.parse(raw) == SortDirection.ASC

    def test_parse_rejects_unknown_values(self):
        with pytest.raises(InvalidPageRequest):
            SortDirection.parse("sideways")
