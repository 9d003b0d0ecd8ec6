"""Application tests for placing orders from the cart."""

from decimal import Decimal

import pytest
from protean import current_domain

from orderflow.cart.service import CartService
from orderflow.catalogue.product.product import Product
from orderflow.catalogue.service import CatalogueService
from orderflow.errors import EmptyCart, InsufficientStock, ProductNotFound, ProductUnavailable
from orderflow.order.order import Order
from orderflow.order.service import OrderService


class TestCreateOrder:
    def test_order_is_pending_with_cart_lines(self, customer, make_product, place_order):
        rose = make_product(name="Rose", price="5.00", stock_quantity=10)
        lily = make_product(name="Lily", price="7.50", stock_quantity=10)

        order = place_order(customer, (rose, 2), (lily, 1), shipping_address="1 Petal Row", notes="Leave at door")

        assert order.status == "PENDING"
        assert order.payment_method == "COD"
        assert order.user_id == customer.id
        assert order.customer_email == customer.email
        assert order.shipping_address == "1 Petal Row"
        assert order.notes == "Leave at door"
        assert order.total_amount == Decimal("17.50")
        assert sorted((i.product_name, i.quantity) for i in order.items) == [("Lily", 1), ("Rose", 2)]
        assert order.order_number.startswith("ORD-")

    def test_cart_is_cleared(self, customer, make_product, place_order):
        place_order(customer, (make_product(), 1))
        assert CartService().get_or_create_cart(customer).items == []

    def test_stock_is_not_touched(self, customer, make_product, place_order):
        product_id = make_product(stock_quantity=10)
        place_order(customer, (product_id, 4))
        assert current_domain.repository_for(Product).get(product_id).stock_quantity == 10

    def test_empty_cart(self, customer):
        CartService().get_or_create_cart(customer)
        with pytest.raises(EmptyCart):
            OrderService().create_order(customer)

    def test_no_cart_at_all(self, customer):
        with pytest.raises(EmptyCart):
            OrderService().create_order(customer)

    def test_product_deactivated_after_adding(self, customer, make_product):
        product_id = make_product()
        CartService().add_item(customer, product_id, 1)
        CatalogueService().set_product_active(product_id, False)

        with pytest.raises(ProductUnavailable):
            OrderService().create_order(customer)

        assert len(CartService().get_or_create_cart(customer).items) == 1
        assert current_domain.repository_for(Order).find_by_user(customer.id) == []

    def test_product_deleted_after_adding(self, customer, make_product):
        product_id = make_product()
        CartService().add_item(customer, product_id, 1)
        CatalogueService().delete_product(product_id)

        with pytest.raises(ProductNotFound):
            OrderService().create_order(customer)

    def test_stock_is_checked_against_the_store(self, customer, other_customer, make_product, place_order):
        product_id = make_product(stock_quantity=5)
        CartService().add_item(customer, product_id, 3)

        rival = place_order(other_customer, (product_id, 3))
        OrderService().confirm_cod_order(other_customer, rival.id)

        with pytest.raises(InsufficientStock):
            OrderService().create_order(customer)

    def test_order_keeps_cart_price_after_price_change(self, memory_cache, customer, make_product, place_order):
        product_id = make_product(price="10.00")
        CartService().add_item(customer, product_id, 2)
        CatalogueService().update_product(product_id, price="14.00")

        order = OrderService().create_order(customer)

        assert order.items[0].unit_price == Decimal("10.00")
        assert order.total_amount == Decimal("20.00")

    def test_order_snapshot_survives_later_price_change(self, customer, make_product, place_order):
        product_id = make_product(price="10.00")
        order = place_order(customer, (product_id, 1))

        CatalogueService().update_product(product_id, name="Renamed", price="99.00")

        reloaded = OrderService().get_order(customer, order.id)
        assert reloaded.items[0].product_name == "Red Rose Bouquet"
        assert reloaded.items[0].unit_price == Decimal("10.00")

    def test_order_numbers_are_unique(self, customer, make_product, place_order):
        product_id = make_product(stock_quantity=50)
        numbers = {place_order(customer, (product_id, 1)).order_number for _ in range(5)}
        assert len(numbers) == 5
