"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from orderflow.cart.service import CartService
from orderflow.catalogue.product.product import Product
from orderflow.order.service import OrderService


@pytest.fixture()
def error():
    """Container for captured business errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


@pytest.fixture()
def checkout():
    """The order under test."""
    return {"order": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price} with {stock:d} in stock'))
def product_in_catalogue(products, memory_cache, notifier, make_product, name, price, stock):
    products[name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.cfparse('the customer has {qty:d} of "{name}" in the cart'))
def customer_has_line(products, customer, name, qty):
    CartService().add_item(customer, products[name], qty)


@given(parsers.cfparse('the customer placed a "{method}" order'))
def customer_placed_order(checkout, customer, method):
    checkout["order"] = OrderService().create_order(customer, payment_method=method)


@given("the customer confirmed the order")
def customer_confirmed_order(checkout, customer):
    checkout["order"] = OrderService().confirm_cod_order(customer, checkout["order"].id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected with "{error_name}"'))
def request_rejected(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock_quantity == stock
