"""Shared BDD fixtures and step definitions for the cart."""

from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, then

from orderflow.cart.service import CartService
from orderflow.catalogue.service import CatalogueService


@pytest.fixture()
def error():
    """Container for captured business errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price} with {stock:d} in stock'))
def product_in_catalogue(products, memory_cache, make_product, name, price, stock):
    products[name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.cfparse('the customer has {qty:d} of "{name}" in the cart'))
def customer_has_line(products, customer, name, qty):
    CartService().add_item(customer, products[name], qty)


@given(parsers.cfparse('the product "{name}" is deactivated'))
def product_deactivated(products, name):
    CatalogueService().set_product_active(products[name], False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected with "{error_name}"'))
def request_rejected(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


@then(parsers.cfparse("the cart total is {amount}"))
def cart_total_is(customer, amount):
    assert CartService().get_or_create_cart(customer).total_amount == Decimal(amount)
