"""BDD tests for cart item management."""

from pytest_bdd import parsers, scenarios, then, when

from orderflow.cart.service import CartService
from orderflow.errors import OrderFlowError

scenarios("features/cart_items.feature")


def _line_for(customer, product_id):
    cart = CartService().get_or_create_cart(customer)
    return next((i for i in cart.items if i.product_id == product_id), None)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer adds {qty:d} of "{name}" to the cart'))
def add_to_cart(products, customer, error, name, qty):
    try:
        CartService().add_item(customer, products[name], qty)
    except OrderFlowError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the customer changes the quantity of "{name}" to {qty:d}'))
def change_quantity(products, customer, error, name, qty):
    line = _line_for(customer, products[name])
    try:
        CartService().update_item_quantity(customer, line.id, qty)
    except OrderFlowError as exc:
        error["exc"] = exc


@when("the customer clears the cart")
def clear_cart(customer):
    CartService().clear_cart(customer)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(customer, count):
    assert len(CartService().get_or_create_cart(customer).items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(customer, count):
    assert len(CartService().get_or_create_cart(customer).items) == count


@then(parsers.cfparse('the line for "{name}" has quantity {qty:d}'))
def line_has_quantity(products, customer, name, qty):
    assert _line_for(customer, products[name]).quantity == qty
