"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from orderflow.domain import orderflow


@orderflow.event(part_of="Cart")
class CartCreated:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


@orderflow.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or an existing line grew."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    line_quantity = Integer(required=True)


@orderflow.event(part_of="Cart")
class CartItemQuantityChanged:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@orderflow.event(part_of="Cart")
class CartItemRemoved:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@orderflow.event(part_of="Cart")
class CartCleared:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)
