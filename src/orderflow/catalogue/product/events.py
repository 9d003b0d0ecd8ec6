"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Float, Identifier, Integer, String

from orderflow.domain import orderflow


@orderflow.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)
    category_id = Identifier()
    is_active = Boolean(default=True)


@orderflow.event(part_of="Product")
class ProductDetailsUpdated:
    """Name, description, price or category of a product changed."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category_id = Identifier()


@orderflow.event(part_of="Product")
class ProductActivated:
    __version__ = "v1"

    product_id = Identifier(required=True)


@orderflow.event(part_of="Product")
class ProductDeactivated:
    __version__ = "v1"

    product_id = Identifier(required=True)


@orderflow.event(part_of="Product")
class ProductRestocked:
    """Stock was added to a product."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    stock_quantity = Integer(required=True)


@orderflow.event(part_of="Product")
class StockDecremented:
    """Stock was committed to a confirmed order."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    stock_quantity = Integer(required=True)
    order_id = Identifier()
