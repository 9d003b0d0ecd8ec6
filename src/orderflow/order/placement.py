"""Order placement: turn the caller's cart into a PENDING order.

Everything is validated against the Product store, never the cache, before
anything is written. Stock is left untouched; it is committed on COD
confirmation.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from orderflow.cart.cart import Cart
from orderflow.catalogue.product.product import Product
from orderflow.domain import orderflow
from orderflow.errors import EmptyCart, ProductNotFound
from orderflow.order.order import Order, PaymentMethod

logger = structlog.get_logger(__name__)


@orderflow.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=255)
    payment_method = String(choices=PaymentMethod, required=True)
    shipping_address = Text()
    notes = Text()


@orderflow.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get_for_user(command.user_id)
        if cart is None or not cart.items:
            raise EmptyCart(user_id=str(command.user_id))

        product_repo = current_domain.repository_for(Product)
        lines = []
        for item in cart.items:
            try:
                product = product_repo.get(str(item.product_id))
            except ObjectNotFoundError:
                raise ProductNotFound(product_id=str(item.product_id)) from None
            product.ensure_purchasable(item.quantity)
            lines.append(
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                }
            )

        order_repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=order_repo.next_order_number(),
            user_id=command.user_id,
            lines=lines,
            payment_method=command.payment_method,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            shipping_address=command.shipping_address,
            notes=command.notes,
        )
        cart.clear()

        order_repo.add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
