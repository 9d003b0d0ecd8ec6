"""Cash-on-delivery confirmation: the only place stock is decremented."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from orderflow.catalogue.product.product import Product
from orderflow.domain import orderflow
from orderflow.errors import InsufficientStock, OrderNotFound, ProductNotFound, UnauthorizedError
from orderflow.order.order import Order

logger = structlog.get_logger(__name__)


@orderflow.command(part_of="Order")
class ConfirmCODOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@orderflow.command_handler(part_of=Order)
class ConfirmCODOrderHandler:
    @handle(ConfirmCODOrder)
    def confirm_cod_order(self, command):
        order_repo = current_domain.repository_for(Order)
        try:
            order = order_repo.get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(order_id=str(command.order_id)) from None

        if str(order.user_id) != str(command.user_id):
            raise UnauthorizedError(order_id=str(command.order_id))

        order.confirm_cod()

        # Validate every line before touching any stock
        product_repo = current_domain.repository_for(Product)
        products = []
        for item in order.items:
            try:
                product = product_repo.get(str(item.product_id))
            except ObjectNotFoundError:
                raise ProductNotFound(product_id=str(item.product_id)) from None
            if item.quantity > product.stock_quantity:
                raise InsufficientStock(
                    f"Insufficient stock for '{product.name}': requested {item.quantity}, "
                    f"available {product.stock_quantity}",
                    product_id=str(product.id),
                    requested=item.quantity,
                    available=product.stock_quantity,
                )
            products.append((product, item.quantity))

        # Order first: a stale order fails its version check before stock moves
        order_repo.add(order)
        for product, quantity in products:
            product.decrement_stock(quantity, order_id=order.id)
            product_repo.add(product)

        logger.info(
            "COD order confirmed",
            order_id=str(order.id),
            order_number=order.order_number,
            products=[str(p.id) for p, _ in products],
        )
        return [str(p.id) for p, _ in products]
