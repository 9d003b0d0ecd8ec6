"""Administrative status changes (ship, deliver, cancel)."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from orderflow.domain import orderflow
from orderflow.errors import OrderNotFound
from orderflow.order.order import Order, OrderStatus


@orderflow.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(choices=OrderStatus, required=True)


@orderflow.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(order_id=str(command.order_id)) from None

        order.change_status(command.status)
        repo.add(order)
        return str(order.id)
