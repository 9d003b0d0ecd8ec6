"""Order application service.

Each operation maps to one command (one unit of work). Read operations go
straight to the Order store and enforce ownership. After a COD confirmation
commits, the catalogue cache is evicted for every product whose stock moved
before the call returns, so no reader sees pre-confirmation stock once the
caller has its answer. A command whose unit of work loses a version race
against a concurrent writer is re-run against fresh state.
"""

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from orderflow.catalogue.catalog_cache import CatalogCache
from orderflow.errors import ConcurrentOrderModification, OrderNotFound, UnauthorizedError
from orderflow.identity.user import User
from orderflow.order.confirmation import ConfirmCODOrder
from orderflow.order.order import Order, PaymentMethod
from orderflow.order.placement import PlaceOrder
from orderflow.order.status import UpdateOrderStatus
from orderflow.order.views import OrderView
from orderflow.utils.settings import get_settings

logger = structlog.get_logger(__name__)


class OrderService:
    def __init__(self, cache: CatalogCache | None = None, max_attempts: int | None = None):
        self.cache = cache or CatalogCache()
        self.max_attempts = max_attempts or get_settings().order_conflict_retries

    def create_order(
        self,
        user: User,
        payment_method=PaymentMethod.COD.value,
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> OrderView:
        if isinstance(payment_method, PaymentMethod):
            payment_method = payment_method.value
        order_id = self._process(
            PlaceOrder(
                user_id=user.id,
                customer_email=user.email,
                customer_name=user.username,
                payment_method=payment_method,
                shipping_address=shipping_address,
                notes=notes,
            )
        )
        return self._view(order_id)

    def confirm_cod_order(self, user: User, order_id) -> OrderView:
        product_ids = self._process(ConfirmCODOrder(order_id=order_id, user_id=user.id))
        self.cache.invalidate_many(product_ids)
        return self._view(order_id)

    def get_order(self, user: User, order_id) -> OrderView:
        order = self._load(order_id)
        if str(order.user_id) != str(user.id):
            raise UnauthorizedError(order_id=str(order_id))
        return OrderView.from_order(order)

    def list_user_orders(self, user: User) -> list[OrderView]:
        orders = current_domain.repository_for(Order).find_by_user(user.id)
        return [OrderView.from_order(order) for order in orders]

    def update_order_status(self, user: User, order_id, status: str) -> OrderView:
        """Florist-only lifecycle change (ship, deliver, cancel)."""
        if not user.is_florist:
            raise UnauthorizedError(order_id=str(order_id))
        self._process(UpdateOrderStatus(order_id=order_id, status=status))
        logger.info("Order status updated", order_id=str(order_id), status=status, by=user.id)
        return self._view(order_id)

    def _process(self, command):
        """Run a command, re-running it when its unit of work lost a version race.

        A re-run sees the winner's changes, so a second confirmation of the same
        order fails with ``OrderAlreadyConfirmed`` and a contended product is
        re-checked for stock.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return current_domain.process(command, asynchronous=False)
            except ExpectedVersionError as exc:
                logger.info(
                    "Order write conflict, retrying",
                    command=command.__class__.__name__,
                    attempt=attempt,
                    reason=str(exc),
                )

        logger.warning(
            "Order write conflict persisted after retries",
            command=command.__class__.__name__,
            attempts=self.max_attempts,
        )
        raise ConcurrentOrderModification(command=command.__class__.__name__)

    @staticmethod
    def _load(order_id) -> Order:
        try:
            return current_domain.repository_for(Order).get(str(order_id))
        except ObjectNotFoundError:
            raise OrderNotFound(order_id=str(order_id)) from None

    def _view(self, order_id) -> OrderView:
        return OrderView.from_order(self._load(order_id))
