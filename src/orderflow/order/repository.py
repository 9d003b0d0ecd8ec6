"""Repository for the Order aggregate."""

from orderflow.domain import orderflow
from orderflow.order.order import Order, generate_order_number

# Upper bound on a user's order history in one listing
ORDER_HISTORY_LIMIT = 200
ORDER_NUMBER_ATTEMPTS = 5


@orderflow.repository(part_of=Order)
class OrderRepository:
    def find_by_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first

    def find_by_user(self, user_id) -> list[Order]:
        """The user's orders, newest first, each loaded with its lines."""
        results = (
            self._dao.query.filter(user_id=str(user_id))
            .order_by("-created_at")
            .limit(ORDER_HISTORY_LIMIT)
            .all()
        )
        return [self.get(order.id) for order in results.items]

    def next_order_number(self) -> str:
        """Generate an order number not yet used by any stored order."""
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            candidate = generate_order_number()
            if self.find_by_number(candidate) is None:
                return candidate
        raise RuntimeError(f"Could not allocate a unique order number after {ORDER_NUMBER_ATTEMPTS} attempts")
