"""Repository for the Cart aggregate."""

from orderflow.cart.cart import Cart
from orderflow.domain import orderflow


@orderflow.repository(part_of=Cart)
class CartRepository:
    def get_for_user(self, user_id) -> Cart | None:
        """Load the user's cart with its items, or None if the user has none yet."""
        result = self._dao.query.filter(user_id=str(user_id)).all()
        if not result.items:
            return None
        return self.get(result.first.id)
