"""Cart application service.

Runs cart commands on behalf of a user and returns the refreshed cart view.
Two concurrent writers on the same cart cannot both win: the loser's unit of
work fails either on the aggregate version check (``ExpectedVersionError``)
or, when both raced to create the cart, on the unique ``user_id``
(``ValidationError``). Either way the whole command is re-run against fresh
state, up to ``cart_conflict_retries`` times.
"""

import structlog
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.utils.globals import current_domain

from orderflow.cart.cart import Cart
from orderflow.cart.items import (
    AddItemToCart,
    ClearCart,
    CreateCart,
    RemoveCartItem,
    UpdateCartItemQuantity,
)
from orderflow.cart.views import CartView
from orderflow.errors import ConcurrentCartModification, InvalidQuantity
from orderflow.identity.user import User
from orderflow.utils.settings import get_settings

logger = structlog.get_logger(__name__)


def _is_duplicate_cart(exc: ValidationError) -> bool:
    messages = exc.messages if isinstance(exc.messages, dict) else {}
    return "user_id" in messages


class CartService:
    def __init__(self, max_attempts: int | None = None):
        self.max_attempts = max_attempts or get_settings().cart_conflict_retries

    def get_or_create_cart(self, user: User) -> CartView:
        cart_id = self._process(CreateCart(user_id=user.id), user)
        return self._view(cart_id)

    def add_item(self, user: User, product_id, quantity: int) -> CartView:
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity=quantity)
        cart_id = self._process(
            AddItemToCart(user_id=user.id, product_id=product_id, quantity=quantity),
            user,
        )
        logger.info("Item added to cart", user_id=user.id, product_id=str(product_id), quantity=quantity)
        return self._view(cart_id)

    def update_item_quantity(self, user: User, item_id, quantity: int) -> CartView:
        if quantity is None or quantity < 1:
            raise InvalidQuantity(quantity=quantity)
        cart_id = self._process(
            UpdateCartItemQuantity(user_id=user.id, item_id=item_id, quantity=quantity),
            user,
        )
        return self._view(cart_id)

    def remove_item(self, user: User, item_id) -> CartView:
        cart_id = self._process(RemoveCartItem(user_id=user.id, item_id=item_id), user)
        return self._view(cart_id)

    def clear_cart(self, user: User) -> CartView:
        cart_id = self._process(ClearCart(user_id=user.id), user)
        return self._view(cart_id)

    def _process(self, command, user: User):
        for attempt in range(1, self.max_attempts + 1):
            try:
                return current_domain.process(command, asynchronous=False)
            except ExpectedVersionError as exc:
                reason = str(exc)
            except ValidationError as exc:
                if not _is_duplicate_cart(exc):
                    raise
                reason = "cart created concurrently"

            logger.info(
                "Cart write conflict, retrying",
                user_id=user.id,
                command=command.__class__.__name__,
                attempt=attempt,
                reason=reason,
            )

        logger.warning("Cart write conflict persisted after retries", user_id=user.id, attempts=self.max_attempts)
        raise ConcurrentCartModification(user_id=user.id)

    @staticmethod
    def _view(cart_id) -> CartView:
        cart = current_domain.repository_for(Cart).get(cart_id)
        return CartView.from_cart(cart)
