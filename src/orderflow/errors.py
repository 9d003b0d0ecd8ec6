"""Error taxonomy for OrderFlow.

Every business failure maps to a stable ``ErrorCode`` (numeric code, default
message, HTTP status). Errors are grouped into four categories callers can
branch on without knowing the concrete rule that failed:

- ``NotFoundError``: the addressed resource does not exist, or is not visible
  to the caller.
- ``ConflictError``: the request is well formed but the current state forbids it.
- ``UnauthorizedError``: the caller is known but lacks permission.
- ``UnavailableError``: an optional dependency is down. Only the cache raises
  it, and the catalogue cache always recovers from it internally.

``BadRequestError`` covers malformed input the HTTP layer could not reject
on its own (page parameters, quantities).
"""

from enum import Enum


class ErrorCode(Enum):
    UNCATEGORIZED = (9999, "Uncategorized error", 500)
    INVALID_REQUEST = (1001, "Invalid request", 400)
    UNAUTHENTICATED = (1006, "Unauthenticated", 401)
    UNAUTHORIZED = (1007, "You do not have permission", 403)
    PRODUCT_NOT_FOUND = (2001, "Product not found", 404)
    PRODUCT_NOT_AVAILABLE = (2002, "Product is not available", 409)
    INSUFFICIENT_STOCK = (2003, "Insufficient stock", 409)
    INVALID_PAGE_REQUEST = (2004, "Invalid page request", 400)
    CART_NOT_FOUND = (3001, "Cart not found", 404)
    CART_ITEM_NOT_FOUND = (3002, "Cart item not found", 404)
    INVALID_QUANTITY = (3003, "Quantity must be at least 1", 400)
    CART_CONCURRENT_MODIFICATION = (3004, "Cart was modified concurrently, please retry", 409)
    ORDER_NOT_FOUND = (4001, "Order not found", 404)
    ORDER_ALREADY_CONFIRMED = (4002, "Order is already confirmed", 409)
    EMPTY_CART = (4003, "Cart is empty", 409)
    INVALID_PAYMENT_METHOD = (4004, "Order is not a cash-on-delivery order", 409)
    INVALID_STATUS_TRANSITION = (4005, "Order status transition is not allowed", 409)
    ORDER_CONCURRENT_MODIFICATION = (4006, "Order was modified concurrently, please retry", 409)
    CACHE_UNAVAILABLE = (5001, "Cache unavailable", 503)

    def __init__(self, code: int, message: str, http_status: int):
        self.code = code
        self.message = message
        self.http_status = http_status


class OrderFlowError(Exception):
    """Base class for all business errors."""

    error_code: ErrorCode = ErrorCode.UNCATEGORIZED

    def __init__(self, message: str | None = None, **context):
        self.message = message or self.error_code.message
        self.context = context
        super().__init__(self.message)

    @property
    def code(self) -> int:
        return self.error_code.code

    @property
    def http_status(self) -> int:
        return self.error_code.http_status

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class NotFoundError(OrderFlowError):
    pass


class ConflictError(OrderFlowError):
    pass


class UnauthenticatedError(OrderFlowError):
    error_code = ErrorCode.UNAUTHENTICATED


class UnauthorizedError(OrderFlowError):
    error_code = ErrorCode.UNAUTHORIZED


class UnavailableError(OrderFlowError):
    pass


class BadRequestError(OrderFlowError):
    error_code = ErrorCode.INVALID_REQUEST


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductNotFound(NotFoundError):
    error_code = ErrorCode.PRODUCT_NOT_FOUND


class ProductUnavailable(ConflictError):
    error_code = ErrorCode.PRODUCT_NOT_AVAILABLE


class InsufficientStock(ConflictError):
    error_code = ErrorCode.INSUFFICIENT_STOCK


class InvalidPageRequest(BadRequestError):
    error_code = ErrorCode.INVALID_PAGE_REQUEST


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartNotFound(NotFoundError):
    error_code = ErrorCode.CART_NOT_FOUND


class CartItemNotFound(NotFoundError):
    error_code = ErrorCode.CART_ITEM_NOT_FOUND


class InvalidQuantity(BadRequestError):
    error_code = ErrorCode.INVALID_QUANTITY


class ConcurrentCartModification(ConflictError):
    error_code = ErrorCode.CART_CONCURRENT_MODIFICATION


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderNotFound(NotFoundError):
    error_code = ErrorCode.ORDER_NOT_FOUND


class OrderAlreadyConfirmed(ConflictError):
    error_code = ErrorCode.ORDER_ALREADY_CONFIRMED


class EmptyCart(ConflictError):
    error_code = ErrorCode.EMPTY_CART


class InvalidPaymentMethod(ConflictError):
    error_code = ErrorCode.INVALID_PAYMENT_METHOD


class InvalidStatusTransition(ConflictError):
    error_code = ErrorCode.INVALID_STATUS_TRANSITION


class ConcurrentOrderModification(ConflictError):
    error_code = ErrorCode.ORDER_CONCURRENT_MODIFICATION


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------
class CacheUnavailable(UnavailableError):
    error_code = ErrorCode.CACHE_UNAVAILABLE
