"""OrderFlow API package."""

from orderflow.api.errors import register_exception_handlers
from orderflow.api.routes import cart_router, order_router, product_router

__all__ = ["product_router", "cart_router", "order_router", "register_exception_handlers"]
