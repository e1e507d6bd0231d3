"""CarGo HTTP API package."""

from cargo.api.orders import order_router
from cargo.api.products import product_router
from cargo.api.users import user_router

__all__ = ["order_router", "product_router", "user_router"]
