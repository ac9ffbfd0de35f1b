"""Ordering domain API package."""

from ordering.api.routes import account_router, cart_router, order_router, product_router

__all__ = ["product_router", "account_router", "cart_router", "order_router"]
