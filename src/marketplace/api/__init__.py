"""Marketplace domain API package."""

from marketplace.api.routes import cart_router, checkout_router, dashboard_router, order_router, product_router

__all__ = ["product_router", "cart_router", "checkout_router", "order_router", "dashboard_router"]
