"""Ordering domain API package."""

from ordering.api.errors import register_exception_handlers
from ordering.api.routes import admin_order_router, notification_router, order_router

__all__ = ["order_router", "admin_order_router", "notification_router", "register_exception_handlers"]
