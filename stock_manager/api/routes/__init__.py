"""API routes module."""

from stock_manager.api.routes.categories import router as categories_router
from stock_manager.api.routes.connection import router as connection_router
from stock_manager.api.routes.dashboard import router as dashboard_router
from stock_manager.api.routes.health import router as health_router
from stock_manager.api.routes.products import router as products_router

__all__ = [
    "categories_router",
    "connection_router",
    "dashboard_router",
    "health_router",
    "products_router",
]
