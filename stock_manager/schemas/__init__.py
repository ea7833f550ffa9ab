"""Pydantic schemas for products, statistics and API payloads."""

from stock_manager.schemas.common import ErrorResponse, HealthResponse
from stock_manager.schemas.connection import ConnectionRequest, ConnectionStatus, SyncResult
from stock_manager.schemas.inventory import (
    ALL_CATEGORIES,
    AlertItem,
    CategoryCreate,
    CategoryListing,
    CategoryRename,
    DerivedStatus,
    InventoryStats,
    ProductView,
    SortField,
    SortOrder,
)
from stock_manager.schemas.product import Product, ProductDraft, new_product_id

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ConnectionRequest",
    "ConnectionStatus",
    "SyncResult",
    "ALL_CATEGORIES",
    "AlertItem",
    "CategoryCreate",
    "CategoryListing",
    "CategoryRename",
    "DerivedStatus",
    "InventoryStats",
    "ProductView",
    "SortField",
    "SortOrder",
    "Product",
    "ProductDraft",
    "new_product_id",
]
