"""Core inventory rules - status classification, statistics and errors."""

from stock_manager.core.aggregation import (
    aggregate,
    alert_list,
    archived_categories,
    filter_and_sort,
)
from stock_manager.core.classification import (
    classify,
    is_expired,
    is_expiring_soon,
    is_low_stock,
    status_labels,
)
from stock_manager.core.errors import (
    ProductNotFound,
    RemoteOperationFailed,
    RemoteUnavailable,
    StockManagerError,
    ValidationError,
)

__all__ = [
    "aggregate",
    "alert_list",
    "archived_categories",
    "filter_and_sort",
    "classify",
    "is_expired",
    "is_expiring_soon",
    "is_low_stock",
    "status_labels",
    "ProductNotFound",
    "RemoteOperationFailed",
    "RemoteUnavailable",
    "StockManagerError",
    "ValidationError",
]
