"""Collection-wide computations: statistics, table filtering and alerts.

All functions are pure and return new lists; input sequences are never
mutated.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

from stock_manager.core.classification import (
    resolve_now,
    is_expired,
    is_expiring_soon,
    is_low_stock,
)
from stock_manager.schemas.inventory import ALL_CATEGORIES, InventoryStats, SortField, SortOrder
from stock_manager.schemas.product import Product


def aggregate(
    products: Iterable[Product],
    now: datetime | date | None = None,
    warning_window_days: int | None = None,
) -> InventoryStats:
    """Compute inventory statistics in a single pass."""
    current = resolve_now(now)
    total_items = 0
    total_value = 0.0
    low_stock = expired = expiring_soon = 0

    for product in products:
        total_items += product.quantity
        total_value += product.quantity * product.price

        if is_low_stock(product):
            low_stock += 1
        if is_expired(product, current):
            expired += 1
        elif is_expiring_soon(product, current, warning_window_days):
            expiring_soon += 1

    return InventoryStats(
        total_items=total_items,
        total_value=total_value,
        low_stock_count=low_stock,
        expired_count=expired,
        expiring_soon_count=expiring_soon,
    )


def _sort_key(field: SortField):
    def key(product: Product) -> Any:
        if field is SortField.NAME:
            return product.name.lower()
        if field is SortField.QUANTITY:
            return product.quantity
        if field is SortField.PRICE:
            return product.price
        return product.expiry_date

    return key


def filter_and_sort(
    products: Iterable[Product],
    search_term: str = "",
    category_filter: str = ALL_CATEGORIES,
    sort_field: SortField | str = SortField.EXPIRY,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[Product]:
    """Filter the product table by name and category, then sort it.

    Args:
        products: Product snapshot
        search_term: Case-insensitive substring matched against names
        category_filter: Exact category name, or ``ALL_CATEGORIES``
        sort_field: Column to sort on
        sort_order: Ascending or descending

    Returns:
        New list; products with equal keys keep their input order
    """
    field = SortField(sort_field)
    order = SortOrder(sort_order)
    needle = search_term.lower()

    matches = [
        p
        for p in products
        if needle in p.name.lower()
        and (category_filter == ALL_CATEGORIES or p.category == category_filter)
    ]
    return sorted(matches, key=_sort_key(field), reverse=order is SortOrder.DESC)


def alert_list(
    products: Iterable[Product],
    now: datetime | date | None = None,
    warning_window_days: int | None = None,
) -> list[Product]:
    """Products that are low on stock, expiring soon or expired, soonest expiry first."""
    current = resolve_now(now)
    flagged = [
        p
        for p in products
        if is_low_stock(p)
        or is_expired(p, current)
        or is_expiring_soon(p, current, warning_window_days)
    ]
    return sorted(flagged, key=lambda p: p.expiry_date)


def archived_categories(products: Iterable[Product], categories: Sequence[str]) -> list[str]:
    """Category names used by products but missing from the active list."""
    active = set(categories)
    archived: list[str] = []
    for product in products:
        if product.category not in active and product.category not in archived:
            archived.append(product.category)
    return archived
