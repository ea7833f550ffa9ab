"""Per-product status rules.

An expiry date is read as the start of that day: a product expiring today is
already expired once ``now`` is past midnight. A plain ``date`` passed as
``now`` stands for the start of that day.
"""

from datetime import date, datetime, time, timedelta

from stock_manager.config import settings
from stock_manager.schemas.inventory import DerivedStatus
from stock_manager.schemas.product import Product


def resolve_now(now: datetime | date | None = None) -> datetime:
    """Normalize an injectable "now" to a datetime (current local time by default)."""
    if now is None:
        return datetime.now()
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time.min)


def _expiry_instant(product: Product, now: datetime) -> datetime:
    return datetime.combine(product.expiry_date, time.min, tzinfo=now.tzinfo)


def _window(warning_window_days: int | None) -> timedelta:
    if warning_window_days is None:
        warning_window_days = settings.warning_window_days
    return timedelta(days=warning_window_days)


def is_expired(product: Product, now: datetime | date | None = None) -> bool:
    """True when the product's expiry date lies before ``now``."""
    current = resolve_now(now)
    return _expiry_instant(product, current) < current


def is_expiring_soon(
    product: Product,
    now: datetime | date | None = None,
    warning_window_days: int | None = None,
) -> bool:
    """True when the product expires within the warning window but has not expired yet."""
    current = resolve_now(now)
    expiry = _expiry_instant(product, current)
    return current <= expiry < current + _window(warning_window_days)


def is_low_stock(product: Product, threshold: int | None = None) -> bool:
    """True when quantity is strictly below the low-stock threshold."""
    if threshold is None:
        threshold = settings.low_stock_threshold
    return product.quantity < threshold


def classify(
    product: Product,
    now: datetime | date | None = None,
    warning_window_days: int | None = None,
) -> DerivedStatus:
    """Single status label for the inventory table.

    Expiry conditions take precedence over low stock.
    """
    current = resolve_now(now)
    if is_expired(product, current):
        return DerivedStatus.EXPIRED
    if is_expiring_soon(product, current, warning_window_days):
        return DerivedStatus.EXPIRING_SOON
    if is_low_stock(product):
        return DerivedStatus.LOW_STOCK
    return DerivedStatus.GOOD


def status_labels(
    product: Product,
    now: datetime | date | None = None,
    warning_window_days: int | None = None,
) -> list[DerivedStatus]:
    """Every label that applies to a product, as shown in the alert list.

    A product can be both low on stock and expiring. Healthy products get
    an empty list.
    """
    current = resolve_now(now)
    labels: list[DerivedStatus] = []
    if is_expired(product, current):
        labels.append(DerivedStatus.EXPIRED)
    elif is_expiring_soon(product, current, warning_window_days):
        labels.append(DerivedStatus.EXPIRING_SOON)
    if is_low_stock(product):
        labels.append(DerivedStatus.LOW_STOCK)
    return labels
