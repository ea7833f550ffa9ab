"""Derived inventory schemas: statuses, statistics, sorting and views."""

from enum import Enum

from pydantic import BaseModel, Field

from stock_manager.schemas.product import Product

# Category filter value that disables category filtering
ALL_CATEGORIES = "All"


class DerivedStatus(str, Enum):
    """Status of a product, computed from quantity and expiry date."""

    GOOD = "Good"
    LOW_STOCK = "Low Stock"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class SortField(str, Enum):
    """Product table sort columns."""

    NAME = "name"
    QUANTITY = "quantity"
    EXPIRY = "expiryDate"
    PRICE = "price"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class InventoryStats(BaseModel):
    """Aggregate statistics over the whole product collection."""

    total_items: int = Field(default=0, description="Sum of quantities")
    total_value: float = Field(default=0.0, description="Sum of quantity * price")
    low_stock_count: int = Field(default=0, description="Products below the low-stock threshold")
    expired_count: int = Field(default=0, description="Products past their expiry date")
    expiring_soon_count: int = Field(
        default=0,
        description="Products expiring within the warning window (not yet expired)",
    )


class ProductView(Product):
    """A product row of the inventory table with its single status label."""

    status: DerivedStatus = Field(description="Status with expiry taking precedence")

    @classmethod
    def build(cls, product: Product, status: DerivedStatus) -> "ProductView":
        return cls(**product.model_dump(), status=status)


class AlertItem(Product):
    """A product needing attention, with every label that applies to it."""

    labels: list[DerivedStatus] = Field(default_factory=list)

    @classmethod
    def build(cls, product: Product, labels: list[DerivedStatus]) -> "AlertItem":
        return cls(**product.model_dump(), labels=labels)


class CategoryListing(BaseModel):
    """Active categories plus names still referenced by products."""

    categories: list[str] = Field(default_factory=list)
    archived: list[str] = Field(default_factory=list)


class CategoryCreate(BaseModel):
    """Payload for adding a category."""

    name: str = Field(min_length=1, max_length=100)

    model_config = {"extra": "forbid"}


class CategoryRename(BaseModel):
    """Payload for renaming a category."""

    name: str = Field(min_length=1, max_length=100, description="New category name")

    model_config = {"extra": "forbid"}
