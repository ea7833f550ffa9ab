"""Inventory Service - one session's product and category lists.

Composes the persistence gateway (durable changes) with the classification
and aggregation rules (derived views). The gateway and the rules never call
each other; this service wires them together.
"""

from datetime import date, datetime

from stock_manager.config import settings
from stock_manager.core.aggregation import (
    aggregate,
    alert_list,
    archived_categories,
    filter_and_sort,
)
from stock_manager.core.classification import classify, status_labels
from stock_manager.core.defaults import SAMPLE_PRODUCTS
from stock_manager.core.errors import ProductNotFound, ValidationError
from stock_manager.infra.logging import get_logger
from stock_manager.schemas.connection import SyncResult
from stock_manager.schemas.inventory import (
    ALL_CATEGORIES,
    DerivedStatus,
    InventoryStats,
    SortField,
    SortOrder,
)
from stock_manager.schemas.product import Product, ProductDraft, new_product_id
from stock_manager.services.gateway import PersistenceGateway

logger = get_logger(__name__)

CATEGORY_EXISTS = "Category already exists"
CATEGORY_EMPTY = "Category name must not be empty"
CATEGORY_UNKNOWN = "Category does not exist"


class InventoryService:
    """In-memory inventory state for a single session."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        warning_window_days: int | None = None,
        seed_sample_data: bool | None = None,
    ) -> None:
        self.gateway = gateway
        self.warning_window_days = (
            settings.warning_window_days if warning_window_days is None else warning_window_days
        )
        self.seed_sample_data = settings.seed_sample_data if seed_sample_data is None else seed_sample_data
        self.products: list[Product] = []
        self.categories: list[str] = []

    async def load(self) -> None:
        """Load products and categories wholesale."""
        products = await self.gateway.get_products()
        self.categories = await self.gateway.get_categories()

        if (
            not products
            and self.seed_sample_data
            and not self.gateway.is_connected()
            and not self.gateway.has_cached_products()
        ):
            logger.info("No stored inventory, showing sample products")
            products = list(SAMPLE_PRODUCTS)

        self.products = products
        logger.info(
            "Inventory loaded",
            products=len(self.products),
            categories=len(self.categories),
            connected=self.gateway.is_connected(),
        )

    def is_connected(self) -> bool:
        return self.gateway.is_connected()

    # =========================================================================
    # Products
    # =========================================================================

    def get_product(self, product_id: str) -> Product:
        for product in self.products:
            if product.id == product_id:
                return product
        raise ProductNotFound(product_id)

    async def add_product(self, draft: ProductDraft) -> Product:
        """Create a product with a fresh id."""
        product = draft.to_product(new_product_id())
        await self.gateway.save_product(product)
        self.products = [*self.products, product]
        logger.info("Product added", product_id=product.id, name=product.name)
        return product

    async def update_product(self, product_id: str, draft: ProductDraft) -> Product:
        """Replace an existing product's fields, keeping its id.

        Raises:
            ProductNotFound: If the id is not in the session list
        """
        self.get_product(product_id)
        product = draft.to_product(product_id)
        await self.gateway.save_product(product)
        self.products = [product if p.id == product_id else p for p in self.products]
        logger.info("Product updated", product_id=product_id)
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Raises:
            ProductNotFound: If the id is not in the session list
        """
        self.get_product(product_id)
        await self.gateway.delete_product(product_id)
        self.products = [p for p in self.products if p.id != product_id]
        logger.info("Product deleted", product_id=product_id)

    # =========================================================================
    # Categories
    # =========================================================================

    async def add_category(self, name: str) -> str:
        """Add a category.

        Raises:
            ValidationError: If the name is blank or already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError(CATEGORY_EMPTY)
        if name in self.categories:
            raise ValidationError(CATEGORY_EXISTS)

        await self.gateway.add_category(name)
        self.categories = [*self.categories, name]
        return name

    async def rename_category(self, old_name: str, new_name: str) -> str:
        """Rename a category and move its products over.

        Raises:
            ValidationError: If the old name is not a listed or archived category,
                or the new name is blank or taken by another category
        """
        if old_name not in self.categories and old_name not in self.archived_categories():
            raise ValidationError(CATEGORY_UNKNOWN)
        new_name = new_name.strip()
        if not new_name:
            raise ValidationError(CATEGORY_EMPTY)
        if new_name == old_name:
            return new_name
        if new_name in self.categories:
            raise ValidationError(CATEGORY_EXISTS)

        moved = await self.gateway.rename_category(old_name, new_name, self.products)
        moved_by_id = {p.id: p for p in moved}

        self.categories = [new_name if c == old_name else c for c in self.categories]
        if new_name not in self.categories:
            self.categories.append(new_name)
        self.products = [moved_by_id.get(p.id, p) for p in self.products]
        return new_name

    async def delete_category(self, name: str) -> None:
        """Delete a category. Its products keep the name as an archived category."""
        await self.gateway.delete_category(name)
        self.categories = [c for c in self.categories if c != name]

    def archived_categories(self) -> list[str]:
        return archived_categories(self.products, self.categories)

    # =========================================================================
    # Derived views
    # =========================================================================

    def status_of(self, product: Product, now: datetime | date | None = None) -> DerivedStatus:
        return classify(product, now, self.warning_window_days)

    def labels_of(self, product: Product, now: datetime | date | None = None) -> list[DerivedStatus]:
        return status_labels(product, now, self.warning_window_days)

    def stats(self, now: datetime | date | None = None) -> InventoryStats:
        return aggregate(self.products, now, self.warning_window_days)

    def alerts(self, now: datetime | date | None = None) -> list[Product]:
        return alert_list(self.products, now, self.warning_window_days)

    def browse(
        self,
        search_term: str = "",
        category_filter: str = ALL_CATEGORIES,
        sort_field: SortField = SortField.EXPIRY,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> list[Product]:
        """Filtered and sorted view of the product table."""
        return filter_and_sort(self.products, search_term, category_filter, sort_field, sort_order)

    # =========================================================================
    # Remote connection
    # =========================================================================

    async def connect(self, url: str, key: str) -> SyncResult:
        """Save credentials, push local data to the remote store and reload."""
        await self.gateway.save_credentials(url, key)
        result = await self.gateway.sync_local_to_cloud()
        await self.load()
        return result

    async def disconnect(self) -> None:
        """Drop the remote connection and reload from the local cache."""
        await self.gateway.disconnect()
        await self.load()
