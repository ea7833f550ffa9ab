"""Persistence Gateway - local-first, remote-optional storage of products and categories.

Every write goes through a two-step pipeline:
1. Remote write, when a remote store is connected. Failures are logged and
   never raised.
2. Local write-through, unconditionally, so the local cache always holds the
   latest attempted state.

Reads prefer the remote store and fall back to the local cache when the
remote is disconnected or failing.
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stock_manager.core.defaults import DEFAULT_CATEGORIES
from stock_manager.core.errors import RemoteOperationFailed, RemoteUnavailable
from stock_manager.infra.local_store import LocalStore, StorageKeys
from stock_manager.infra.logging import get_logger
from stock_manager.infra.remote_store import RemoteTableStore
from stock_manager.schemas.connection import SyncResult
from stock_manager.schemas.product import Product

logger = get_logger(__name__)

PRODUCTS_TABLE = "products"
CATEGORIES_TABLE = "categories"

RemoteFactory = Callable[[str, str], RemoteTableStore]
RemoteWrite = Callable[[RemoteTableStore], Awaitable[None]]


@dataclass(frozen=True)
class RemoteConnection:
    """An established remote store connection."""

    url: str
    store: RemoteTableStore


def _parse_products(rows: Any, source: str) -> list[Product]:
    """Validate raw product records, skipping the ones that do not parse."""
    if not isinstance(rows, list):
        logger.warning("Product data is not a list, ignoring it", source=source)
        return []

    products: list[Product] = []
    for row in rows:
        try:
            products.append(Product.model_validate(row))
        except PydanticValidationError as e:
            logger.warning(
                "Skipping invalid product record",
                source=source,
                product_id=row.get("id") if isinstance(row, dict) else None,
                error=str(e),
            )
    return products


class PersistenceGateway:
    """CRUD over products and categories with a local cache and an optional remote store."""

    def __init__(
        self,
        local_store: LocalStore | None = None,
        remote_factory: RemoteFactory = RemoteTableStore,
    ) -> None:
        """Initialize the gateway and connect with any stored credentials.

        Args:
            local_store: Local durable cache (defaults to settings path)
            remote_factory: Callable building a remote client from (url, key)
        """
        self.local = local_store or LocalStore()
        self._remote_factory = remote_factory
        self._connection: RemoteConnection | None = None
        self._init_remote()

    # =========================================================================
    # Connection
    # =========================================================================

    def _init_remote(self) -> bool:
        url = self.local.get_item(StorageKeys.DB_URL)
        key = self.local.get_item(StorageKeys.DB_KEY)
        self._connection = None

        if not (url and key):
            logger.debug("No remote credentials stored, running local-only")
            return False

        try:
            store = self._remote_factory(url, key)
        except RemoteUnavailable as e:
            logger.warning("Remote store unavailable, running local-only", error=str(e))
            return False

        self._connection = RemoteConnection(url=url, store=store)
        return True

    async def _release_remote(self) -> None:
        if self._connection is not None:
            await self._connection.store.close()
            self._connection = None

    def is_connected(self) -> bool:
        """True iff credentials are stored and a remote client was constructed."""
        return self._connection is not None

    @property
    def remote_url(self) -> str | None:
        """Stored remote URL, whether or not the connection succeeded."""
        return self.local.get_item(StorageKeys.DB_URL)

    async def save_credentials(self, url: str, key: str) -> bool:
        """Persist remote credentials and (re)initialize the remote client.

        Does not migrate any data; see ``sync_local_to_cloud``.

        Returns:
            True if the remote client is now connected
        """
        self.local.set_item(StorageKeys.DB_URL, url.strip())
        self.local.set_item(StorageKeys.DB_KEY, key.strip())
        await self._release_remote()
        connected = self._init_remote()
        logger.info("Remote credentials saved", connected=connected)
        return connected

    async def disconnect(self) -> None:
        """Forget remote credentials; subsequent operations are local-only."""
        self.local.remove_item(StorageKeys.DB_URL)
        self.local.remove_item(StorageKeys.DB_KEY)
        await self._release_remote()
        logger.info("Remote store disconnected")

    async def close(self) -> None:
        """Release the remote HTTP client."""
        await self._release_remote()

    async def _remote_write(self, operation: str, table: str, write: RemoteWrite) -> bool:
        if self._connection is None:
            return False
        try:
            await write(self._connection.store)
            return True
        except RemoteOperationFailed as e:
            logger.error(
                "Remote write failed, keeping local copy",
                operation=operation,
                table=table,
                error=e.detail,
            )
            return False

    # =========================================================================
    # Products
    # =========================================================================

    def _local_product_records(self) -> list[dict[str, Any]]:
        records = self.local.get_json(StorageKeys.PRODUCTS, [])
        if not isinstance(records, list):
            logger.warning("Local product cache is not a list, resetting it")
            return []
        return records

    def has_cached_products(self) -> bool:
        """Whether the local cache has ever stored a product list."""
        return self.local.has_item(StorageKeys.PRODUCTS)

    async def get_products(self) -> list[Product]:
        """Load all products, remote first, local cache as fallback."""
        if self._connection is not None:
            try:
                rows = await self._connection.store.select(PRODUCTS_TABLE)
                return _parse_products(rows, source="remote")
            except RemoteOperationFailed as e:
                logger.error(
                    "Remote read failed, falling back to local cache",
                    operation=e.operation,
                    table=e.table,
                    error=e.detail,
                )

        return _parse_products(self._local_product_records(), source="local")

    async def save_product(self, product: Product) -> None:
        """Create or replace a product by id."""
        record = product.to_record()

        async def write(store: RemoteTableStore) -> None:
            await store.upsert(PRODUCTS_TABLE, record, on_conflict="id")

        await self._remote_write("upsert", PRODUCTS_TABLE, write)

        records = self._local_product_records()
        for index, existing in enumerate(records):
            if isinstance(existing, dict) and existing.get("id") == product.id:
                records[index] = record
                break
        else:
            records.append(record)
        self.local.set_json(StorageKeys.PRODUCTS, records)
        logger.debug("Product saved", product_id=product.id)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""

        async def write(store: RemoteTableStore) -> None:
            await store.delete(PRODUCTS_TABLE, "id", product_id)

        await self._remote_write("delete", PRODUCTS_TABLE, write)

        records = [
            r
            for r in self._local_product_records()
            if not (isinstance(r, dict) and r.get("id") == product_id)
        ]
        self.local.set_json(StorageKeys.PRODUCTS, records)
        logger.debug("Product deleted", product_id=product_id)

    # =========================================================================
    # Categories
    # =========================================================================

    def _local_categories(self) -> list[str]:
        categories = self.local.get_json(StorageKeys.CATEGORIES, list(DEFAULT_CATEGORIES))
        if not isinstance(categories, list):
            logger.warning("Local category cache is not a list, using defaults")
            return list(DEFAULT_CATEGORIES)
        return [c for c in categories if isinstance(c, str)]

    async def get_categories(self) -> list[str]:
        """Load category names, remote first, local cache (or defaults) as fallback."""
        if self._connection is not None:
            try:
                rows = await self._connection.store.select(CATEGORIES_TABLE, columns="name")
                return [
                    row["name"]
                    for row in rows
                    if isinstance(row, dict) and isinstance(row.get("name"), str)
                ]
            except RemoteOperationFailed as e:
                logger.error(
                    "Remote read failed, falling back to local cache",
                    operation=e.operation,
                    table=e.table,
                    error=e.detail,
                )

        return self._local_categories()

    async def add_category(self, name: str) -> None:
        """Add a category. Adding an existing name is a no-op locally."""

        async def write(store: RemoteTableStore) -> None:
            await store.upsert(CATEGORIES_TABLE, {"name": name}, on_conflict="name")

        await self._remote_write("upsert", CATEGORIES_TABLE, write)

        categories = self._local_categories()
        if name not in categories:
            categories.append(name)
            self.local.set_json(StorageKeys.CATEGORIES, categories)

    async def delete_category(self, name: str) -> None:
        """Remove a category. Products referencing it are left untouched."""

        async def write(store: RemoteTableStore) -> None:
            await store.delete(CATEGORIES_TABLE, "name", name)

        await self._remote_write("delete", CATEGORIES_TABLE, write)

        categories = [c for c in self._local_categories() if c != name]
        self.local.set_json(StorageKeys.CATEGORIES, categories)

    async def rename_category(
        self,
        old_name: str,
        new_name: str,
        products: Iterable[Product],
    ) -> list[Product]:
        """Rename a category as add(new), delete(old), then re-save affected products.

        Not transactional: if a step fails partway, products may be left
        split between the old and new names.

        Args:
            old_name: Current category name
            new_name: Replacement name
            products: Snapshot of the products to migrate

        Returns:
            The re-pointed copies of the affected products
        """
        await self.add_category(new_name)
        await self.delete_category(old_name)

        moved: list[Product] = []
        for product in products:
            if product.category == old_name:
                updated = product.with_category(new_name)
                await self.save_product(updated)
                moved.append(updated)

        logger.info(
            "Category renamed",
            old_name=old_name,
            new_name=new_name,
            products_moved=len(moved),
        )
        return moved

    # =========================================================================
    # Sync
    # =========================================================================

    async def sync_local_to_cloud(self) -> SyncResult:
        """Push the whole local cache to the remote store in one go.

        Used right after new credentials are saved. Partial failures are
        logged and reported, never rolled back.
        """
        result = SyncResult()
        if self._connection is None:
            logger.info("Sync skipped, no remote connection")
            return result

        store = self._connection.store

        records = self._local_product_records()
        if records:
            try:
                await store.upsert(PRODUCTS_TABLE, records, on_conflict="id")
                result.products_synced = len(records)
            except RemoteOperationFailed as e:
                logger.error("Product sync failed", table=e.table, error=e.detail)
                result.errors.append(str(e))

        categories = self.local.get_json(StorageKeys.CATEGORIES, [])
        if isinstance(categories, list) and categories:
            rows = [{"name": c} for c in categories if isinstance(c, str)]
            try:
                await store.upsert(CATEGORIES_TABLE, rows, on_conflict="name")
                result.categories_synced = len(rows)
            except RemoteOperationFailed as e:
                logger.error("Category sync failed", table=e.table, error=e.detail)
                result.errors.append(str(e))

        logger.info(
            "Local data synced to remote",
            products=result.products_synced,
            categories=result.categories_synced,
            errors=len(result.errors),
        )
        return result
