"""Shared fixtures for stock manager tests."""

from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stock_manager.infra.local_store import LocalStore, StorageKeys
from stock_manager.infra.remote_store import RemoteTableStore
from stock_manager.schemas.product import Product
from stock_manager.services.gateway import PersistenceGateway
from stock_manager.services.inventory_service import InventoryService

ProductFactory = Callable[..., Product]


@pytest.fixture
def now() -> datetime:
    """A fixed point in time, mid-day."""
    return datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def make_product() -> ProductFactory:
    """Build products with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> Product:
        n = next(counter)
        fields: dict[str, Any] = {
            "id": f"p{n}",
            "name": f"Product {n}",
            "category": "Dairy",
            "quantity": 50,
            "price": 2.5,
            "expiry_date": date(2026, 1, 1),
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "sms_storage.json")


@pytest.fixture
def remote_store() -> MagicMock:
    """Remote store double; async methods become AsyncMocks from spec=RemoteTableStore."""
    store = MagicMock(spec=RemoteTableStore)
    store.select.return_value = []
    return store


@pytest.fixture
def gateway(local_store: LocalStore) -> PersistenceGateway:
    """Gateway with no credentials stored (local-only)."""
    return PersistenceGateway(local_store)


@pytest.fixture
def connected_gateway(local_store: LocalStore, remote_store: MagicMock) -> PersistenceGateway:
    """Gateway connected to the remote store double."""
    local_store.set_item(StorageKeys.DB_URL, "https://example.supabase.co")
    local_store.set_item(StorageKeys.DB_KEY, "anon-key")
    return PersistenceGateway(local_store, remote_factory=lambda url, key: remote_store)


@pytest.fixture
def inventory(gateway: PersistenceGateway) -> InventoryService:
    return InventoryService(gateway, warning_window_days=30, seed_sample_data=False)


@pytest_asyncio.fixture
async def client(inventory: InventoryService) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with an isolated inventory session."""
    from stock_manager.api.deps import get_inventory_service
    from stock_manager.main import app

    await inventory.load()
    app.dependency_overrides[get_inventory_service] = lambda: inventory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def days_from_today() -> Callable[[int], str]:
    """ISO date relative to the real current date, for API payloads."""

    def _iso(days: int) -> str:
        return (date.today() + timedelta(days=days)).isoformat()

    return _iso
