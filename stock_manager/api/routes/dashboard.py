"""Dashboard endpoints - statistics and the attention list."""

from fastapi import APIRouter

from stock_manager.api.deps import Inventory
from stock_manager.schemas.inventory import AlertItem, InventoryStats

router = APIRouter()


@router.get("/stats", response_model=InventoryStats)
async def stats(inventory: Inventory) -> InventoryStats:
    return inventory.stats()


@router.get("/alerts", response_model=list[AlertItem])
async def alerts(inventory: Inventory) -> list[AlertItem]:
    """Low-stock, expiring and expired products, soonest expiry first."""
    return [AlertItem.build(p, inventory.labels_of(p)) for p in inventory.alerts()]
