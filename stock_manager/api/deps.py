"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from stock_manager.services.inventory_service import InventoryService


def get_inventory_service(request: Request) -> InventoryService:
    """Get the session inventory created during application startup."""
    return request.app.state.inventory


# Type alias for cleaner annotations
Inventory = Annotated[InventoryService, Depends(get_inventory_service)]
