"""Services - persistence gateway and inventory session state."""

from stock_manager.services.gateway import PersistenceGateway, RemoteConnection
from stock_manager.services.inventory_service import InventoryService

__all__ = ["PersistenceGateway", "RemoteConnection", "InventoryService"]
