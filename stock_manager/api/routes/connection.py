"""Remote connection settings endpoints."""

from fastapi import APIRouter, Response, status

from stock_manager.api.deps import Inventory
from stock_manager.infra.logging import get_logger
from stock_manager.schemas.connection import ConnectionRequest, ConnectionStatus, SyncResult

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=ConnectionStatus)
async def connection_status(inventory: Inventory) -> ConnectionStatus:
    return ConnectionStatus(
        connected=inventory.is_connected(),
        url=inventory.gateway.remote_url,
    )


@router.put("", response_model=SyncResult)
async def connect(payload: ConnectionRequest, inventory: Inventory) -> SyncResult:
    """Save credentials and push local data to the new remote store."""
    result = await inventory.connect(payload.url, payload.key)
    logger.info(
        "Remote connection updated",
        connected=inventory.is_connected(),
        sync_errors=len(result.errors),
    )
    return result


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def disconnect(inventory: Inventory) -> Response:
    await inventory.disconnect()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
