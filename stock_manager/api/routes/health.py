"""Health check endpoints."""

from fastapi import APIRouter

from stock_manager import __version__
from stock_manager.api.deps import Inventory
from stock_manager.config import settings
from stock_manager.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check. Returns 200 if the service is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(inventory: Inventory) -> HealthResponse:
    """Readiness check.

    The local store must be readable. A missing remote connection is
    reported but does not degrade the service (local-only mode).
    """
    checks = {
        "local_storage": inventory.gateway.local.is_readable(),
        "remote_connected": inventory.is_connected(),
    }
    return HealthResponse(
        status="healthy" if checks["local_storage"] else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
