"""FastAPI application entry point.

Stock manager service: product table, dashboard, category manager and
remote connection settings over a local-first persistence gateway.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stock_manager import __version__
from stock_manager.config import settings
from stock_manager.core.errors import ProductNotFound, ValidationError
from stock_manager.infra.local_store import LocalStore
from stock_manager.infra.logging import get_logger, setup_logging
from stock_manager.schemas.common import ErrorResponse
from stock_manager.services.gateway import PersistenceGateway
from stock_manager.services.inventory_service import InventoryService

from stock_manager.api.routes.categories import router as categories_router
from stock_manager.api.routes.connection import router as connection_router
from stock_manager.api.routes.dashboard import router as dashboard_router
from stock_manager.api.routes.health import router as health_router
from stock_manager.api.routes.products import router as products_router

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Open the local store and connect any stored remote credentials
    - Load the inventory session

    Shutdown:
    - Close the remote HTTP client
    """
    logger.info(
        "Stock manager starting",
        environment=settings.environment,
        local_storage_path=settings.local_storage_path,
    )

    gateway = PersistenceGateway(LocalStore(settings.local_storage_path))
    inventory = InventoryService(gateway)
    await inventory.load()
    app.state.inventory = inventory

    yield

    logger.info("Stock manager shutting down")
    await gateway.close()
    logger.info("Cleanup complete")


app = FastAPI(
    title="Stock Manager",
    description="Local-first inventory tracking with optional remote sync",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url=None,
)

# CORS middleware (mainly for local development)
if settings.environment == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Render a rejected user action as a message the client can show."""
    logger.info("Action rejected", reason=str(exc), path=request.url.path)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(ProductNotFound)
async def product_not_found_handler(request: Request, exc: ProductNotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            error_type=type(exc).__name__,
        ).model_dump(),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(products_router, prefix="/products", tags=["Products"])
app.include_router(categories_router, prefix="/categories", tags=["Categories"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(connection_router, prefix="/connection", tags=["Connection"])


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Stock Manager",
        "version": __version__,
        "environment": settings.environment,
    }
