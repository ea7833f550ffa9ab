"""Category manager endpoints.

Name collisions raise ValidationError, rendered as 409 by the app.
"""

from fastapi import APIRouter, Response, status

from stock_manager.api.deps import Inventory
from stock_manager.schemas.inventory import CategoryCreate, CategoryListing, CategoryRename

router = APIRouter()


@router.get("", response_model=CategoryListing)
async def list_categories(inventory: Inventory) -> CategoryListing:
    """Active categories, plus archived names still used by products."""
    return CategoryListing(
        categories=inventory.categories,
        archived=inventory.archived_categories(),
    )


@router.post("", response_model=CategoryListing, status_code=status.HTTP_201_CREATED)
async def add_category(payload: CategoryCreate, inventory: Inventory) -> CategoryListing:
    await inventory.add_category(payload.name)
    return await list_categories(inventory)


@router.put("/{name}", response_model=CategoryListing)
async def rename_category(name: str, payload: CategoryRename, inventory: Inventory) -> CategoryListing:
    await inventory.rename_category(name, payload.name)
    return await list_categories(inventory)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(name: str, inventory: Inventory) -> Response:
    await inventory.delete_category(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
