"""Product table endpoints."""

from fastapi import APIRouter, Query, Response, status

from stock_manager.api.deps import Inventory
from stock_manager.schemas.inventory import ALL_CATEGORIES, ProductView, SortField, SortOrder
from stock_manager.schemas.product import Product, ProductDraft

router = APIRouter()


@router.get("", response_model=list[ProductView])
async def list_products(
    inventory: Inventory,
    search: str = Query(default="", description="Case-insensitive name filter"),
    category: str = Query(default=ALL_CATEGORIES, description="Exact category or 'All'"),
    sort_field: SortField = Query(default=SortField.EXPIRY),
    sort_order: SortOrder = Query(default=SortOrder.ASC),
) -> list[ProductView]:
    """Search, filter and sort the product table."""
    products = inventory.browse(search, category, sort_field, sort_order)
    return [ProductView.build(p, inventory.status_of(p)) for p in products]


@router.get("/{product_id}", response_model=ProductView)
async def get_product(product_id: str, inventory: Inventory) -> ProductView:
    product = inventory.get_product(product_id)
    return ProductView.build(product, inventory.status_of(product))


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(draft: ProductDraft, inventory: Inventory) -> Product:
    return await inventory.add_product(draft)


@router.put("/{product_id}", response_model=Product)
async def update_product(product_id: str, draft: ProductDraft, inventory: Inventory) -> Product:
    return await inventory.update_product(product_id, draft)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, inventory: Inventory) -> Response:
    await inventory.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
