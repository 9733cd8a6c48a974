"""
Inventory item API routes.

This module provides endpoints for:
- GET /api/items - List items of the effective inventory
- POST /api/items - Add an item to the effective inventory

The inventory is always the one of context.stock_user, which is the
owner's inventory when the current user is the accepted target of a share.
"""

from fastapi import APIRouter, status

from src.api.dependencies import CurrentStockContext, StockItemRepositoryDep
from src.models.item import StockItem
from src.schemas.item import StockItemCreate, StockItemResponse

router = APIRouter(prefix="/items", tags=["Items"])


@router.get(
    "",
    response_model=list[StockItemResponse],
    summary="List inventory items",
)
async def list_items(
    context: CurrentStockContext,
    item_repo: StockItemRepositoryDep,
) -> list[StockItemResponse]:
    """List the items of the effective inventory, alphabetically."""
    items = await item_repo.list_by_user(context.stock_user.id)
    return [StockItemResponse.model_validate(item) for item in items]


@router.post(
    "",
    response_model=StockItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an inventory item",
)
async def create_item(
    item_data: StockItemCreate,
    context: CurrentStockContext,
    item_repo: StockItemRepositoryDep,
) -> StockItemResponse:
    """
    Add an item to the effective inventory.

    Args:
        item_data: Item fields
        context: Resolved stock context
        item_repo: Item repository dependency

    Returns:
        Created item
    """
    item = await item_repo.add(
        StockItem(
            user_id=context.stock_user.id,
            name=item_data.name,
            target_quantity=item_data.target_quantity,
            current_quantity=item_data.current_quantity,
            unit=item_data.unit,
        )
    )
    return StockItemResponse.model_validate(item)
