from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.shopping.schemas import (
    ShoppingItemCreate, ShoppingItemUpdate, ShoppingFilter, ShoppingListResponse
)
from app.modules.shopping.service import ShoppingService
from app.core.dependencies import FamilyContext, get_provisioned_family_context
from supabase import Client

router = APIRouter(prefix="/shopping", tags=["shopping"])


def get_shopping_service(supabase: Client = Depends(get_supabase)) -> ShoppingService:
    return ShoppingService(supabase)


@router.get("", response_model=ShoppingListResponse)
async def list_items(
    filter: ShoppingFilter = "all",
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    """List shopping items (filter: all, needed, purchased)"""
    return service.list_items(context.family_id, filter)


@router.post("", response_model=ShoppingListResponse, status_code=201)
async def add_item(
    item_data: ShoppingItemCreate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    return service.add_item(context.family_id, item_data)


@router.post("/clear-purchased", response_model=ShoppingListResponse)
async def clear_purchased(
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    """Remove every purchased item (the client confirms first)"""
    return service.clear_purchased(context.family_id)


@router.put("/{item_id}", response_model=ShoppingListResponse)
async def update_item(
    item_id: str,
    item_data: ShoppingItemUpdate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    return service.update_item(context.family_id, item_id, item_data)


@router.post("/{item_id}/toggle", response_model=ShoppingListResponse)
async def toggle_item(
    item_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    """Check or uncheck an item"""
    return service.toggle_item(context.family_id, item_id)


@router.delete("/{item_id}", response_model=ShoppingListResponse)
async def delete_item(
    item_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ShoppingService = Depends(get_shopping_service)
):
    return service.delete_item(context.family_id, item_id)
