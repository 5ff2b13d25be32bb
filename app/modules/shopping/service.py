import logging
from supabase import Client
from app.modules.shopping.schemas import (
    ShoppingItemCreate, ShoppingItemUpdate, ShoppingItemResponse, ShoppingCounts, ShoppingListResponse
)
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def filter_items(items: List[dict], item_filter: str = "all") -> List[dict]:
    if item_filter == "needed":
        return [i for i in items if not i.get("checked")]
    if item_filter == "purchased":
        return [i for i in items if i.get("checked")]
    return list(items)


def count_items(items: List[dict]) -> ShoppingCounts:
    purchased = sum(1 for i in items if i.get("checked"))
    return ShoppingCounts(all=len(items), needed=len(items) - purchased, purchased=purchased)


class ShoppingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_items(self, family_id: str, item_filter: str = "all") -> ShoppingListResponse:
        """All items of the family, oldest first"""
        try:
            result = self.supabase.table("shopping_items")\
                .select("*")\
                .eq("family_id", family_id)\
                .order("created_at", desc=False)\
                .execute()
            items = result.data or []
        except Exception as e:
            logger.error(f"Error loading shopping items for family {family_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return ShoppingListResponse(
            filter=item_filter,
            items=[ShoppingItemResponse(**item) for item in filter_items(items, item_filter)],
            counts=count_items(items),
        )

    def get_item(self, family_id: str, item_id: str) -> dict:
        try:
            result = self.supabase.table("shopping_items")\
                .select("*")\
                .eq("id", item_id)\
                .eq("family_id", family_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Shopping item not found")

            return result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_item(self, family_id: str, item_data: ShoppingItemCreate) -> ShoppingListResponse:
        try:
            result = self.supabase.table("shopping_items").insert({
                "family_id": family_id,
                "name": item_data.name,
                "category": item_data.category,
                "checked": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add item")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding shopping item: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to add item: {e}")

        return self.list_items(family_id)

    def update_item(self, family_id: str, item_id: str, item_data: ShoppingItemUpdate) -> ShoppingListResponse:
        self.get_item(family_id, item_id)
        update_data = {}
        if item_data.name is not None:
            update_data["name"] = item_data.name
        if "category" in item_data.model_fields_set:
            update_data["category"] = (item_data.category or "").strip() or None
        if item_data.checked is not None:
            update_data["checked"] = item_data.checked

        if update_data:
            self._write(family_id, item_id, update_data)
        return self.list_items(family_id)

    def toggle_item(self, family_id: str, item_id: str) -> ShoppingListResponse:
        item = self.get_item(family_id, item_id)
        self._write(family_id, item_id, {"checked": not item.get("checked")})
        return self.list_items(family_id)

    def _write(self, family_id: str, item_id: str, update_data: dict) -> None:
        try:
            self.supabase.table("shopping_items")\
                .update(update_data)\
                .eq("id", item_id)\
                .eq("family_id", family_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating shopping item {item_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update item: {e}")

    def delete_item(self, family_id: str, item_id: str) -> ShoppingListResponse:
        self.get_item(family_id, item_id)
        try:
            self.supabase.table("shopping_items")\
                .delete()\
                .eq("id", item_id)\
                .eq("family_id", family_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting shopping item {item_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete item: {e}")

        return self.list_items(family_id)

    def clear_purchased(self, family_id: str) -> ShoppingListResponse:
        """Delete every checked item of the family"""
        try:
            result = self.supabase.table("shopping_items")\
                .delete()\
                .eq("family_id", family_id)\
                .eq("checked", True)\
                .execute()
        except Exception as e:
            logger.error(f"Error clearing purchased items for family {family_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to clear items: {e}")

        logger.info(f"Cleared {len(result.data or [])} purchased item(s) for family {family_id}")
        return self.list_items(family_id)
