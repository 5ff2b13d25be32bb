import logging
from supabase import Client
from app.modules.meals.schemas import (
    DAYS, MEAL_TYPES, MealSlotSave, MealSlotResponse, MealDay, MealPlanResponse
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def find_slot(slots: List[dict], day_of_week: int, meal_type: str) -> Optional[dict]:
    """The slot already planned for a (day, meal type) cell, if any."""
    for slot in slots:
        if slot.get("day_of_week") == day_of_week and slot.get("meal_type") == meal_type:
            return slot
    return None


def build_week(slots: List[dict]) -> List[MealDay]:
    week = []
    for day_index, day_name in enumerate(DAYS):
        meals = {}
        for meal_type in MEAL_TYPES:
            slot = find_slot(slots, day_index, meal_type)
            meals[meal_type] = MealSlotResponse(**slot) if slot else None
        week.append(MealDay(day_of_week=day_index, day_name=day_name, meals=meals))
    return week


class MealService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _load_slots(self, family_id: str) -> List[dict]:
        try:
            result = self.supabase.table("meal_slots")\
                .select("*")\
                .eq("family_id", family_id)\
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error loading meals for family {family_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_plan(self, family_id: str) -> MealPlanResponse:
        slots = self._load_slots(family_id)
        return MealPlanResponse(
            slots=[MealSlotResponse(**slot) for slot in slots],
            week=build_week(slots),
            total_planned=len(slots),
        )

    def save_slot(self, family_id: str, day_of_week: int, meal_type: str, meal_data: MealSlotSave) -> MealPlanResponse:
        """Update the cell's slot when one is planned, otherwise insert one"""
        existing = find_slot(self._load_slots(family_id), day_of_week, meal_type)
        values = {
            "meal_name": meal_data.meal_name,
            "recipe_notes": meal_data.recipe_notes,
        }
        try:
            if existing:
                self.supabase.table("meal_slots")\
                    .update(values)\
                    .eq("id", existing["id"])\
                    .execute()
            else:
                self.supabase.table("meal_slots").insert({
                    "family_id": family_id,
                    "day_of_week": day_of_week,
                    "meal_type": meal_type,
                    **values
                }).execute()
        except Exception as e:
            logger.error(f"Error saving meal {DAYS[day_of_week]} {meal_type}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save meal: {e}")

        return self.get_plan(family_id)

    def clear_slot(self, family_id: str, day_of_week: int, meal_type: str) -> MealPlanResponse:
        existing = find_slot(self._load_slots(family_id), day_of_week, meal_type)
        if not existing:
            raise HTTPException(status_code=404, detail="No meal planned for this slot")
        return self.delete_slot(family_id, existing["id"])

    def delete_slot(self, family_id: str, slot_id: str) -> MealPlanResponse:
        try:
            result = self.supabase.table("meal_slots")\
                .delete()\
                .eq("id", slot_id)\
                .eq("family_id", family_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting meal slot {slot_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete meal: {e}")

        if not result.data:
            raise HTTPException(status_code=404, detail="Meal slot not found")
        return self.get_plan(family_id)
