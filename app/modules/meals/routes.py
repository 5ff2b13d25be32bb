from fastapi import APIRouter, Depends, Path
from app.database.supabase_client import get_supabase
from app.modules.meals.schemas import MealType, MealSlotSave, MealPlanResponse
from app.modules.meals.service import MealService
from app.core.dependencies import FamilyContext, get_provisioned_family_context
from supabase import Client

router = APIRouter(prefix="/meals", tags=["meals"])


def get_meal_service(supabase: Client = Depends(get_supabase)) -> MealService:
    return MealService(supabase)


@router.get("", response_model=MealPlanResponse)
async def get_plan(
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: MealService = Depends(get_meal_service)
):
    """Weekly plan: Sunday..Saturday x breakfast, lunch, dinner"""
    return service.get_plan(context.family_id)


@router.put("/slots/{day_of_week}/{meal_type}", response_model=MealPlanResponse)
async def save_slot(
    meal_data: MealSlotSave,
    meal_type: MealType,
    day_of_week: int = Path(..., ge=0, le=6),
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: MealService = Depends(get_meal_service)
):
    """Plan a meal for a cell (updates the existing slot if there is one)"""
    return service.save_slot(context.family_id, day_of_week, meal_type, meal_data)


@router.delete("/slots/{day_of_week}/{meal_type}", response_model=MealPlanResponse)
async def clear_slot(
    meal_type: MealType,
    day_of_week: int = Path(..., ge=0, le=6),
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: MealService = Depends(get_meal_service)
):
    """Remove the meal planned for a cell"""
    return service.clear_slot(context.family_id, day_of_week, meal_type)


@router.delete("/{slot_id}", response_model=MealPlanResponse)
async def delete_slot(
    slot_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: MealService = Depends(get_meal_service)
):
    return service.delete_slot(context.family_id, slot_id)
