from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Literal
from datetime import datetime

MealType = Literal["breakfast", "lunch", "dinner"]

DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MEAL_TYPES = ("breakfast", "lunch", "dinner")


class MealSlotSave(BaseModel):
    meal_name: Optional[str] = None
    recipe_notes: Optional[str] = None

    @field_validator("meal_name", "recipe_notes")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class MealSlotResponse(BaseModel):
    id: str
    family_id: str
    day_of_week: int
    meal_type: MealType
    meal_name: Optional[str] = None
    recipe_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealDay(BaseModel):
    day_of_week: int
    day_name: str
    meals: Dict[str, Optional[MealSlotResponse]]


class MealPlanResponse(BaseModel):
    slots: List[MealSlotResponse]
    week: List[MealDay]
    total_planned: int
