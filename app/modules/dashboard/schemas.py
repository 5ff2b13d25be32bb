from pydantic import BaseModel
from typing import Optional


class DashboardStats(BaseModel):
    total_chores: int = 0
    open_chores: int = 0
    completed_today: int = 0
    shopping_items: int = 0  # still needed (unchecked)
    meals_planned: int = 0


class DashboardUser(BaseModel):
    email: str
    name: Optional[str] = None


class DashboardResponse(BaseModel):
    user: DashboardUser
    family_id: str
    family_name: Optional[str] = None
    stats: DashboardStats
