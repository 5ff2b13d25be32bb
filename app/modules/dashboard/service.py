import logging
from datetime import date, datetime, timezone
from supabase import Client
from app.modules.dashboard.schemas import DashboardStats
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def _parse_timestamp(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def completed_on(chores: List[dict], day: date) -> int:
    """Chores whose completed_at falls on the given UTC date"""
    count = 0
    for chore in chores:
        completed_at = _parse_timestamp(chore.get("completed_at"))
        if completed_at is None:
            continue
        if completed_at.tzinfo is not None:
            completed_at = completed_at.astimezone(timezone.utc)
        if completed_at.date() == day:
            count += 1
    return count


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_stats(self, family_id: str, today: Optional[date] = None) -> DashboardStats:
        today = today or datetime.now(timezone.utc).date()
        try:
            chores = self.supabase.table("chores")\
                .select("status, completed_at")\
                .eq("family_id", family_id)\
                .execute().data or []

            shopping = self.supabase.table("shopping_items")\
                .select("checked")\
                .eq("family_id", family_id)\
                .execute().data or []

            meals = self.supabase.table("meal_slots")\
                .select("id")\
                .eq("family_id", family_id)\
                .execute().data or []
        except Exception as e:
            logger.error(f"Error loading stats for family {family_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return DashboardStats(
            total_chores=len(chores),
            open_chores=sum(1 for c in chores if c.get("status") != "completed"),
            completed_today=completed_on(chores, today),
            shopping_items=sum(1 for i in shopping if not i.get("checked")),
            meals_planned=len(meals),
        )
