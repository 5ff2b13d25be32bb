import logging
from datetime import datetime, timezone
from supabase import Client
from app.modules.chores.schemas import (
    ChoreCreate, ChoreUpdate, ChoreResponse, ChoreCounts, ChoreListResponse
)
from typing import Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def is_completed(chore: dict) -> bool:
    return chore.get("status") == "completed"


def filter_chores(chores: List[dict], chore_filter: str = "all") -> List[dict]:
    """Partition in memory: open is everything not completed."""
    if chore_filter == "open":
        return [c for c in chores if not is_completed(c)]
    if chore_filter == "completed":
        return [c for c in chores if is_completed(c)]
    return list(chores)


def count_chores(chores: List[dict]) -> ChoreCounts:
    completed = sum(1 for c in chores if is_completed(c))
    return ChoreCounts(all=len(chores), open=len(chores) - completed, completed=completed)


def status_fields(status: str, now: Optional[datetime] = None) -> dict:
    """Fields to write for a status change; completed_at is set iff completed."""
    if status == "completed":
        return {"status": status, "completed_at": (now or datetime.now(timezone.utc)).isoformat()}
    return {"status": status, "completed_at": None}


class ChoreService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _member_names(self, family_id: str) -> Dict[str, str]:
        result = self.supabase.table("users")\
            .select("id, name")\
            .eq("family_id", family_id)\
            .execute()
        return {m["id"]: m["name"] for m in (result.data or [])}

    def _ensure_assignee(self, family_id: str, member_id: Optional[str]) -> None:
        if member_id is None:
            return
        try:
            result = self.supabase.table("users")\
                .select("id")\
                .eq("id", member_id)\
                .eq("family_id", family_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=400, detail="Assignee is not a member of this family")

    def list_chores(self, family_id: str, chore_filter: str = "all") -> ChoreListResponse:
        """All chores of the family, newest first, with assignee names and filter counts"""
        try:
            result = self.supabase.table("chores")\
                .select("*")\
                .eq("family_id", family_id)\
                .order("created_at", desc=True)\
                .execute()
            chores = result.data or []
            names = self._member_names(family_id)
        except Exception as e:
            logger.error(f"Error loading chores for family {family_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        items = [
            ChoreResponse(**chore, assignee_name=names.get(chore.get("assigned_to")))
            for chore in filter_chores(chores, chore_filter)
        ]
        return ChoreListResponse(filter=chore_filter, items=items, counts=count_chores(chores))

    def get_chore(self, family_id: str, chore_id: str) -> dict:
        try:
            result = self.supabase.table("chores")\
                .select("*")\
                .eq("id", chore_id)\
                .eq("family_id", family_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Chore not found")

            return result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_chore(self, family_id: str, chore_data: ChoreCreate) -> ChoreListResponse:
        """Insert an open chore, then reload"""
        self._ensure_assignee(family_id, chore_data.assigned_to)
        try:
            result = self.supabase.table("chores").insert({
                "family_id": family_id,
                "title": chore_data.title,
                "description": chore_data.description,
                "assigned_to": chore_data.assigned_to,
                "points": chore_data.points,
                "due_date": chore_data.due_date.isoformat() if chore_data.due_date else None,
                "status": "open",
                "completed_at": None
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add chore")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding chore: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return self.list_chores(family_id)

    def update_chore(self, family_id: str, chore_id: str, chore_data: ChoreUpdate) -> ChoreListResponse:
        """Update fields; a status change keeps completed_at consistent"""
        chore = self.get_chore(family_id, chore_id)
        fields = chore_data.model_fields_set

        update_data = {}
        if chore_data.title is not None:
            update_data["title"] = chore_data.title
        if "description" in fields:
            update_data["description"] = (chore_data.description or "").strip() or None
        if "assigned_to" in fields:
            assignee = (chore_data.assigned_to or "").strip() or None
            self._ensure_assignee(family_id, assignee)
            update_data["assigned_to"] = assignee
        if chore_data.points is not None:
            update_data["points"] = chore_data.points
        if "due_date" in fields:
            update_data["due_date"] = chore_data.due_date.isoformat() if chore_data.due_date else None
        if chore_data.status is not None and chore_data.status != chore.get("status"):
            update_data.update(status_fields(chore_data.status))

        if update_data:
            self._write(family_id, chore_id, update_data)
        return self.list_chores(family_id)

    def toggle_chore(self, family_id: str, chore_id: str) -> ChoreListResponse:
        """completed -> open, anything else -> completed"""
        chore = self.get_chore(family_id, chore_id)
        new_status = "open" if is_completed(chore) else "completed"
        self._write(family_id, chore_id, status_fields(new_status))
        return self.list_chores(family_id)

    def _write(self, family_id: str, chore_id: str, update_data: dict) -> None:
        try:
            result = self.supabase.table("chores")\
                .update(update_data)\
                .eq("id", chore_id)\
                .eq("family_id", family_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Chore not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating chore {chore_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_chore(self, family_id: str, chore_id: str) -> ChoreListResponse:
        self.get_chore(family_id, chore_id)
        try:
            self.supabase.table("chores")\
                .delete()\
                .eq("id", chore_id)\
                .eq("family_id", family_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting chore {chore_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(f"Deleted chore {chore_id} from family {family_id}")
        return self.list_chores(family_id)
