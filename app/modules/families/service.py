import logging
import re
import uuid
from supabase import Client
from app.config.settings import settings
from app.database.supabase_client import is_unique_violation
from app.modules.families.schemas import (
    FamilyResponse, FamilyWithMembersResponse, MemberCreate, MemberUpdate, MemberResponse
)
from typing import List, Optional, Tuple
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def placeholder_email(name: str) -> str:
    """
    Email for members who never sign in: lowercased name without whitespace
    plus a short random tag, so the same name can be added to several families.
    """
    local_part = re.sub(r"\s+", "", name.lower())
    return f"{local_part}.{uuid.uuid4().hex[:8]}@{settings.placeholder_email_domain}"


class FamilyService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_member_by_email(self, email: str) -> Optional[dict]:
        """Member row linked to an auth identity, or None"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("email", email)\
                .limit(1)\
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error looking up member {email}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_member(self, family_id: str, member_id: str) -> dict:
        """Member row by ID, only if it belongs to the family"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", member_id)\
                .eq("family_id", family_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Family member not found")

            return result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_family(self, name: str) -> dict:
        """Insert a family row"""
        try:
            result = self.supabase.table("families").insert({"name": name}).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create family")

            logger.info(f"Created family {result.data[0]['id']} ({name})")
            return result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating family: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _delete_family_row(self, family_id: str) -> None:
        try:
            self.supabase.table("families").delete().eq("id", family_id).execute()
        except Exception as e:
            logger.error(f"Error removing orphan family {family_id}: {e}")

    def get_or_create_family_id(self, email: str, name: str) -> Tuple[str, bool]:
        """
        Resolve the family for an identity, creating a default family and a
        parent member row on first use. Returns (family_id, created).

        Concurrent first calls for the same email converge: the member insert
        is guarded by the unique email constraint, and the loser removes the
        family it created and adopts the winner's.
        """
        member = self.get_member_by_email(email)
        if member and member.get("family_id"):
            return member["family_id"], False

        family = self.create_family(settings.default_family_name)

        if member:
            # Row exists but was never linked to a family; it restarts onboarding
            try:
                self.supabase.table("users")\
                    .update({"family_id": family["id"], "role": "parent", "onboarding_completed": False})\
                    .eq("id", member["id"])\
                    .execute()
            except Exception as e:
                self._delete_family_row(family["id"])
                raise HTTPException(status_code=500, detail=str(e))

            # A concurrent link may have overwritten ours; the last write wins
            linked = self.get_member_by_email(email)
            if linked and linked.get("family_id") and linked["family_id"] != family["id"]:
                self._delete_family_row(family["id"])
                logger.info(f"Provisioning race for {email}; adopting family {linked['family_id']}")
                return linked["family_id"], False

            logger.info(f"Linked existing member {email} to new family {family['id']}")
            return family["id"], True

        try:
            self.supabase.table("users").insert({
                "family_id": family["id"],
                "email": email,
                "name": name,
                "role": "parent",
                "onboarding_completed": False
            }).execute()
        except Exception as e:
            self._delete_family_row(family["id"])
            if not is_unique_violation(e):
                logger.error(f"Error provisioning family for {email}: {e}")
                raise HTTPException(status_code=500, detail=str(e))
            logger.info(f"Provisioning race for {email}; adopting existing family")
            winner = self.get_member_by_email(email)
            if not winner or not winner.get("family_id"):
                raise HTTPException(status_code=500, detail="Failed to provision family")
            return winner["family_id"], False

        logger.info(f"Provisioned family {family['id']} for {email}")
        return family["id"], True

    def get_family(self, family_id: str) -> FamilyResponse:
        """Get family by ID"""
        try:
            result = self.supabase.table("families")\
                .select("*")\
                .eq("id", family_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Family not found")

            return FamilyResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_family_with_members(self, family_id: str) -> FamilyWithMembersResponse:
        family = self.get_family(family_id)
        return FamilyWithMembersResponse(**family.model_dump(), members=self.list_members(family_id))

    def rename_family(self, family_id: str, name: str) -> FamilyResponse:
        """Rename family"""
        try:
            result = self.supabase.table("families")\
                .update({"name": name})\
                .eq("id", family_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Family not found")

            return FamilyResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_members(self, family_id: str) -> List[MemberResponse]:
        """List all members of a family, oldest first"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("family_id", family_id)\
                .order("created_at", desc=False)\
                .execute()

            return [MemberResponse(**member) for member in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def count_members(self, family_id: str) -> int:
        return len(self.list_members(family_id))

    def add_member(self, family_id: str, member_data: MemberCreate) -> MemberResponse:
        """Add a member to the family. Members added by a parent skip onboarding."""
        try:
            result = self.supabase.table("users").insert({
                "family_id": family_id,
                "name": member_data.name,
                "role": member_data.role,
                "email": member_data.email or placeholder_email(member_data.name),
                "onboarding_completed": True
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add member")

            logger.info(f"Added {member_data.role} {member_data.name} to family {family_id}")
            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=409, detail="A member with this email already exists")
            raise HTTPException(status_code=500, detail=str(e))

    def update_member(self, family_id: str, member_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Update member name and/or role"""
        self.get_member(family_id, member_id)
        try:
            update_data = {}
            if member_data.name is not None:
                update_data["name"] = member_data.name
            if member_data.role is not None:
                update_data["role"] = member_data.role

            if not update_data:
                return MemberResponse(**self.get_member(family_id, member_id))

            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", member_id)\
                .eq("family_id", family_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Family member not found")

            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_member(self, family_id: str, member_id: str) -> bool:
        """
        Delete a member. Chores assigned to the member are unassigned first so
        no chore keeps pointing at a removed person. No self-deletion check
        here; callers acting for a signed-in member must guard that.
        """
        self.get_member(family_id, member_id)
        try:
            self.supabase.table("chores")\
                .update({"assigned_to": None})\
                .eq("family_id", family_id)\
                .eq("assigned_to", member_id)\
                .execute()

            result = self.supabase.table("users")\
                .delete()\
                .eq("id", member_id)\
                .eq("family_id", family_id)\
                .execute()

            logger.info(f"Removed member {member_id} from family {family_id}")
            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Error removing member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
