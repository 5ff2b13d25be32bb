"""
Onboarding workflow: needs_family -> needs_members -> complete.

State is derived from the identity's member row on every call; nothing about
the workflow is kept server-side besides the family link and the
onboarding_completed flag.
"""

import logging
from supabase import Client
from app.config.settings import settings
from app.database.supabase_client import is_unique_violation
from app.modules.families.service import FamilyService
from app.modules.onboarding.schemas import (
    OnboardingStatus, OnboardingFamilyResponse, OnboardingFinishResponse, OnboardingCompleteResponse
)
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

STEP_PATHS = {
    "needs_family": "/onboarding/family",
    "needs_members": "/onboarding/members",
    "complete": "/dashboard",
}


def onboarding_state(member: Optional[dict]) -> str:
    # A completed flag without a family still needs a family
    if not member or not member.get("family_id"):
        return "needs_family"
    if member.get("onboarding_completed"):
        return "complete"
    return "needs_members"


class OnboardingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.families = FamilyService(supabase)

    def get_status(self, email: str) -> OnboardingStatus:
        member = self.families.get_member_by_email(email)
        state = onboarding_state(member)
        family_id = member.get("family_id") if member else None
        return OnboardingStatus(
            state=state,
            completed=bool(member and member.get("onboarding_completed")),
            has_family=bool(family_id),
            family_id=family_id,
            member_count=self.families.count_members(family_id) if family_id else 0,
            next=STEP_PATHS[state],
        )

    def create_family(self, email: str, user_name: str, family_name: str) -> OnboardingFamilyResponse:
        """
        Step 1. Create the family and link the identity to it as a parent.
        Coming back to this step before finishing renames the family instead
        of creating a second one.
        """
        member = self.families.get_member_by_email(email)
        state = onboarding_state(member)

        if state == "complete":
            raise HTTPException(status_code=409, detail="Onboarding already completed")

        if state == "needs_members":
            family = self.families.rename_family(member["family_id"], family_name)
            logger.info(f"Onboarding: {email} renamed family {family.id} to {family_name}")
            return OnboardingFamilyResponse(family_id=family.id, name=family.name)

        family = self.families.create_family(family_name)
        try:
            if member:
                self._link(email, family["id"])
            else:
                self.supabase.table("users").insert({
                    "family_id": family["id"],
                    "email": email,
                    "name": user_name,
                    "role": "parent",
                    "onboarding_completed": False
                }).execute()
        except HTTPException:
            raise
        except Exception as e:
            if not is_unique_violation(e):
                logger.error(f"Onboarding: error linking {email} to family {family['id']}: {e}")
                raise HTTPException(status_code=500, detail=str(e))
            # Row appeared since the lookup; just point it at the new family
            self._link(email, family["id"])

        logger.info(f"Onboarding: {email} created family {family['id']}")
        return OnboardingFamilyResponse(family_id=family["id"], name=family["name"])

    def _link(self, email: str, family_id: str) -> None:
        """Attach an existing member row to the new family as a parent that has not finished onboarding"""
        try:
            self.supabase.table("users")\
                .update({"family_id": family_id, "role": "parent", "onboarding_completed": False})\
                .eq("email", email)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def finish(self, email: str) -> OnboardingFinishResponse:
        """Step 2 -> complete. Requires the family to have at least min_family_members members."""
        member = self.families.get_member_by_email(email)
        if onboarding_state(member) == "needs_family":
            raise HTTPException(
                status_code=409,
                detail={"message": "Please set up your family first.", "next": "/onboarding/family"}
            )

        if self.families.count_members(member["family_id"]) < settings.min_family_members:
            raise HTTPException(
                status_code=400,
                detail="Please add at least one family member to continue."
            )

        try:
            self.supabase.table("users")\
                .update({"onboarding_completed": True})\
                .eq("email", email)\
                .execute()
        except Exception as e:
            logger.error(f"Onboarding: error completing for {email}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(f"Onboarding completed for {email}")
        return OnboardingFinishResponse()

    def complete_info(self) -> OnboardingCompleteResponse:
        return OnboardingCompleteResponse(
            message="Your family is ready to start coordinating chores, meals, and shopping together.",
            redirect_after_seconds=settings.onboarding_redirect_seconds,
        )
