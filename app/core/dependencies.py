"""
Core dependencies for route protection and family scoping.

Every family-scoped route receives a FamilyContext built here instead of
looking the family up itself.
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService, display_name
from app.modules.families.service import FamilyService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


class FamilyContext(BaseModel):
    """Acting identity plus the family its member row belongs to."""
    identity: Dict[str, Any]
    member: Dict[str, Any]
    family_id: str

    @property
    def email(self) -> str:
        return self.identity["email"]

    @property
    def member_id(self) -> str:
        return self.member["id"]


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_family_service(supabase: Client = Depends(get_supabase)) -> FamilyService:
    return FamilyService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current identity from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Identity when a valid token is supplied, None otherwise (for public routes)."""
    if credentials is None:
        return None
    try:
        return auth_service.get_current_user(credentials.credentials)
    except HTTPException:
        return None


def get_family_context(
    user_data: Dict = Depends(get_current_user_id),
    family_service: FamilyService = Depends(get_family_service)
) -> FamilyContext:
    """Resolve the acting identity's family; 409 with a redirect hint when there is none yet."""
    member = family_service.get_member_by_email(user_data["email"])
    if not member or not member.get("family_id"):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Please set up your family first.",
                "next": "/onboarding/family",
            }
        )
    return FamilyContext(identity=user_data, member=member, family_id=member["family_id"])


def get_provisioned_family_context(
    user_data: Dict = Depends(get_current_user_id),
    family_service: FamilyService = Depends(get_family_service)
) -> FamilyContext:
    """Like get_family_context, but creates a default family on first use."""
    family_id, _ = family_service.get_or_create_family_id(
        user_data["email"], display_name(user_data, fallback="Parent")
    )
    member = family_service.get_member_by_email(user_data["email"])
    if not member:
        raise HTTPException(status_code=500, detail="Failed to resolve family member")
    return FamilyContext(identity=user_data, member=member, family_id=family_id)
