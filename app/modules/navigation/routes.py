from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from app.database.supabase_client import get_supabase
from app.modules.navigation.service import normalize_path, resolve_redirect
from app.modules.onboarding.service import OnboardingService
from app.core.dependencies import get_optional_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/navigation", tags=["navigation"])


class RouteDecision(BaseModel):
    path: str
    allowed: bool
    redirect: Optional[str] = None


@router.get("/resolve", response_model=RouteDecision)
async def resolve(
    path: str,
    user_data: Optional[Dict] = Depends(get_optional_user),
    supabase: Client = Depends(get_supabase)
):
    """Check a page against the sign-in and onboarding guards"""
    status = OnboardingService(supabase).get_status(user_data["email"]) if user_data else None
    try:
        redirect = resolve_redirect(path, status)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown page: {path}")
    return RouteDecision(path=normalize_path(path), allowed=redirect is None, redirect=redirect)
