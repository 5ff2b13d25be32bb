from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.modules.auth.service import display_name
from app.modules.families.schemas import MemberCreate, MemberResponse
from app.modules.families.service import FamilyService
from app.modules.onboarding.schemas import (
    OnboardingStatus, OnboardingFamilyCreate, OnboardingFamilyResponse,
    OnboardingFinishResponse, OnboardingCompleteResponse
)
from app.modules.onboarding.service import OnboardingService
from app.core.dependencies import (
    FamilyContext, get_current_user_id, get_family_context, get_family_service
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def get_onboarding_service(supabase: Client = Depends(get_supabase)) -> OnboardingService:
    return OnboardingService(supabase)


@router.get("/status", response_model=OnboardingStatus)
async def get_status(
    user_data: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Where the current identity is in the onboarding sequence"""
    return service.get_status(user_data["email"])


@router.post("/family", response_model=OnboardingFamilyResponse, status_code=201)
async def create_family(
    family_data: OnboardingFamilyCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Step 1: name the family"""
    return service.create_family(user_data["email"], display_name(user_data), family_data.name)


@router.get("/members", response_model=List[MemberResponse])
async def list_members(
    context: FamilyContext = Depends(get_family_context),
    families: FamilyService = Depends(get_family_service)
):
    """Step 2: current members"""
    return families.list_members(context.family_id)


@router.post("/members", response_model=List[MemberResponse], status_code=201)
async def add_member(
    member_data: MemberCreate,
    context: FamilyContext = Depends(get_family_context),
    families: FamilyService = Depends(get_family_service)
):
    """Step 2: add a parent or child"""
    families.add_member(context.family_id, member_data)
    return families.list_members(context.family_id)


@router.delete("/members/{member_id}", response_model=List[MemberResponse])
async def remove_member(
    member_id: str,
    context: FamilyContext = Depends(get_family_context),
    families: FamilyService = Depends(get_family_service)
):
    """Step 2: remove someone added by mistake"""
    if member_id == context.member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot remove yourself from the family"
        )
    families.delete_member(context.family_id, member_id)
    return families.list_members(context.family_id)


@router.post("/finish", response_model=OnboardingFinishResponse)
async def finish(
    user_data: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Finish setup (needs at least two members)"""
    return service.finish(user_data["email"])


@router.get("/complete", response_model=OnboardingCompleteResponse)
async def complete(
    user_data: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Confirmation screen; the client moves on to the dashboard after the delay"""
    return service.complete_info()
