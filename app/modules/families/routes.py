from fastapi import APIRouter, Depends, HTTPException, status
from app.modules.auth.service import display_name
from app.modules.families.schemas import (
    FamilyUpdate, FamilyResponse, FamilyWithMembersResponse,
    MemberCreate, MemberUpdate, MemberResponse, ProvisionResponse
)
from app.modules.families.service import FamilyService
from app.core.dependencies import (
    FamilyContext, get_current_user_id, get_provisioned_family_context, get_family_service
)
from typing import List, Dict

router = APIRouter(prefix="/families", tags=["families"])


@router.post("/provision", response_model=ProvisionResponse)
async def provision_family(
    user_data: Dict = Depends(get_current_user_id),
    service: FamilyService = Depends(get_family_service)
):
    """Get or create the family for the current identity (idempotent)"""
    family_id, created = service.get_or_create_family_id(
        user_data["email"], display_name(user_data, fallback="Parent")
    )
    return ProvisionResponse(family_id=family_id, created=created)


@router.get("/me", response_model=FamilyWithMembersResponse)
async def get_my_family(
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """Get the current family with its members"""
    return service.get_family_with_members(context.family_id)


@router.put("/me", response_model=FamilyResponse)
async def rename_family(
    family_data: FamilyUpdate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """Rename the current family"""
    return service.rename_family(context.family_id, family_data.name)


@router.get("/me/members", response_model=List[MemberResponse])
async def list_members(
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """List members ordered by creation"""
    return service.list_members(context.family_id)


@router.post("/me/members", response_model=List[MemberResponse], status_code=201)
async def add_member(
    member_data: MemberCreate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """Add a member and return the reloaded member list"""
    service.add_member(context.family_id, member_data)
    return service.list_members(context.family_id)


@router.put("/me/members/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    member_data: MemberUpdate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """Update a member's name or role"""
    return service.update_member(context.family_id, member_id, member_data)


@router.delete("/me/members/{member_id}", response_model=List[MemberResponse])
async def remove_member(
    member_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: FamilyService = Depends(get_family_service)
):
    """Remove a member (never the acting identity); their chores become unassigned"""
    if member_id == context.member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot remove yourself from the family"
        )
    service.delete_member(context.family_id, member_id)
    return service.list_members(context.family_id)
