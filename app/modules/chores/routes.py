from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.chores.schemas import ChoreCreate, ChoreUpdate, ChoreFilter, ChoreListResponse
from app.modules.chores.service import ChoreService
from app.core.dependencies import FamilyContext, get_provisioned_family_context
from supabase import Client

router = APIRouter(prefix="/chores", tags=["chores"])


def get_chore_service(supabase: Client = Depends(get_supabase)) -> ChoreService:
    return ChoreService(supabase)


@router.get("", response_model=ChoreListResponse)
async def list_chores(
    filter: ChoreFilter = "all",
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ChoreService = Depends(get_chore_service)
):
    """List chores (filter: all, open, completed). Creates a default family on first visit."""
    return service.list_chores(context.family_id, filter)


@router.post("", response_model=ChoreListResponse, status_code=201)
async def create_chore(
    chore_data: ChoreCreate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ChoreService = Depends(get_chore_service)
):
    """Add a chore and return the reloaded list"""
    return service.create_chore(context.family_id, chore_data)


@router.put("/{chore_id}", response_model=ChoreListResponse)
async def update_chore(
    chore_id: str,
    chore_data: ChoreUpdate,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ChoreService = Depends(get_chore_service)
):
    """Update a chore"""
    return service.update_chore(context.family_id, chore_id, chore_data)


@router.post("/{chore_id}/toggle", response_model=ChoreListResponse)
async def toggle_chore(
    chore_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ChoreService = Depends(get_chore_service)
):
    """Flip a chore between completed and open"""
    return service.toggle_chore(context.family_id, chore_id)


@router.delete("/{chore_id}", response_model=ChoreListResponse)
async def delete_chore(
    chore_id: str,
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: ChoreService = Depends(get_chore_service)
):
    """Delete a chore (the client confirms first)"""
    return service.delete_chore(context.family_id, chore_id)
