from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.service import display_name
from app.modules.dashboard.schemas import DashboardResponse, DashboardUser
from app.modules.dashboard.service import DashboardService
from app.modules.families.service import FamilyService
from app.core.dependencies import FamilyContext, get_provisioned_family_context, get_family_service
from supabase import Client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    context: FamilyContext = Depends(get_provisioned_family_context),
    service: DashboardService = Depends(get_dashboard_service),
    families: FamilyService = Depends(get_family_service)
):
    """Greeting data and quick stats for the family"""
    family = families.get_family(context.family_id)
    return DashboardResponse(
        user=DashboardUser(email=context.email, name=display_name(context.identity)),
        family_id=context.family_id,
        family_name=family.name,
        stats=service.get_stats(context.family_id),
    )
