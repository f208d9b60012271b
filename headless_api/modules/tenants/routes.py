from fastapi import APIRouter, Depends
from headless_api.database.supabase_client import get_supabase
from headless_api.modules.tenants.schemas import ServiceCreate, ServiceCreatedResponse, ServiceResponse
from headless_api.modules.tenants.service import TenantService
from headless_api.core.dependencies import require_session, check_service_owner, SessionContext
from supabase import Client

router = APIRouter(tags=["services"])


def get_tenant_service(supabase: Client = Depends(get_supabase)) -> TenantService:
    return TenantService(supabase)


@router.post("/service", response_model=ServiceCreatedResponse, status_code=201)
async def create_service(
    service_data: ServiceCreate,
    session: SessionContext = Depends(require_session),
    service: TenantService = Depends(get_tenant_service)
):
    """Create a service (tenant); the API key is only returned here"""
    return service.create_service(session.user_id, service_data)


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    session: SessionContext = Depends(require_session),
    supabase: Client = Depends(get_supabase)
):
    """Service details for its owner; the API key is not returned again"""
    row = check_service_owner(service_id, session, supabase)
    return ServiceResponse(service_id=row["id"], name=row["name"])


@router.delete("/services/{service_id}", status_code=204)
async def delete_service(
    service_id: str,
    session: SessionContext = Depends(require_session),
    service: TenantService = Depends(get_tenant_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a service with its roles, content types and content items"""
    check_service_owner(service_id, session, supabase)
    service.delete_service(service_id)
    return None
