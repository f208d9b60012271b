from fastapi import APIRouter, Depends
from headless_api.database.supabase_client import get_supabase
from headless_api.modules.roles.schemas import RoleCreate, RoleResponse, RoleCreatedResponse
from headless_api.modules.roles.service import RoleService
from headless_api.core.dependencies import require_session, check_service_owner, SessionContext
from headless_api.config.permissions_config import get_permission_matrix
from supabase import Client
from typing import List

router = APIRouter(prefix="/services/{service_id}/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_supabase)) -> RoleService:
    return RoleService(supabase)


@router.post("", response_model=RoleCreatedResponse, status_code=201)
async def create_role(
    service_id: str,
    role_data: RoleCreate,
    session: SessionContext = Depends(require_session),
    service: RoleService = Depends(get_role_service),
    supabase: Client = Depends(get_supabase)
):
    """Create a role with a set of permissions; returns the role's API key once"""
    check_service_owner(service_id, session, supabase)
    return service.create_role(service_id, role_data)


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    service_id: str,
    session: SessionContext = Depends(require_session),
    service: RoleService = Depends(get_role_service),
    supabase: Client = Depends(get_supabase)
):
    check_service_owner(service_id, session, supabase)
    return service.list_roles(service_id)


permissions_router = APIRouter(tags=["roles"])


@permissions_router.get("/permissions")
async def list_permissions():
    """Permissions a role can hold and the HTTP verb each one gates"""
    return get_permission_matrix()
