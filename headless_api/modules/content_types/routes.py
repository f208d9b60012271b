from fastapi import APIRouter, Depends
from headless_api.database.supabase_client import get_supabase
from headless_api.modules.content_types.schemas import (
    ContentTypeCreate, ContentTypeResponse, ContentTypeWithFieldsResponse,
    FieldCreate, FieldResponse
)
from headless_api.modules.content_types.service import ContentTypeService
from headless_api.core.dependencies import require_tenant_access, TenantContext
from supabase import Client
from typing import List

router = APIRouter(prefix="/service/{service_id}", tags=["content_types"])


def get_content_type_service(supabase: Client = Depends(get_supabase)) -> ContentTypeService:
    return ContentTypeService(supabase)


@router.post("/content_types", response_model=ContentTypeResponse, status_code=201)
async def create_content_type(
    content_type_data: ContentTypeCreate,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentTypeService = Depends(get_content_type_service)
):
    """Create a content type in the service"""
    return service.create_content_type(tenant.service_id, content_type_data)


@router.get("/content_types", response_model=List[ContentTypeResponse])
async def list_content_types(
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentTypeService = Depends(get_content_type_service)
):
    return service.list_content_types(tenant.service_id)


@router.get("/content_types/{content_type_id}", response_model=ContentTypeWithFieldsResponse)
async def get_content_type(
    content_type_id: int,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentTypeService = Depends(get_content_type_service)
):
    """Get a content type with its ordered fields"""
    return service.get_content_type_with_fields(tenant.service_id, content_type_id)


@router.post("/{content_type_id}/fields", response_model=FieldResponse, status_code=201)
async def create_field(
    content_type_id: int,
    field_data: FieldCreate,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentTypeService = Depends(get_content_type_service)
):
    """Add a typed field to a content type"""
    return service.create_field(tenant.service_id, content_type_id, field_data)
