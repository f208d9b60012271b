from uuid import UUID
from fastapi import APIRouter, Depends
from headless_api.database.supabase_client import get_supabase
from headless_api.modules.content_items.schemas import (
    ContentItemCreate, ContentItemUpdate, ContentItemResponse
)
from headless_api.modules.content_items.service import ContentItemService
from headless_api.core.dependencies import require_tenant_access, TenantContext
from supabase import Client
from typing import List

router = APIRouter(prefix="/service/{service_id}", tags=["content_items"])


def get_content_item_service(supabase: Client = Depends(get_supabase)) -> ContentItemService:
    return ContentItemService(supabase)


# Item routes first: "/content_items/{id}" and "/{content_type_id}/content_items" share a shape
@router.get("/content_items/{content_item_id}", response_model=ContentItemResponse)
async def get_content_item(
    content_item_id: UUID,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    return service.get_content_item(tenant.service_id, str(content_item_id))


@router.patch("/content_items/{content_item_id}", response_model=ContentItemResponse)
async def patch_content_item(
    content_item_id: UUID,
    item_data: ContentItemUpdate,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    """Merge fields into an item; the merged document is validated before it is written"""
    return service.update_content_item(tenant.service_id, str(content_item_id), item_data.data, merge=True)


@router.put("/content_items/{content_item_id}", response_model=ContentItemResponse)
async def replace_content_item(
    content_item_id: UUID,
    item_data: ContentItemUpdate,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    """Replace an item's document"""
    return service.update_content_item(tenant.service_id, str(content_item_id), item_data.data, merge=False)


@router.delete("/content_items/{content_item_id}", status_code=204)
async def delete_content_item(
    content_item_id: UUID,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    service.delete_content_item(tenant.service_id, str(content_item_id))
    return None


@router.post("/{content_type_id}/content_items", response_model=ContentItemResponse, status_code=201)
async def create_content_item(
    content_type_id: int,
    item_data: ContentItemCreate,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    """Validate a document against the content type schema and store it"""
    return service.create_content_item(tenant.service_id, content_type_id, item_data.data)


@router.get("/{content_type_id}/content_items", response_model=List[ContentItemResponse])
async def list_content_items(
    content_type_id: int,
    tenant: TenantContext = Depends(require_tenant_access),
    service: ContentItemService = Depends(get_content_item_service)
):
    return service.list_content_items(tenant.service_id, content_type_id)
