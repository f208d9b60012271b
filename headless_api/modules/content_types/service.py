from datetime import datetime, timezone
from supabase import Client
from headless_api.modules.content_types.schemas import (
    ContentTypeCreate, ContentTypeResponse, ContentTypeWithFieldsResponse,
    FieldCreate, FieldResponse
)
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SchemaResolutionError(Exception):
    """Fields of a content type could not be read from storage."""

    def __init__(self, content_type_id: int, cause: Exception):
        super().__init__(f"Could not resolve fields for content type {content_type_id}: {cause}")
        self.content_type_id = content_type_id


class ContentTypeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_content_type(self, service_id: str, content_type_data: ContentTypeCreate) -> ContentTypeResponse:
        """Create a content type owned by the service"""
        try:
            result = self.supabase.table("content_types").insert({
                "name": content_type_data.name,
                "service_id": service_id,
                "created_at": datetime.now(timezone.utc).isoformat()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create content type")

            return ContentTypeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating content type for service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_content_types(self, service_id: str) -> List[ContentTypeResponse]:
        try:
            result = self.supabase.table("content_types")\
                .select("*")\
                .eq("service_id", service_id)\
                .order("id")\
                .execute()
            return [ContentTypeResponse(**row) for row in result.data]
        except Exception as e:
            logger.error(f"Error listing content types for service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_content_type(self, service_id: str, content_type_id: int) -> Dict[str, Any]:
        """Content type row, scoped to the service. Types of other services are reported as absent."""
        try:
            result = self.supabase.table("content_types")\
                .select("*")\
                .eq("id", content_type_id)\
                .eq("service_id", service_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching content type {content_type_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Content type not found")
        return result.data[0]

    def get_content_type_with_fields(self, service_id: str, content_type_id: int) -> ContentTypeWithFieldsResponse:
        content_type = self.get_content_type(service_id, content_type_id)
        try:
            fields = self.fields_for(content_type_id)
        except SchemaResolutionError as e:
            logger.error(str(e))
            raise HTTPException(status_code=500, detail="Failed to load content type fields")
        return ContentTypeWithFieldsResponse(**content_type, fields=fields)

    def fields_for(self, content_type_id: int) -> List[FieldResponse]:
        """Ordered schema of a content type. An empty list is a valid schema."""
        try:
            result = self.supabase.table("fields")\
                .select("*")\
                .eq("content_type_id", content_type_id)\
                .order("id")\
                .execute()
        except Exception as e:
            raise SchemaResolutionError(content_type_id, e) from e
        return [FieldResponse(**row) for row in result.data or []]

    def create_field(self, service_id: str, content_type_id: int, field_data: FieldCreate) -> FieldResponse:
        """Add a field to a content type; display_id must be unique within the type"""
        self.get_content_type(service_id, content_type_id)
        try:
            existing = self.supabase.table("fields")\
                .select("id")\
                .eq("content_type_id", content_type_id)\
                .eq("display_id", field_data.display_id)\
                .execute()

            if existing.data:
                raise HTTPException(
                    status_code=400,
                    detail=f"Field '{field_data.display_id}' already exists on this content type"
                )

            result = self.supabase.table("fields").insert({
                "content_type_id": content_type_id,
                "display_id": field_data.display_id,
                "field_type": field_data.field_type.value,
                "required": field_data.required
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create field")

            return FieldResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating field on content type {content_type_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
