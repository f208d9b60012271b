import uuid
from datetime import datetime, timezone
from supabase import Client
from headless_api.modules.content_items.schemas import ContentItemResponse
from headless_api.modules.content_items.validation import ContentValidator, ContentValidationError
from headless_api.modules.content_types.service import ContentTypeService, SchemaResolutionError
from typing import Any, Callable, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ContentItemService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.content_types = ContentTypeService(supabase)
        self.validator = ContentValidator(self.content_types)

    def _run_validation(self, check: Callable[..., Dict[str, Any]], content_type_id: int, document: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return check(content_type_id, document)
        except ContentValidationError as e:
            logger.info(f"Content type {content_type_id}: document rejected: {e.message}")
            raise HTTPException(status_code=400, detail=e.message)
        except SchemaResolutionError as e:
            logger.error(str(e))
            raise HTTPException(status_code=500, detail="Failed to load content type fields")

    def create_content_item(self, service_id: str, content_type_id: int, document: Dict[str, Any]) -> ContentItemResponse:
        """Validate and store a new content item"""
        self.content_types.get_content_type(service_id, content_type_id)
        data = self._run_validation(self.validator.validate, content_type_id, document)

        now = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("content_items").insert({
                "id": str(uuid.uuid4()),
                "content_type_id": content_type_id,
                "data": data,
                "created_at": now,
                "updated_at": now
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create content item")

            return ContentItemResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating content item for content type {content_type_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_content_items(self, service_id: str, content_type_id: int) -> List[ContentItemResponse]:
        self.content_types.get_content_type(service_id, content_type_id)
        try:
            result = self.supabase.table("content_items")\
                .select("*")\
                .eq("content_type_id", content_type_id)\
                .order("created_at")\
                .execute()
            return [ContentItemResponse(**row) for row in result.data]
        except Exception as e:
            logger.error(f"Error listing content items for content type {content_type_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _get_item_row(self, service_id: str, content_item_id: str) -> Dict[str, Any]:
        """Content item row, only if its content type belongs to the service"""
        try:
            result = self.supabase.table("content_items")\
                .select("*")\
                .eq("id", content_item_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching content item {content_item_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Content item not found")

        item = result.data[0]
        try:
            self.content_types.get_content_type(service_id, item["content_type_id"])
        except HTTPException as e:
            if e.status_code == 404:
                raise HTTPException(status_code=404, detail="Content item not found")
            raise
        return item

    def get_content_item(self, service_id: str, content_item_id: str) -> ContentItemResponse:
        return ContentItemResponse(**self._get_item_row(service_id, content_item_id))

    def update_content_item(
        self,
        service_id: str,
        content_item_id: str,
        document: Dict[str, Any],
        merge: bool = True
    ) -> ContentItemResponse:
        """Validate and write a new document for an item.

        merge=True overlays `document` on the stored data before validation (PATCH);
        merge=False validates `document` alone and replaces the stored data (PUT).
        """
        item = self._get_item_row(service_id, content_item_id)
        content_type_id = item["content_type_id"]

        # An empty PATCH must stay empty here so stored data cannot mask it
        if merge and document:
            document = {**(item.get("data") or {}), **document}
        data = self._run_validation(self.validator.validate_update, content_type_id, document)

        try:
            result = self.supabase.table("content_items")\
                .update({
                    "data": data,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", content_item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Content item not found")

            return ContentItemResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating content item {content_item_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_content_item(self, service_id: str, content_item_id: str) -> bool:
        self._get_item_row(service_id, content_item_id)
        try:
            result = self.supabase.table("content_items")\
                .delete()\
                .eq("id", content_item_id)\
                .execute()
            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Error deleting content item {content_item_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
