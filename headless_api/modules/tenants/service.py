from datetime import datetime, timezone
from supabase import Client
from headless_api.config.permissions_config import DEFAULT_ROLES
from headless_api.config.settings import settings
from headless_api.core.keys import generate_key
from headless_api.modules.roles.service import RoleService
from headless_api.modules.tenants.schemas import ServiceCreate, ServiceCreatedResponse
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class TenantService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.roles = RoleService(supabase)

    def create_service(self, owner_id: int, service_data: ServiceCreate) -> ServiceCreatedResponse:
        """Register a tenant with a generated id and API key, plus its default roles"""
        service_id = generate_key(settings.service_id_length)
        api_key = generate_key(settings.api_key_length)
        try:
            result = self.supabase.table("services").insert({
                "id": service_id,
                "name": service_data.name,
                "api_key": api_key,
                "owner_id": owner_id,
                "created_at": datetime.now(timezone.utc).isoformat()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create service")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating service '{service_data.name}': {e}")
            raise HTTPException(status_code=500, detail=str(e))

        try:
            for role in DEFAULT_ROLES:
                self.roles.create_default_role(service_id, role["name"], role["permissions"])
        except HTTPException:
            # A service without its Admin role cannot serve any content route
            self._delete_cascade(service_id)
            raise

        logger.info(f"Service {service_id} ('{service_data.name}') created by user {owner_id}")
        return ServiceCreatedResponse(service_id=service_id, name=service_data.name, api_key=api_key)

    def delete_service(self, service_id: str) -> bool:
        """Delete a service and everything it owns"""
        try:
            deleted = self._delete_cascade(service_id)
        except Exception as e:
            logger.error(f"Error deleting service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete service: {e}")

        if not deleted:
            raise HTTPException(status_code=404, detail="Service not found")
        logger.info(f"Service {service_id} deleted")
        return True

    def _delete_cascade(self, service_id: str) -> bool:
        types_result = self.supabase.table("content_types")\
            .select("id")\
            .eq("service_id", service_id)\
            .execute()
        content_type_ids = [t["id"] for t in types_result.data or []]

        if content_type_ids:
            self.supabase.table("content_items")\
                .delete()\
                .in_("content_type_id", content_type_ids)\
                .execute()
            self.supabase.table("fields")\
                .delete()\
                .in_("content_type_id", content_type_ids)\
                .execute()
            self.supabase.table("content_types")\
                .delete()\
                .eq("service_id", service_id)\
                .execute()

        self.roles.delete_roles_for_service(service_id)

        result = self.supabase.table("services")\
            .delete()\
            .eq("id", service_id)\
            .execute()
        return len(result.data) > 0
