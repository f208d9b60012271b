from supabase import Client
from headless_api.config.permissions_config import Permission
from headless_api.config.settings import settings
from headless_api.core.keys import generate_key
from headless_api.modules.roles.schemas import RoleCreate, RoleResponse, RoleCreatedResponse
from typing import Iterable, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_role(self, service_id: str, role_data: RoleCreate) -> RoleCreatedResponse:
        """Create a role for the service with its own generated API key"""
        return self._insert_role(
            service_id,
            role_data.name,
            role_data.permissions,
            api_key=generate_key(settings.api_key_length)
        )

    def create_default_role(self, service_id: str, name: str, permissions: Iterable[Permission]) -> RoleCreatedResponse:
        """Roles created together with a service carry no key of their own"""
        return self._insert_role(service_id, name, permissions, api_key=None)

    def _insert_role(
        self,
        service_id: str,
        name: str,
        permissions: Iterable[Permission],
        api_key: Optional[str]
    ) -> RoleCreatedResponse:
        granted = list(dict.fromkeys(Permission(p) for p in permissions))
        try:
            result = self.supabase.table("roles").insert({
                "name": name,
                "service_id": service_id,
                "api_key": api_key
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create role")

            role = result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating role '{name}' for service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if granted:
            try:
                self.supabase.table("role_permissions").insert([
                    {"role_id": role["id"], "permission": p.value}
                    for p in granted
                ]).execute()
            except Exception as e:
                logger.error(f"Error granting permissions to role {role['id']}: {e}")
                # Roles are immutable after creation; do not leave one with a partial grant set
                try:
                    self.supabase.table("roles").delete().eq("id", role["id"]).execute()
                except Exception as rollback_error:
                    logger.error(f"Could not roll back role {role['id']} without grants: {rollback_error}")
                raise HTTPException(status_code=500, detail="Failed to assign permissions to role")

        logger.info(f"Role '{name}' created for service {service_id} with {[p.value for p in granted]}")
        return RoleCreatedResponse(
            id=role["id"],
            name=role["name"],
            service_id=role["service_id"],
            permissions=granted,
            api_key=api_key
        )

    def list_roles(self, service_id: str) -> List[RoleResponse]:
        """List roles of a service with their granted permissions"""
        try:
            roles_result = self.supabase.table("roles")\
                .select("id, name, service_id")\
                .eq("service_id", service_id)\
                .order("id")\
                .execute()
            roles = roles_result.data or []
            if not roles:
                return []

            grants_result = self.supabase.table("role_permissions")\
                .select("role_id, permission")\
                .in_("role_id", [r["id"] for r in roles])\
                .execute()

            by_role = {}
            for grant in grants_result.data or []:
                by_role.setdefault(grant["role_id"], []).append(grant["permission"])

            return [
                RoleResponse(**role, permissions=by_role.get(role["id"], []))
                for role in roles
            ]
        except Exception as e:
            logger.error(f"Error listing roles for service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_roles_for_service(self, service_id: str) -> int:
        """Remove every role of the service and its grants. Storage errors propagate."""
        roles_result = self.supabase.table("roles")\
            .select("id")\
            .eq("service_id", service_id)\
            .execute()
        role_ids = [r["id"] for r in roles_result.data or []]
        if not role_ids:
            return 0

        self.supabase.table("role_permissions")\
            .delete()\
            .in_("role_id", role_ids)\
            .execute()
        self.supabase.table("roles")\
            .delete()\
            .eq("service_id", service_id)\
            .execute()
        return len(role_ids)
