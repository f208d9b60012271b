"""
Credential lookups used by the access-control dependency.
Every call reads straight from storage; nothing is cached between requests.
"""

from supabase import Client
from headless_api.config.permissions_config import Permission
from typing import Any, Dict, Optional


class CredentialGateway:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_service(self, service_id: str) -> Optional[Dict[str, Any]]:
        """Return the service row (id, name, api_key, owner_id) or None. Storage errors propagate."""
        result = self.supabase.table("services")\
            .select("id, name, api_key, owner_id")\
            .eq("id", service_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def role_grants(self, service_id: str, permission: Permission) -> bool:
        """True if any role of the service grants `permission`. Storage errors propagate."""
        roles_result = self.supabase.table("roles")\
            .select("id")\
            .eq("service_id", service_id)\
            .execute()
        role_ids = [r["id"] for r in roles_result.data] if roles_result.data else []
        if not role_ids:
            return False

        grant_result = self.supabase.table("role_permissions")\
            .select("role_id")\
            .in_("role_id", role_ids)\
            .eq("permission", permission.value)\
            .limit(1)\
            .execute()
        return bool(grant_result.data)
