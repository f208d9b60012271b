"""
Core dependencies for route protection and permission checking

Two independent layers:
- require_tenant_access: API key + role permission check for tenant content routes
- require_session: session cookie check for admin routes

Both return the authenticated identity explicitly; handlers receive it as a
parameter instead of reading it from request state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Header, HTTPException, Request, status
from headless_api.config.permissions_config import Permission, permission_for_method
from headless_api.config.settings import settings
from headless_api.core.credentials import CredentialGateway
from headless_api.database.supabase_client import get_supabase
from supabase import Client
from typing import Optional
import logging
import re
import secrets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantContext:
    service_id: str
    service_name: str
    permission: Permission


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    session_token: str


def get_credential_gateway(supabase: Client = Depends(get_supabase)) -> CredentialGateway:
    return CredentialGateway(supabase)


def require_tenant_access(
    service_id: str,
    request: Request,
    x_api_key: Optional[str] = Header(None),
    gateway: CredentialGateway = Depends(get_credential_gateway),
) -> TenantContext:
    """Authenticate the tenant by API key, then authorize the HTTP verb against the tenant's roles"""
    api_key = (x_api_key or "").strip()
    if not api_key:
        logger.warning(f"Tenant {service_id}: request without API key")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Missing API key")

    try:
        service = gateway.get_service(service_id)
    except Exception as e:
        logger.error(f"Tenant {service_id}: service lookup failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Service lookup failed")
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")

    if not secrets.compare_digest(api_key.encode("utf-8"), str(service["api_key"]).encode("utf-8")):
        logger.warning(f"Tenant {service_id}: API key mismatch")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid API key")

    permission = permission_for_method(request.method)
    if permission is None:
        logger.warning(f"Tenant {service_id}: no permission maps to method {request.method}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Method not allowed for this service")

    try:
        granted = gateway.role_grants(service_id, permission)
    except Exception as e:
        # Fail closed: an unresolved permission is a denied permission
        logger.error(f"Tenant {service_id}: permission lookup for {permission.value} failed: {e}")
        granted = False
    if not granted:
        logger.warning(f"Tenant {service_id}: permission {permission.value} not granted by any role")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Required: {permission.value}"
        )

    logger.debug(f"Tenant {service_id}: {request.method} allowed by {permission.value}")
    return TenantContext(service_id=service["id"], service_name=service["name"], permission=permission)


_FRACTION = re.compile(r"\.([0-9]+)")


def _normalize_timestamp(value: str) -> str:
    """PostgREST timestamps may carry any number of fraction digits; fromisoformat wants 3 or 6 before 3.11"""
    value = value.replace("Z", "+00:00")
    return _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], value, count=1)


def _session_expired(created_at: Optional[str]) -> bool:
    if not settings.session_ttl_minutes:
        return False
    if not created_at:
        return True
    try:
        started = datetime.fromisoformat(_normalize_timestamp(str(created_at)))
    except ValueError:
        logger.warning(f"Unreadable session timestamp {created_at!r}; treating session as expired")
        return True
    if started.tzinfo is None:
        started = started.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc) - started > timedelta(minutes=settings.session_ttl_minutes)


def require_session(
    request: Request,
    supabase: Client = Depends(get_supabase),
) -> SessionContext:
    """Resolve the admin session from the session cookie"""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Please log in")

    try:
        result = supabase.table("sessions")\
            .select("user_id, session_token, created_at")\
            .eq("session_token", token)\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Session lookup failed: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Please log in")

    if not result.data:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Please log in")

    session = result.data[0]
    if _session_expired(session.get("created_at")):
        logger.info(f"Session for user {session['user_id']} expired")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Session expired, please log in again")

    return SessionContext(user_id=session["user_id"], session_token=token)


def check_service_owner(service_id: str, session: SessionContext, supabase: Client) -> dict:
    """Return the service row if it exists and belongs to the session user"""
    try:
        result = supabase.table("services")\
            .select("id, name, owner_id")\
            .eq("id", service_id)\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Service lookup failed for {service_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Service lookup failed")

    if not result.data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")

    service = result.data[0]
    if service.get("owner_id") != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be the owner of this service to manage it"
        )
    return service
