"""
Permissions and Roles Configuration
Defines the five tenant permissions, the HTTP verb each one gates, and the
roles created automatically with every service.
"""

from enum import Enum
from typing import Dict, List, Optional


class Permission(str, Enum):
    CREATE = "Create"
    READ = "Read"
    UPDATE = "Update"
    REPLACE = "Replace"
    DELETE = "Delete"


# One permission per HTTP verb. Verbs missing here are never granted.
VERB_PERMISSIONS: Dict[str, Permission] = {
    "POST": Permission.CREATE,
    "GET": Permission.READ,
    "PUT": Permission.UPDATE,
    "PATCH": Permission.REPLACE,
    "DELETE": Permission.DELETE,
}

ADMIN_ROLE_NAME = "Admin"

# Roles created together with a new service
DEFAULT_ROLES = [
    {
        "name": ADMIN_ROLE_NAME,
        "permissions": [p for p in Permission],
    },
]


def permission_for_method(method: str) -> Optional[Permission]:
    """Return the permission required for an HTTP method, or None when the verb is not mapped"""
    return VERB_PERMISSIONS.get((method or "").upper())


def get_permission_matrix() -> Dict[str, List[Dict[str, str]]]:
    """
    Returns the verb/permission table used by the admin UI
    Format: {"permissions": [{"name": "Create", "method": "POST"}, ...]}
    """
    return {
        "permissions": [
            {"name": permission.value, "method": method}
            for method, permission in VERB_PERMISSIONS.items()
        ]
    }
