"""Permission system for role-based access control (RBAC).

The resolver lives in ``gatekeeper.core.permissions.resolver`` and is
imported from there; it depends on the users module, which itself
imports the models below.
"""

from gatekeeper.core.permissions.catalog import (
    ALL_PERMISSIONS,
    PERMISSION_DESCRIPTIONS,
    Permissions,
)
from gatekeeper.core.permissions.gate import has_permission, require_permission
from gatekeeper.core.permissions.models import (
    Permission,
    Role,
    role_permissions,
    user_roles,
)


__all__ = [
    "ALL_PERMISSIONS",
    "PERMISSION_DESCRIPTIONS",
    # Models
    "Permission",
    "Permissions",
    "Role",
    # Gate
    "has_permission",
    "require_permission",
    "role_permissions",
    "user_roles",
]
