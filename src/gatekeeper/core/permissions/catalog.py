"""The fixed permission catalog.

Permission keys are seeded once and never created through the API.
Routes reference them through the ``Permissions`` enum so a typo
fails at import time instead of silently denying access.
"""

from enum import StrEnum


class Permissions(StrEnum):
    """Every grantable capability, keyed by a stable dotted identifier."""

    # User management
    USERS_VIEW = "users.view"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_CREATE = "users.create"

    # Role management
    ROLES_VIEW = "roles.view"
    ROLES_MANAGE = "roles.manage"  # create, edit, delete

    # Permission catalog
    PERMISSIONS_VIEW = "permissions.view"

    # Dashboard
    DASHBOARD_ACCESS = "dashboard.access"

    # Settings
    SETTINGS_ACCESS = "settings.access"


PERMISSION_DESCRIPTIONS: dict[Permissions, str] = {
    Permissions.USERS_VIEW: "View users list and details",
    Permissions.USERS_EDIT: "Edit user information",
    Permissions.USERS_DELETE: "Delete users",
    Permissions.USERS_CREATE: "Create new users",
    Permissions.ROLES_VIEW: "View roles list and details",
    Permissions.ROLES_MANAGE: "Create, edit, and delete roles",
    Permissions.PERMISSIONS_VIEW: "View available permissions",
    Permissions.DASHBOARD_ACCESS: "Access dashboard",
    Permissions.SETTINGS_ACCESS: "Access settings",
}

ALL_PERMISSIONS: tuple[Permissions, ...] = tuple(Permissions)


def describe(key: str) -> str:
    """Return the catalog description for a permission key."""
    try:
        return PERMISSION_DESCRIPTIONS[Permissions(key)]
    except ValueError:
        return f"Permission: {key}"
