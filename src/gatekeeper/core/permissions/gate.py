"""Policy gate for route protection.

Each protected route declares exactly one required permission key.
The gate is a FastAPI dependency: it runs while dependencies are
resolved, so a caller without the key is refused before the request
body is validated or any handler code runs.

Usage:
    @router.delete(
        "/{user_id}",
        dependencies=[Depends(require_permission(Permissions.USERS_DELETE))],
    )
    async def delete_user(user_id: int, service: UserSvc):
        ...
"""

from collections.abc import Awaitable, Callable

import structlog

from gatekeeper.core.auth.dependencies import CurrentPrincipal
from gatekeeper.core.auth.schemas import TokenData
from gatekeeper.core.errors import ForbiddenError


logger = structlog.get_logger()


def has_permission(principal: TokenData, permission: str) -> bool:
    """Check whether a principal's token grants a permission key."""
    return str(permission) in principal.permissions


def require_permission(permission: str) -> Callable[..., Awaitable[TokenData]]:
    """Build a dependency that requires a permission key.

    The returned dependency resolves the verified principal first, so a
    missing or invalid token still yields 401.

    Args:
        permission: The required permission key (e.g., "users.delete")

    Returns:
        Dependency returning the principal when it holds the key

    Raises:
        ForbiddenError: If the principal lacks the permission
    """
    required = str(permission)

    async def permission_gate(principal: CurrentPrincipal) -> TokenData:
        if not has_permission(principal, required):
            logger.info(
                "permission_denied",
                user_id=principal.user_id,
                required_permission=required,
            )
            raise ForbiddenError(
                f"Missing required permission: {required}",
                error_code="permission_denied",
                details={"required_permission": required},
            )
        return principal

    permission_gate.required_permission = required  # type: ignore[attr-defined]
    return permission_gate
