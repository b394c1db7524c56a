"""Authentication API routes.

Provides endpoints for:
- Password login
- The current user's profile and effective permissions
"""

from fastapi import APIRouter

from gatekeeper.core.auth.dependencies import CurrentPrincipal
from gatekeeper.core.auth.schemas import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
)
from gatekeeper.core.auth.service import AuthSvc


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Exchange email and password for an access token.",
)
async def login(data: LoginRequest, service: AuthSvc) -> LoginResponse:
    """Login with email and password."""
    result = await service.login(data.email, data.password)
    return LoginResponse(
        token=result.token,
        user_id=result.user_id,
        email=result.email,
        permissions=result.permissions,
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    description="The authenticated user with role names and current permissions.",
)
async def get_me(principal: CurrentPrincipal, service: AuthSvc) -> CurrentUserResponse:
    """Get the authenticated user."""
    user = await service.get_me(principal.user_id)
    return CurrentUserResponse(
        id=user.id,
        email=user.email,
        is_active=user.is_active,
        roles=user.roles,
        permissions=user.permissions,
    )
