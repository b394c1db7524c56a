"""User management routes."""

from fastapi import APIRouter, Depends, Response, status

from gatekeeper.core.permissions import Permissions, require_permission
from gatekeeper.modules.users.schemas import UserCreate, UserResponse, UserUpdate
from gatekeeper.modules.users.services import UserSvc


router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="List all users with their role names.",
    dependencies=[Depends(require_permission(Permissions.USERS_VIEW))],
)
async def list_users(service: UserSvc) -> list[UserResponse]:
    """List users."""
    users = await service.list_users()
    return [UserResponse.from_user(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
    dependencies=[Depends(require_permission(Permissions.USERS_VIEW))],
)
async def get_user(
    user_id: int,
    service: UserSvc,
) -> UserResponse:
    """Get user by ID."""
    user = await service.get_user(user_id)
    return UserResponse.from_user(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user and assign roles by ID. Unknown role IDs are ignored.",
    dependencies=[Depends(require_permission(Permissions.USERS_CREATE))],
)
async def create_user(
    data: UserCreate,
    service: UserSvc,
) -> UserResponse:
    """Create a user."""
    user = await service.create_user(data)
    return UserResponse.from_user(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description=(
        "Partially update a user. A present roleIds list replaces the "
        "user's roles; an empty password is ignored."
    ),
    dependencies=[Depends(require_permission(Permissions.USERS_EDIT))],
)
async def update_user(
    user_id: int,
    data: UserUpdate,
    service: UserSvc,
) -> UserResponse:
    """Update user by ID."""
    user = await service.update_user(user_id, data)
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete user",
    dependencies=[Depends(require_permission(Permissions.USERS_DELETE))],
)
async def delete_user(
    user_id: int,
    service: UserSvc,
) -> Response:
    """Delete user by ID."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
