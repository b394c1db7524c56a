"""FastAPI dependencies for authentication.

The authenticated principal is the verified token itself: its claims
carry the user's identity and effective permissions, so the policy
gate needs no database round trip.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gatekeeper.core.auth.backend import decode_token
from gatekeeper.core.auth.schemas import TokenData
from gatekeeper.core.errors import UnauthorizedError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Args:
        request: The incoming request
        credentials: Bearer token credentials from the request

    Returns:
        Decoded token data

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    request.state.user_id = token_data.user_id
    structlog.contextvars.bind_contextvars(user_id=str(token_data.user_id))

    return token_data


CurrentPrincipal = Annotated[TokenData, Depends(get_token_data)]
