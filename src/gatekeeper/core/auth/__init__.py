"""Authentication module for JWT and password handling."""

from gatekeeper.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from gatekeeper.core.auth.dependencies import CurrentPrincipal, get_token_data
from gatekeeper.core.auth.middleware import RequestIdMiddleware, SecurityHeadersMiddleware
from gatekeeper.core.auth.schemas import TokenData


__all__ = [
    # Dependencies
    "CurrentPrincipal",
    # Middleware
    "RequestIdMiddleware",
    "SecurityHeadersMiddleware",
    # Schemas
    "TokenData",
    # Token utilities
    "create_access_token",
    "decode_token",
    "get_token_data",
    # Password utilities
    "hash_password",
    "verify_password",
]
