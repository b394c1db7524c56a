"""Authentication backend for JWT and password handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- Access token issuance with embedded permission claims
- Token verification (signature, issuer, audience, expiry)
"""

import secrets
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from gatekeeper.config import settings
from gatekeeper.core.auth.schemas import TokenData
from gatekeeper.core.constants import ACCESS_TOKEN_JTI_LENGTH, BCRYPT_ROUNDS


# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)

PERMISSIONS_CLAIM = "permissions"


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or unknown hash format
        return False


# ============================================================
# JWT Token Utilities
# ============================================================


def create_access_token(
    user_id: int,
    email: str,
    permissions: Iterable[str],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed, time-limited access token.

    The permission set is embedded as a sorted list with one entry per key.

    Args:
        user_id: The user's ID (stored as the "sub" claim)
        email: The user's email
        permissions: Effective permission keys
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        PERMISSIONS_CLAIM: sorted(set(permissions)),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + expires_delta,
        "jti": secrets.token_urlsafe(ACCESS_TOKEN_JTI_LENGTH),
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> TokenData | None:
    """Decode and validate an access token.

    Args:
        token: The JWT token to decode

    Returns:
        TokenData if valid, None if the signature, issuer, audience
        or expiry check fails or required claims are missing
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )

        subject = payload.get("sub")
        email = payload.get("email")
        exp = payload.get("exp")
        permissions = payload.get(PERMISSIONS_CLAIM, [])

        if not subject or not email or exp is None:
            return None
        if not isinstance(permissions, list):
            return None

        return TokenData(
            user_id=int(subject),
            email=email,
            permissions=frozenset(str(p) for p in permissions),
            exp=datetime.fromtimestamp(exp, tz=UTC),
            jti=payload.get("jti"),
        )

    except (JWTError, ValueError, TypeError):
        return None
