"""Unit tests for auth backend (JWT and password handling)."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from gatekeeper.config import settings
from gatekeeper.core.auth.backend import (
    PERMISSIONS_CLAIM,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """hash_password should return a bcrypt hash."""
        password = "Secret123!"
        hashed = hash_password(password)

        assert hashed != password
        assert hashed.startswith("$2b$")  # bcrypt prefix

    def test_hash_password_different_each_time(self):
        """hash_password should salt every hash."""
        assert hash_password("Secret123!") != hash_password("Secret123!")

    def test_verify_password_correct(self):
        hashed = hash_password("Secret123!")

        assert verify_password("Secret123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("Secret123!")

        assert verify_password("secret123!", hashed) is False

    def test_verify_password_malformed_hash(self):
        """A value that is not a bcrypt hash never verifies."""
        assert verify_password("Secret123!", "not-a-hash") is False


class TestCreateAccessToken:
    """Tests for access token issuance."""

    def _claims(self, token: str) -> dict:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )

    def test_token_carries_identity_and_registered_claims(self):
        token = create_access_token(user_id=7, email="a@example.com", permissions=[])
        claims = self._claims(token)

        assert claims["sub"] == "7"
        assert claims["email"] == "a@example.com"
        assert claims["iss"] == settings.jwt_issuer
        assert claims["aud"] == settings.jwt_audience
        assert claims["jti"]
        assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60

    def test_permissions_sorted_one_entry_per_key(self):
        token = create_access_token(
            user_id=1,
            email="a@example.com",
            permissions=["users.view", "dashboard.access", "users.view"],
        )

        assert self._claims(token)[PERMISSIONS_CLAIM] == [
            "dashboard.access",
            "users.view",
        ]

    def test_empty_permission_set_is_empty_list(self):
        token = create_access_token(user_id=1, email="a@example.com", permissions=[])

        assert self._claims(token)[PERMISSIONS_CLAIM] == []

    def test_custom_expiry(self):
        token = create_access_token(
            user_id=1,
            email="a@example.com",
            permissions=[],
            expires_delta=timedelta(minutes=5),
        )
        claims = self._claims(token)

        assert claims["exp"] - claims["iat"] == 300

    def test_unique_jti_per_token(self):
        first = create_access_token(user_id=1, email="a@example.com", permissions=[])
        second = create_access_token(user_id=1, email="a@example.com", permissions=[])

        assert self._claims(first)["jti"] != self._claims(second)["jti"]


class TestDecodeToken:
    """Tests for token verification."""

    def test_decode_valid_token(self):
        token = create_access_token(
            user_id=42,
            email="viewer@example.com",
            permissions=["users.view"],
        )

        data = decode_token(token)

        assert data is not None
        assert data.user_id == 42
        assert data.email == "viewer@example.com"
        assert data.permissions == frozenset({"users.view"})
        assert data.exp > datetime.now(UTC)

    def test_decode_expired_token(self):
        token = create_access_token(
            user_id=1,
            email="a@example.com",
            permissions=[],
            expires_delta=timedelta(seconds=-10),
        )

        assert decode_token(token) is None

    def test_decode_garbage(self):
        assert decode_token("not.a.token") is None

    def test_decode_tampered_signature(self):
        token = create_access_token(user_id=1, email="a@example.com", permissions=[])
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        assert decode_token(tampered) is None

    def _encode(self, **overrides) -> str:
        now = datetime.now(UTC)
        claims = {
            "sub": "1",
            "email": "a@example.com",
            PERMISSIONS_CLAIM: ["users.view"],
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "exp": now + timedelta(minutes=5),
        }
        claims.update(overrides)
        secret = claims.pop("_secret", settings.jwt_secret_key)
        return jwt.encode(claims, secret, algorithm=settings.jwt_algorithm)

    def test_wrong_secret_rejected(self):
        token = self._encode(_secret="another-secret-key-that-is-long-enough-0000")

        assert decode_token(token) is None

    def test_wrong_issuer_rejected(self):
        assert decode_token(self._encode(iss="someone-else")) is None

    def test_wrong_audience_rejected(self):
        assert decode_token(self._encode(aud="another-app")) is None

    def test_non_numeric_subject_rejected(self):
        assert decode_token(self._encode(sub="abc")) is None

    def test_permissions_claim_must_be_list(self):
        assert decode_token(self._encode(**{PERMISSIONS_CLAIM: "users.view"})) is None
