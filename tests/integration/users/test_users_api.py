"""Integration tests for user management endpoints."""

import pytest
from httpx import AsyncClient

from gatekeeper.config import settings
from gatekeeper.core.permissions import Permissions
from tests.factories.users import DEFAULT_PASSWORD


pytestmark = pytest.mark.integration

USERS_URL = "/api/v1/users"


async def _login(client: AsyncClient, email: str, password: str):
    return await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )


class TestListUsers:
    """Tests for GET /api/v1/users."""

    async def test_admin_lists_users(self, client: AsyncClient, admin_headers):
        response = await client.get(USERS_URL, headers=admin_headers)

        assert response.status_code == 200
        users = response.json()
        assert [u["email"] for u in users] == [settings.admin_email]
        admin = users[0]
        assert admin["roles"] == ["Admin"]
        assert admin["isActive"] is True
        assert {"id", "createdAt", "updatedAt"} <= set(admin)
        assert "passwordHash" not in admin

    async def test_ordered_by_id(
        self, client: AsyncClient, admin_headers, make_user
    ):
        await make_user("b@example.com")
        await make_user("a@example.com")

        response = await client.get(USERS_URL, headers=admin_headers)

        ids = [u["id"] for u in response.json()]
        assert ids == sorted(ids)

    async def test_requires_token(self, client: AsyncClient):
        response = await client.get(USERS_URL)

        assert response.status_code == 401

    async def test_requires_users_view(self, client: AsyncClient, headers_for):
        response = await client.get(
            USERS_URL, headers=headers_for([Permissions.DASHBOARD_ACCESS])
        )

        assert response.status_code == 403
        data = response.json()
        assert data["required_permission"] == "users.view"
        assert data["type"].endswith("/permission_denied")


class TestCreateUser:
    """Tests for POST /api/v1/users."""

    async def test_create_with_roles(self, client: AsyncClient, admin_headers):
        roles = (await client.get("/api/v1/roles", headers=admin_headers)).json()
        user_role = next(r for r in roles if r["name"] == "User")

        response = await client.post(
            USERS_URL,
            headers=admin_headers,
            json={
                "email": "new@example.com",
                "password": "NewPass123!",
                "roleIds": [user_role["id"], 9999],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new@example.com"
        assert data["isActive"] is True
        # Unknown role id is ignored
        assert data["roles"] == ["User"]

        login = await _login(client, "new@example.com", "NewPass123!")
        assert login.status_code == 200

    async def test_create_inactive_user_cannot_login(
        self, client: AsyncClient, admin_headers
    ):
        response = await client.post(
            USERS_URL,
            headers=admin_headers,
            json={
                "email": "dormant@example.com",
                "password": "NewPass123!",
                "isActive": False,
            },
        )

        assert response.status_code == 201
        assert response.json()["isActive"] is False
        login = await _login(client, "dormant@example.com", "NewPass123!")
        assert login.status_code == 401

    async def test_duplicate_email(self, client: AsyncClient, admin_headers):
        response = await client.post(
            USERS_URL,
            headers=admin_headers,
            json={"email": settings.admin_email, "password": "NewPass123!"},
        )

        assert response.status_code == 409
        assert response.json()["type"].endswith("/email_exists")

        listing = await client.get(USERS_URL, headers=admin_headers)
        assert len(listing.json()) == 1

    async def test_email_differing_only_in_case_is_distinct(
        self, client: AsyncClient, admin_headers, make_user
    ):
        await make_user("a@example.com")

        response = await client.post(
            USERS_URL,
            headers=admin_headers,
            json={"email": "a@EXAMPLE.com", "password": "NewPass123!"},
        )

        assert response.status_code == 201
        assert response.json()["email"] == "a@EXAMPLE.com"

    async def test_mixed_case_email_stored_and_logged_in_exactly(
        self, client: AsyncClient, admin_headers
    ):
        created = await client.post(
            USERS_URL,
            headers=admin_headers,
            json={"email": "Mixed@Example.COM", "password": "NewPass123!"},
        )
        assert created.status_code == 201

        user_id = created.json()["id"]
        fetched = await client.get(f"{USERS_URL}/{user_id}", headers=admin_headers)
        assert fetched.json()["email"] == "Mixed@Example.COM"

        login = await _login(client, "Mixed@Example.COM", "NewPass123!")
        assert login.status_code == 200
        assert login.json()["email"] == "Mixed@Example.COM"

        other_case = await _login(client, "mixed@example.com", "NewPass123!")
        assert other_case.status_code == 401

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "not-an-email", "password": "NewPass123!"},
            {"email": "weak@example.com", "password": "weakpass"},
            {"email": "short@example.com", "password": "Ab1!"},
            {"password": "NewPass123!"},
        ],
    )
    async def test_invalid_body(self, client: AsyncClient, admin_headers, body):
        response = await client.post(USERS_URL, headers=admin_headers, json=body)

        assert response.status_code == 400

    async def test_requires_users_create(self, client: AsyncClient, headers_for):
        response = await client.post(
            USERS_URL,
            headers=headers_for([Permissions.USERS_VIEW, Permissions.USERS_EDIT]),
            json={"email": "new@example.com", "password": "NewPass123!"},
        )

        assert response.status_code == 403


class TestGetUser:
    """Tests for GET /api/v1/users/{id}."""

    async def test_get_user(self, client: AsyncClient, admin_headers, make_user):
        user = await make_user("someone@example.com")

        response = await client.get(f"{USERS_URL}/{user.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "someone@example.com"
        assert response.json()["roles"] == []

    async def test_get_missing_user(self, client: AsyncClient, admin_headers):
        response = await client.get(f"{USERS_URL}/9999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestUpdateUser:
    """Tests for PUT /api/v1/users/{id}."""

    async def test_partial_update_keeps_other_fields(
        self, client: AsyncClient, admin_headers, make_user
    ):
        user = await make_user("edit@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"isActive": False},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["isActive"] is False
        assert data["email"] == "edit@example.com"

    async def test_email_case_change_is_kept(
        self, client: AsyncClient, admin_headers, make_user
    ):
        user = await make_user("recase@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"email": "ReCase@Example.com"},
        )

        assert response.status_code == 200
        assert response.json()["email"] == "ReCase@Example.com"

    async def test_empty_password_keeps_old_password(
        self, client: AsyncClient, admin_headers, make_user
    ):
        user = await make_user("keep@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"password": ""},
        )

        assert response.status_code == 200
        login = await _login(client, "keep@example.com", DEFAULT_PASSWORD)
        assert login.status_code == 200

    async def test_new_password(self, client: AsyncClient, admin_headers, make_user):
        user = await make_user("rotate@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"password": "rotated"},
        )

        assert response.status_code == 200
        assert (await _login(client, "rotate@example.com", "rotated")).status_code == 200
        old = await _login(client, "rotate@example.com", DEFAULT_PASSWORD)
        assert old.status_code == 401

    async def test_short_new_password(
        self, client: AsyncClient, admin_headers, make_user
    ):
        user = await make_user("short@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"password": "abc"},
        )

        assert response.status_code == 400

    async def test_role_ids_replace_and_clear(
        self, client: AsyncClient, admin_headers, make_role, make_user
    ):
        viewer = await make_role("Viewer", ["users.view"])
        editor = await make_role("Editor", ["users.edit"])
        user = await make_user("roles@example.com", roles=[viewer])

        replaced = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"roleIds": [editor.id]},
        )
        assert replaced.json()["roles"] == ["Editor"]

        untouched = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"isActive": True},
        )
        assert untouched.json()["roles"] == ["Editor"]

        cleared = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"roleIds": []},
        )
        assert cleared.json()["roles"] == []

    async def test_email_conflict(self, client: AsyncClient, admin_headers, make_user):
        user = await make_user("mine@example.com")

        response = await client.put(
            f"{USERS_URL}/{user.id}",
            headers=admin_headers,
            json={"email": settings.admin_email},
        )

        assert response.status_code == 409

    async def test_update_missing_user(self, client: AsyncClient, admin_headers):
        response = await client.put(
            f"{USERS_URL}/9999",
            headers=admin_headers,
            json={"isActive": False},
        )

        assert response.status_code == 404


class TestDeleteUser:
    """Tests for DELETE /api/v1/users/{id}."""

    async def test_delete_user(self, client: AsyncClient, admin_headers, make_user):
        user = await make_user("bye@example.com")

        response = await client.delete(f"{USERS_URL}/{user.id}", headers=admin_headers)

        assert response.status_code == 204
        assert response.content == b""
        missing = await client.get(f"{USERS_URL}/{user.id}", headers=admin_headers)
        assert missing.status_code == 404

    async def test_delete_missing_user(self, client: AsyncClient, admin_headers):
        response = await client.delete(f"{USERS_URL}/9999", headers=admin_headers)

        assert response.status_code == 404

    async def test_requires_users_delete(
        self, client: AsyncClient, headers_for, make_user
    ):
        user = await make_user("safe@example.com")

        response = await client.delete(
            f"{USERS_URL}/{user.id}",
            headers=headers_for([Permissions.USERS_VIEW, Permissions.USERS_EDIT]),
        )

        assert response.status_code == 403
        assert response.json()["required_permission"] == "users.delete"
