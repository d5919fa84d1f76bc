"""Integration tests for user, profile and subscription endpoints."""
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import PaymentRecord, User

pytestmark = pytest.mark.asyncio


class TestUpsertUser:
    """Tests for POST /users endpoint."""

    async def test_first_login_creates(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/users",
            json={"email": "new@example.com", "name": "New Reader", "photo": "https://img.example.com/n.png"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["inserted"] is True
        assert data["message"] == "User created"
        assert data["user"]["email"] == "new@example.com"
        assert data["user"]["role"] == "user"
        assert data["user"]["photo_url"] == "https://img.example.com/n.png"

    async def test_repeat_login_reports_existing(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post("/api/v1/users", json={"email": test_user.email})

        assert response.status_code == 200
        data = response.json()
        assert data["inserted"] is False
        assert data["message"] == "User already exists"
        assert data["user"]["id"] == test_user.id
        assert data["user"]["last_login"] is not None

    async def test_invalid_email(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/users", json={"email": "not-an-email"})

        assert response.status_code == 400


class TestGetUser:
    async def test_list_users(self, async_client: AsyncClient, test_user: User, admin_user: User):
        response = await async_client.get("/api/v1/users")

        assert response.status_code == 200
        assert {u["email"] for u in response.json()} == {test_user.email, admin_user.email}

    async def test_get_by_email(self, async_client: AsyncClient, admin_user: User):
        response = await async_client.get(f"/api/v1/users/{admin_user.email}")

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    async def test_get_missing(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/users/ghost@example.com")

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_expired_premium_reported_lapsed(
        self, async_client: AsyncClient, expired_premium_user: User
    ):
        response = await async_client.get(f"/api/v1/users/{expired_premium_user.email}")

        assert response.status_code == 200
        assert response.json()["is_premium"] is False


class TestUpdateProfile:
    async def test_partial_update(self, async_client: AsyncClient, test_user: User):
        response = await async_client.patch(
            f"/api/v1/users/{test_user.email}",
            json={"bio": "Covers city hall"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Covers city hall"
        assert data["name"] == "Test Reader"


class TestSubscribe:
    """Tests for PATCH /users/subscribe endpoint."""

    async def test_subscribe_grants_premium(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        test_user: User,
        db_session: AsyncSession,
    ):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers=auth_headers,
            json={
                "email": test_user.email,
                "duration": 1440,
                "plan": "daily",
                "price": 1.5,
                "transaction_id": "pi_abc",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["is_premium"] is True
        assert data["user"]["current_plan"] == "daily"
        assert data["user"]["premium_expires_at"] is not None
        assert data["payment"]["transaction_id"] == "pi_abc"
        assert data["payment"]["price"] == 1.5

        records = (await db_session.execute(select(PaymentRecord))).scalars().all()
        assert [r.email for r in records] == [test_user.email]

    async def test_email_defaults_to_token(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User
    ):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers=auth_headers,
            json={"duration_minutes": 60, "price": 4, "transaction_id": "pi_def"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == test_user.email
        assert response.json()["payment"]["plan"] == "premium"

    async def test_mixed_case_domain_subscribes_self(self, async_client: AsyncClient):
        await async_client.post("/api/v1/users", json={"email": "editor@Example.COM"})
        token = (await async_client.post("/api/v1/jwt", json={"email": "editor@Example.COM"})).json()["token"]

        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers={"Authorization": f"Bearer {token}"},
            json={"email": "editor@Example.COM", "duration": 60, "price": 4, "transaction_id": "pi_case"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "editor@example.com"
        assert response.json()["payment"]["email"] == "editor@example.com"

    async def test_duration_out_of_range(self, async_client: AsyncClient, auth_headers: dict, test_user: User):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers=auth_headers,
            json={"duration": 10**12, "price": 4, "transaction_id": "pi_x"},
        )

        assert response.status_code == 400

    async def test_cannot_subscribe_someone_else(
        self, async_client: AsyncClient, auth_headers: dict, other_user: User
    ):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers=auth_headers,
            json={"email": other_user.email, "duration": 60, "price": 4, "transaction_id": "pi_x"},
        )

        assert response.status_code == 403

    async def test_missing_duration(self, async_client: AsyncClient, auth_headers: dict, test_user: User):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            headers=auth_headers,
            json={"price": 4, "transaction_id": "pi_x"},
        )

        assert response.status_code == 400

    async def test_requires_token(self, async_client: AsyncClient):
        response = await async_client.patch(
            "/api/v1/users/subscribe",
            json={"duration": 60, "price": 4, "transaction_id": "pi_x"},
        )

        assert response.status_code == 401


class TestDeleteUser:
    async def test_admin_deletes(
        self, async_client: AsyncClient, admin_headers: dict, test_user: User
    ):
        response = await async_client.delete(f"/api/v1/users/{test_user.id}", headers=admin_headers)

        assert response.status_code == 204
        follow_up = await async_client.get(f"/api/v1/users/{test_user.email}")
        assert follow_up.status_code == 404

    async def test_non_admin_forbidden(
        self, async_client: AsyncClient, auth_headers: dict, other_user: User
    ):
        response = await async_client.delete(f"/api/v1/users/{other_user.id}", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    async def test_token_without_account_forbidden(
        self, async_client: AsyncClient, make_headers, test_user: User
    ):
        response = await async_client.delete(
            f"/api/v1/users/{test_user.id}",
            headers=make_headers("stranger@example.com"),
        )

        assert response.status_code == 403
