"""Login and the current-user endpoint."""

import uuid

from app.services.auth import auth_service
from tests.conftest import ADMIN_EMAIL, PASSWORD


async def test_login_returns_usable_token(client, admin_user):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == ADMIN_EMAIL
    assert body["data"]["role"] == "admin"

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == str(admin_user.id)


async def test_login_with_wrong_password(client, admin_user):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid email or password"}


async def test_login_with_malformed_email_is_400(client):
    response = await client.post("/api/auth/login", json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_token_for_deleted_user_is_rejected(client):
    token = auth_service.create_access_token(uuid.uuid4(), "admin")
    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized, user not found"


def test_password_hashing():
    hashed = auth_service.hash_password("s3cret")
    assert hashed != "s3cret"
    assert auth_service.verify_password("s3cret", hashed)
    assert not auth_service.verify_password("other", hashed)


async def test_access_token_carries_role_claim(admin_user):
    token = auth_service.create_access_token(admin_user.id, admin_user.role.value)
    payload = auth_service.verify_access_token(token)

    assert payload["sub"] == str(admin_user.id)
    assert payload["role"] == "admin"
    assert payload["type"] == "access"
