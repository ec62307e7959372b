"""Integration tests: Users endpoints."""

import pytest
from httpx import AsyncClient

from app.core.security import verify_short_token


def _user_payload(suffix: str) -> dict:
    return {
        "name": "Ada Lovelace",
        "username": f"ada_{suffix}",
        "email": f"ada_{suffix}@example.com",
        "password": "analytical-engine",
    }


@pytest.mark.asyncio
async def test_create_user(async_client: AsyncClient, unique_suffix: str):
    resp = await async_client.post("/users/createUser", json=_user_payload(unique_suffix))
    assert resp.status_code == 201
    user = resp.json()["user"]
    assert user["username"] == f"ada_{unique_suffix}"
    assert user["role"] == 1
    assert "password" not in user
    assert "hashedPassword" not in user


@pytest.mark.asyncio
async def test_create_user_validation(async_client: AsyncClient, unique_suffix: str):
    payload = _user_payload(unique_suffix)
    payload["email"] = "nope"
    resp = await async_client.post("/users/createUser", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("email must be")


@pytest.mark.asyncio
async def test_create_user_duplicate_username(async_client: AsyncClient, unique_suffix: str):
    await async_client.post("/users/createUser", json=_user_payload(unique_suffix))
    resp = await async_client.post("/users/createUser", json=_user_payload(unique_suffix))
    assert resp.status_code == 409
    assert resp.json() == {"error": "username already taken"}


@pytest.mark.asyncio
async def test_login_and_me(async_client: AsyncClient, unique_suffix: str):
    payload = _user_payload(unique_suffix)
    created = await async_client.post("/users/createUser", json=payload)
    user_id = created.json()["user"]["id"]

    resp = await async_client.post(
        "/users/login", json={"username": payload["username"], "password": payload["password"]}
    )
    assert resp.status_code == 200
    token = resp.json()["token"]
    claims = verify_short_token(token)
    assert claims["userId"] == user_id
    assert claims["userRole"] == 1

    resp = await async_client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == user_id


@pytest.mark.asyncio
async def test_member_token_cannot_mutate(async_client: AsyncClient, unique_suffix: str):
    payload = _user_payload(unique_suffix)
    await async_client.post("/users/createUser", json=payload)
    resp = await async_client.post(
        "/users/login", json={"username": payload["username"], "password": payload["password"]}
    )
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    resp = await async_client.post("/schools/addSchool", headers=headers, json={"schoolName": "Nope"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "unauthorized"}


@pytest.mark.asyncio
async def test_login_wrong_password(async_client: AsyncClient, unique_suffix: str):
    payload = _user_payload(unique_suffix)
    await async_client.post("/users/createUser", json=payload)
    resp = await async_client.post(
        "/users/login", json={"username": payload["username"], "password": "wrong-password"}
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "wrong password"}


@pytest.mark.asyncio
async def test_login_unknown_user(async_client: AsyncClient):
    resp = await async_client.post("/users/login", json={"username": "ghost", "password": "whatever1"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "user not found"}


@pytest.mark.asyncio
async def test_me_requires_token(async_client: AsyncClient):
    resp = await async_client.get("/users/me")
    assert resp.status_code == 401
