"""Tests for the account endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_signup_creates_profile(client: AsyncClient, register):
    account = await register("  Person@Example.com ")

    me = await client.get("/api/v1/auth/me", headers=account.headers)
    assert me.status_code == 200
    assert me.json() == {"id": account.user_id, "email": "person@example.com"}

    profile = await client.get("/api/v1/profiles/me", headers=account.headers)
    assert profile.json()["anonymous_alias"] == f"Anonymous{account.user_id[:6].upper()}"


async def test_signup_duplicate_email(client: AsyncClient, register):
    await register("user@example.com")

    response = await client.post("/api/v1/auth/signup", json={"email": "USER@example.com", "password": "another1"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email already registered"}


async def test_signup_short_password(client: AsyncClient):
    response = await client.post("/api/v1/auth/signup", json={"email": "user@example.com", "password": "abc"})

    assert response.status_code == 400
    assert response.json() == {"error": "Password must be at least 6 characters"}


async def test_signup_overlong_password(client: AsyncClient):
    response = await client.post("/api/v1/auth/signup", json={"email": "user@example.com", "password": "p" * 80})

    assert response.status_code == 400
    assert response.json() == {"error": "Password must be at most 72 bytes"}


async def test_signup_invalid_email(client: AsyncClient):
    response = await client.post("/api/v1/auth/signup", json={"email": "not-an-email", "password": "secret123"})
    assert response.status_code == 400


async def test_login(client: AsyncClient, register):
    account = await register()

    response = await client.post("/api/v1/auth/login", json={"email": account.email, "password": account.password})

    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == account.user_id
    assert body["token_type"] == "bearer"


async def test_login_wrong_password(client: AsyncClient, register):
    account = await register()

    response = await client.post("/api/v1/auth/login", json={"email": account.email, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


async def test_me_requires_token(client: AsyncClient):
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    bad = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401


async def test_change_password(client: AsyncClient, register):
    account = await register()

    response = await client.post("/api/v1/auth/password", json={"new_password": "n3w-pass"}, headers=account.headers)
    assert response.status_code == 204

    old = await client.post("/api/v1/auth/login", json={"email": account.email, "password": account.password})
    new = await client.post("/api/v1/auth/login", json={"email": account.email, "password": "n3w-pass"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_delete_account_removes_owned_records(client: AsyncClient, register):
    account = await register()
    other = await register("other@example.com")
    headers = account.headers

    await client.post("/api/v1/mood-logs", json={"mood": "good", "notes": "ok"}, headers=headers)
    await client.post("/api/v1/chats", json={}, headers=headers)
    post = await client.post("/api/v1/forum/posts", json={"title": "Hi", "content": "there"}, headers=headers)
    await client.post(f"/api/v1/forum/posts/{post.json()['id']}/replies", json={"content": "yo"}, headers=other.headers)
    await client.post("/api/v1/peer-chats", json={"other_user_id": other.user_id}, headers=headers)

    response = await client.delete("/api/v1/auth/account", headers=headers)
    assert response.status_code == 204

    assert (await client.get("/api/v1/auth/me", headers=headers)).status_code == 401
    login = await client.post("/api/v1/auth/login", json={"email": account.email, "password": account.password})
    assert login.status_code == 401
    assert (await client.get("/api/v1/forum/posts", headers=other.headers)).json() == []
    assert (await client.get("/api/v1/peer-chats", headers=other.headers)).json() == []
    assert (await client.get(f"/api/v1/profiles/{account.user_id}", headers=other.headers)).status_code == 404
