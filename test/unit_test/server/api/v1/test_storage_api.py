"""Tests for the object storage endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


async def test_upload_and_download(client: AsyncClient, register):
    account = await register()

    response = await client.post(
        "/api/v1/storage/avatars", files={"file": ("me.png", PNG, "image/png")}, headers=account.headers
    )

    assert response.status_code == 201
    body = response.json()
    assert body["bucket"] == "avatars"
    assert body["path"].startswith(f"{account.user_id}/")
    assert body["url"] == f"http://localhost/storage/avatars/{body['path']}"

    download = await client.get(f"/storage/avatars/{body['path']}")
    assert download.status_code == 200
    assert download.content == PNG


async def test_html_filename_is_served_as_declared_image(client: AsyncClient, register):
    account = await register()

    response = await client.post(
        "/api/v1/storage/avatars",
        files={"file": ("x.html", b"<script>alert(1)</script>", "image/png")},
        headers=account.headers,
    )

    path = response.json()["path"]
    assert path.endswith(".png")
    download = await client.get(f"/storage/avatars/{path}")
    assert download.headers["content-type"] == "image/png"
    assert download.headers["x-content-type-options"] == "nosniff"


async def test_svg_rejected(client: AsyncClient, register):
    account = await register()

    response = await client.post(
        "/api/v1/storage/avatars",
        files={"file": ("me.svg", b"<svg onload=\"alert(1)\"/>", "image/svg+xml")},
        headers=account.headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported file type"}


async def test_upload_requires_auth(client: AsyncClient):
    response = await client.post("/api/v1/storage/avatars", files={"file": ("me.png", PNG, "image/png")})
    assert response.status_code == 401


async def test_unsupported_type(client: AsyncClient, register):
    account = await register()

    response = await client.post(
        "/api/v1/storage/message_images",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=account.headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported file type"}


async def test_too_large(client: AsyncClient, register, object_storage):
    object_storage.max_image_bytes = 8
    account = await register()

    response = await client.post(
        "/api/v1/storage/avatars", files={"file": ("me.png", PNG, "image/png")}, headers=account.headers
    )

    assert response.status_code == 400
    assert response.json() == {"error": "File too large"}


async def test_missing_object(client: AsyncClient):
    response = await client.get("/storage/avatars/nobody/1.png")
    assert response.status_code == 404
