"""Tests for the AI chat session endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

URL = "/api/v1/chats"


async def test_create_defaults_title(client: AsyncClient, register):
    account = await register()

    response = await client.post(URL, json={}, headers=account.headers)

    assert response.status_code == 201
    assert response.json()["title"] == "New Chat"


async def test_first_user_message_becomes_title(client: AsyncClient, register):
    account = await register()
    chat = (await client.post(URL, json={}, headers=account.headers)).json()
    text = "Lately I have trouble focusing on my studies"

    await client.post(f"{URL}/{chat['id']}/messages", json={"role": "user", "content": text}, headers=account.headers)
    await client.post(
        f"{URL}/{chat['id']}/messages", json={"role": "assistant", "content": "Let's talk."}, headers=account.headers
    )

    history = (await client.get(f"{URL}/{chat['id']}/messages", headers=account.headers)).json()
    assert history["session"]["title"] == text[:30] + "..."
    assert [m["role"] for m in history["messages"]] == ["user", "assistant"]


async def test_list_most_recent_first(client: AsyncClient, register):
    account = await register()
    first = (await client.post(URL, json={"title": "first"}, headers=account.headers)).json()
    second = (await client.post(URL, json={"title": "second"}, headers=account.headers)).json()
    await client.post(f"{URL}/{first['id']}/messages", json={"role": "user", "content": "hi"}, headers=account.headers)

    listed = (await client.get(URL, headers=account.headers)).json()

    assert [c["id"] for c in listed] == [first["id"], second["id"]]


async def test_rename_and_delete(client: AsyncClient, register):
    account = await register()
    chat = (await client.post(URL, json={}, headers=account.headers)).json()

    renamed = await client.patch(f"{URL}/{chat['id']}", json={"title": "Exams"}, headers=account.headers)
    assert renamed.json()["title"] == "Exams"

    assert (await client.delete(f"{URL}/{chat['id']}", headers=account.headers)).status_code == 204
    assert (await client.get(f"{URL}/{chat['id']}/messages", headers=account.headers)).status_code == 404


async def test_other_users_chat_is_not_found(client: AsyncClient, register):
    owner = await register()
    other = await register("other@example.com")
    chat = (await client.post(URL, json={}, headers=owner.headers)).json()

    response = await client.get(f"{URL}/{chat['id']}/messages", headers=other.headers)

    assert response.status_code == 404
