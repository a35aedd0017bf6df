"""Tests for password reset by emailed one-time code."""

import re
from datetime import timedelta

import httpx
import pytest
from httpx import AsyncClient
from sqlmodel import select

from mindful_heaven.core.database.base import utc_now_naive
from mindful_heaven.core.database.entities.password_reset_codes import PasswordResetCode

pytestmark = pytest.mark.asyncio

URL = "/api/v1/password-reset"
CODE_PATTERN = re.compile(r">(\d{6})</span>")


def _sent_codes(email_upstream) -> list[str]:
    return [CODE_PATTERN.search(body["html"]).group(1) for body in email_upstream.json_bodies()]


async def test_send_for_unknown_email_is_generic(client: AsyncClient, email_upstream):
    response = await client.post(URL, json={"action": "send", "email": "ghost@example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "If an account exists, a code was sent"}
    assert email_upstream.requests == []


async def test_send_emails_a_code(client: AsyncClient, register, email_upstream):
    account = await register()

    response = await client.post(URL, json={"action": "send", "email": account.email})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Code sent to your email"}
    body = email_upstream.json_bodies()[0]
    assert body["to"] == [account.email]
    assert len(_sent_codes(email_upstream)[0]) == 6


async def test_verify_sets_password_once(client: AsyncClient, register, email_upstream):
    account = await register()
    await client.post(URL, json={"action": "send", "email": account.email})
    code = _sent_codes(email_upstream)[0]

    first = await client.post(URL, json={"action": "verify", "email": account.email, "code": code, "newPassword": "n3wpass"})
    second = await client.post(
        URL, json={"action": "verify", "email": account.email, "code": code, "newPassword": "other-pass"}
    )

    assert first.status_code == 200
    assert first.json() == {"success": True, "message": "Password updated successfully"}
    assert second.status_code == 400
    assert second.json() == {"error": "Invalid or expired code"}
    login = await client.post("/api/v1/auth/login", json={"email": account.email, "password": "n3wpass"})
    assert login.status_code == 200


async def test_overlong_password_keeps_code_usable(client: AsyncClient, register, email_upstream):
    account = await register()
    await client.post(URL, json={"action": "send", "email": account.email})
    code = _sent_codes(email_upstream)[0]

    rejected = await client.post(
        URL, json={"action": "verify", "email": account.email, "code": code, "newPassword": "\u00e9" * 40}
    )
    accepted = await client.post(
        URL, json={"action": "verify", "email": account.email, "code": code, "newPassword": "n3wpass"}
    )

    assert rejected.status_code == 400
    assert rejected.json() == {"error": "Password must be at most 72 bytes"}
    assert accepted.status_code == 200


async def test_new_code_voids_earlier_ones(client: AsyncClient, register, email_upstream, session):
    account = await register()
    await client.post(URL, json={"action": "send", "email": account.email})
    await client.post(URL, json={"action": "send", "email": account.email})

    result = await session.execute(select(PasswordResetCode).where(PasswordResetCode.email == account.email))
    codes = list(result.scalars().all())
    assert len(codes) == 2
    assert sum(1 for c in codes if not c.used) == 1


async def test_expired_code_rejected(client: AsyncClient, register, email_upstream, session):
    account = await register()
    await client.post(URL, json={"action": "send", "email": account.email})
    code = _sent_codes(email_upstream)[0]
    record = (await session.execute(select(PasswordResetCode))).scalars().one()
    record.expires_at = utc_now_naive() - timedelta(minutes=1)
    session.add(record)
    await session.commit()

    response = await client.post(URL, json={"action": "verify", "email": account.email, "code": code, "newPassword": "n3wpass"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid or expired code"}


async def test_email_failure_still_reports_success(client: AsyncClient, register, email_upstream):
    account = await register()
    email_upstream.responder = lambda request: httpx.Response(500, json={"message": "down"})

    response = await client.post(URL, json={"action": "send", "email": account.email})

    assert response.status_code == 200
    assert response.json()["success"] is True


@pytest.mark.parametrize(
    "body,error",
    [
        ({"action": "send"}, "Email is required"),
        ({"action": "verify", "email": "user@example.com"}, "Code and new password are required"),
        ({"action": "verify", "email": "user@example.com", "code": "123456", "newPassword": "abc"},
         "Password must be at least 6 characters"),
        ({"action": "resend", "email": "user@example.com"}, "Invalid action"),
    ],
)
async def test_validation(client: AsyncClient, body, error):
    response = await client.post(URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": error}
