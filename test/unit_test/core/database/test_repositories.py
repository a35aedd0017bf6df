"""Unit tests for repository queries not covered through the API."""

from datetime import timedelta

import pytest

from mindful_heaven.core.database.base import utc_now_naive
from mindful_heaven.core.database.entities.password_reset_codes import PasswordResetCode
from mindful_heaven.core.database.entities.profiles import Profile, default_alias
from mindful_heaven.core.database.entities.users import User
from mindful_heaven.core.database.repositories import (
    PasswordResetCodeRepository,
    ProfileRepository,
    UserRepository,
)

pytestmark = pytest.mark.asyncio


class TestPasswordResetCodeRepository:
    async def test_find_valid_skips_used_and_expired(self, session):
        repo = PasswordResetCodeRepository(session)
        now = utc_now_naive()
        await repo.create(PasswordResetCode(email="a@example.com", code="111111", expires_at=now - timedelta(seconds=1)))
        await repo.create(
            PasswordResetCode(email="a@example.com", code="222222", expires_at=now + timedelta(minutes=5), used=True)
        )
        fresh = await repo.create(
            PasswordResetCode(email="a@example.com", code="333333", expires_at=now + timedelta(minutes=5))
        )

        assert await repo.find_valid("a@example.com", "111111", now) is None
        assert await repo.find_valid("a@example.com", "222222", now) is None
        assert (await repo.find_valid("a@example.com", "333333", now)).id == fresh.id
        assert await repo.find_valid("b@example.com", "333333", now) is None

    async def test_invalidate_unused(self, session):
        repo = PasswordResetCodeRepository(session)
        expires = utc_now_naive() + timedelta(minutes=5)
        for code in ("111111", "222222"):
            await repo.create(PasswordResetCode(email="a@example.com", code=code, expires_at=expires))

        assert await repo.invalidate_unused("a@example.com") == 2
        assert await repo.invalidate_unused("a@example.com") == 0


class TestUserRepository:
    async def test_get_by_email_normalises(self, session):
        user = await UserRepository(session).create(User(email="person@example.com", password_hash="x"))

        assert (await UserRepository(session).get_by_email("  Person@Example.COM ")).id == user.id


class TestProfileRepository:
    async def test_aliases_fall_back_to_default(self, session):
        repo = ProfileRepository(session)
        await repo.create(Profile(user_id="user-with-profile", anonymous_alias="Calm Owl"))

        aliases = await repo.aliases_for(["user-with-profile", "abcdef123"])

        assert aliases == {"user-with-profile": "Calm Owl", "abcdef123": default_alias("abcdef123")}

    async def test_get_or_create(self, session):
        repo = ProfileRepository(session)

        created = await repo.get_or_create("abcdef123")

        assert created.anonymous_alias == "AnonymousABCDEF"
        assert (await repo.get_or_create("abcdef123")).id == created.id
