"""
Account services.

``AccountService`` covers what a signed-in user (or a visitor signing up or
in) may do with their own credentials. ``AccountAdminService`` changes a
password by user id without a session; only the password reset services use
it, after they have verified the requester by other means.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.profiles import Profile, default_alias
from mindful_heaven.core.database.entities.users import User
from mindful_heaven.core.database.repositories import ProfileRepository, UserRepository
from mindful_heaven.core.errors import NotAuthorized, NotFound, ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.security import MAX_PASSWORD_BYTES, create_access_token, hash_password, verify_password
from mindful_heaven.server.core.config import settings

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def check_password_policy(password: str) -> None:
    minimum = settings.auth.min_password_length
    if len(password) < minimum:
        raise ValidationFailed(f"Password must be at least {minimum} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def issue_token(user: User) -> str:
    return create_access_token(
        user.id,
        settings.auth.jwt_secret,
        settings.auth.jwt_algorithm,
        settings.auth.access_token_expire_minutes,
    )


class AccountService:
    """Sign-up, sign-in and self-service account operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)
        self.profiles = ProfileRepository(session)

    async def signup(self, email: str, password: str) -> User:
        """
        Create an account and its anonymous profile.

        Raises:
            ValidationFailed: blank or already registered email, weak password
        """
        email = normalize_email(email)
        if not email or "@" not in email:
            raise ValidationFailed("A valid email is required")
        check_password_policy(password)
        if await self.users.get_by_email(email) is not None:
            raise ValidationFailed("Email already registered")

        user = await self.users.create(User(email=email, password_hash=hash_password(password)))
        await self.profiles.create(Profile(user_id=user.id, anonymous_alias=default_alias(user.id)))
        logger.info(f"Account created: user_id={user.id}")
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.users.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise NotAuthorized(INVALID_CREDENTIALS)
        return user

    async def change_password(self, user: User, new_password: str) -> None:
        check_password_policy(new_password)
        await self.users.set_password_hash(user, hash_password(new_password))
        logger.info(f"Password changed by account owner: user_id={user.id}")

    async def delete_account(self, user: User) -> None:
        """Remove the account and everything it owns."""
        await self.users.purge(user.id)
        logger.info(f"Account deleted: user_id={user.id}")


class AccountAdminService:
    """Trusted credential updates, keyed by user id."""

    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)

    async def set_password(self, user_id: str, new_password: str) -> User:
        """
        Replace a user's password.

        Raises:
            NotFound: no such user
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        user = await self.users.set_password_hash(user, hash_password(new_password))
        logger.info(f"Password set through admin path: user_id={user_id}")
        return user
