"""
Password reset by emailed one-time code.

``send`` stores a fresh code (voiding earlier unused ones) and emails it.
``verify`` consumes a matching unexpired code and sets the new password.
The ``send`` response never reveals whether the email is registered.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.base import utc_now_naive
from mindful_heaven.core.database.entities.password_reset_codes import PasswordResetCode
from mindful_heaven.core.database.repositories import PasswordResetCodeRepository, UserRepository
from mindful_heaven.core.errors import NotFound, ServiceError, ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.models.io import CodeResetRequest
from mindful_heaven.core.security import generate_one_time_code
from mindful_heaven.server.core.config import settings

from .accounts import AccountAdminService, check_password_policy, normalize_email
from .email_delivery import EmailDeliveryError, EmailService

logger = get_logger(__name__)


class CodeResetService:
    """Implements the ``send`` and ``verify`` actions."""

    def __init__(self, session: AsyncSession, email_service: EmailService) -> None:
        self.users = UserRepository(session)
        self.codes = PasswordResetCodeRepository(session)
        self.admin = AccountAdminService(session)
        self.email_service = email_service
        self.code_length = settings.password_reset.code_length
        self.code_ttl_minutes = settings.password_reset.code_ttl_minutes

    async def handle(self, request: CodeResetRequest) -> Dict[str, Any]:
        if not request.email:
            raise ValidationFailed("Email is required")
        if request.action == "send":
            return await self.send(request.email)
        if request.action == "verify":
            return await self.verify(request.email, request.code, request.new_password)
        raise ValidationFailed("Invalid action")

    async def send(self, email: str) -> Dict[str, Any]:
        """
        Issue and email a new code.

        Email delivery failures are logged only; the caller sees success
        either way.
        """
        email = normalize_email(email)
        if await self.users.get_by_email(email) is None:
            logger.info("Reset code requested for an unknown email; answering generically")
            return {"success": True, "message": "If an account exists, a code was sent"}

        voided = await self.codes.invalidate_unused(email)
        code = generate_one_time_code(self.code_length)
        await self.codes.create(
            PasswordResetCode(
                email=email,
                code=code,
                expires_at=utc_now_naive() + timedelta(minutes=self.code_ttl_minutes),
            )
        )
        logger.info(f"Reset code issued ({voided} earlier code(s) voided)")

        try:
            await self.email_service.send_reset_code(email, code, self.code_ttl_minutes)
        except EmailDeliveryError as e:
            logger.error(f"Reset code email failed: {e}")

        return {"success": True, "message": "Code sent to your email"}

    async def verify(self, email: str, code: Optional[str], new_password: Optional[str]) -> Dict[str, Any]:
        """
        Consume a code and set the new password.

        The code is marked used and committed before the password changes,
        so a code is spent even if the update then fails.

        Raises:
            ValidationFailed: missing fields, short password, invalid or expired code
            NotFound: the account no longer exists
            ServiceError: the password could not be stored
        """
        if not code or not new_password:
            raise ValidationFailed("Code and new password are required")
        check_password_policy(new_password)

        email = normalize_email(email)
        record = await self.codes.find_valid(email, code.strip(), utc_now_naive())
        if record is None:
            logger.info("Invalid or expired reset code presented")
            raise ValidationFailed("Invalid or expired code")
        await self.codes.mark_used(record)

        user = await self.users.get_by_email(email)
        if user is None:
            raise NotFound("User not found")

        try:
            await self.admin.set_password(user.id, new_password)
        except NotFound as e:
            raise ServiceError("Failed to update password", status_code=500) from e

        logger.info(f"Password reset through one-time code: user_id={user.id}")
        return {"success": True, "message": "Password updated successfully"}
