"""
Password reset by security questions.

A visitor who forgot their password proves who they are by answering the
two questions configured on their account, then picks a new password.

The flow is three independent actions. ``verify-and-reset`` checks the
answers again from scratch; nothing ties it to an earlier ``verify-answers``
call, so the server keeps no state between the steps.

Every failure that could tell an attacker whether an email is registered
(unknown account, account without questions, wrong answers) produces the
same response as its legitimate counterpart.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.security_questions import SecurityQuestion
from mindful_heaven.core.database.repositories import SecurityQuestionRepository
from mindful_heaven.core.errors import NotAuthorized, NotFound, ServiceError, ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.models.io import SecurityResetRequest
from mindful_heaven.core.security import verify_answer

from .accounts import AccountAdminService, check_password_policy, normalize_email

logger = get_logger(__name__)

NO_QUESTIONS_MESSAGE = "No security questions set up for this account. Please contact support."
WRONG_ANSWERS_MESSAGE = "Security answers are incorrect"


class SecurityResetService:
    """Implements the ``get-questions``, ``verify-answers`` and ``verify-and-reset`` actions."""

    def __init__(self, session: AsyncSession) -> None:
        self.questions = SecurityQuestionRepository(session)
        self.admin = AccountAdminService(session)

    async def handle(self, request: SecurityResetRequest) -> Dict[str, Any]:
        """Dispatch on ``request.action``."""
        logger.info(f"Security password reset action: {request.action}")
        if request.action == "get-questions":
            return await self.get_questions(request.email)
        if request.action == "verify-answers":
            return await self.verify_answers(request.email, request.answer1, request.answer2)
        if request.action == "verify-and-reset":
            return await self.verify_and_reset(request.email, request.answer1, request.answer2, request.new_password)
        raise ValidationFailed("Invalid action")

    async def _matching_record(self, email: str, answer1: str, answer2: str) -> Optional[SecurityQuestion]:
        """The account's record if both answers match, else None."""
        record = await self.questions.get_by_email(normalize_email(email))
        if record is None:
            return None
        first_ok = verify_answer(answer1, record.salt, record.answer1_hash)
        second_ok = verify_answer(answer2, record.salt, record.answer2_hash)
        return record if first_ok and second_ok else None

    async def get_questions(self, email: Optional[str]) -> Dict[str, Any]:
        """
        The two question texts configured for an email.

        Raises:
            NotFound: ``no_questions`` for unknown emails and for accounts
                without questions alike
        """
        record = await self.questions.get_by_email(normalize_email(email)) if email else None
        if record is None:
            raise NotFound("no_questions", message=NO_QUESTIONS_MESSAGE)
        return {"question1": record.question1, "question2": record.question2}

    async def verify_answers(
        self, email: Optional[str], answer1: Optional[str], answer2: Optional[str]
    ) -> Dict[str, Any]:
        if not email or not answer1 or not answer2:
            raise ValidationFailed("Missing required fields")

        if await self._matching_record(email, answer1, answer2) is None:
            logger.info("Security answers verification failed")
            raise NotAuthorized(WRONG_ANSWERS_MESSAGE, verified=False)
        return {"verified": True}

    async def verify_and_reset(
        self,
        email: Optional[str],
        answer1: Optional[str],
        answer2: Optional[str],
        new_password: Optional[str],
    ) -> Dict[str, Any]:
        """
        Check the answers and, if they match, set the new password.

        Raises:
            ValidationFailed: missing fields or a password below the minimum length
            NotAuthorized: answers do not match, or the email is unknown
            ServiceError: the password could not be stored
        """
        if not email or not answer1 or not answer2 or not new_password:
            raise ValidationFailed("Missing required fields")
        check_password_policy(new_password)

        record = await self._matching_record(email, answer1, answer2)
        if record is None:
            logger.info("Security answers verification failed before reset")
            raise NotAuthorized(WRONG_ANSWERS_MESSAGE)

        try:
            await self.admin.set_password(record.user_id, new_password)
        except NotFound as e:
            logger.error(f"Password update failed after verification: user_id={record.user_id}")
            raise ServiceError("Failed to update password", status_code=500) from e

        logger.info(f"Password reset through security questions: user_id={record.user_id}")
        return {"success": True, "message": "Password updated successfully"}
