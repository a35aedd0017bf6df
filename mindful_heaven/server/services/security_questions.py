"""
Security question settings of a signed-in user.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.security_questions import SecurityQuestion
from mindful_heaven.core.database.repositories import SecurityQuestionRepository
from mindful_heaven.core.errors import ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.security import hash_answer, new_answer_salt
from mindful_heaven.server.core.constant import SECURITY_QUESTIONS

logger = get_logger(__name__)


class SecurityQuestionService:
    """Reads and replaces the question pair used for password recovery."""

    def __init__(self, session: AsyncSession) -> None:
        self.questions = SecurityQuestionRepository(session)

    async def get(self, user_id: str) -> Optional[SecurityQuestion]:
        return await self.questions.get_by_user_id(user_id)

    async def save(self, user_id: str, question1: str, question2: str, answer1: str, answer2: str) -> SecurityQuestion:
        """
        Store a new question pair with freshly salted answer hashes.

        Raises:
            ValidationFailed: missing or repeated questions, questions outside
                the catalogue, blank answers
        """
        if not question1 or not question2:
            raise ValidationFailed("Please select both security questions")
        if question1 == question2:
            raise ValidationFailed("Please select two different questions")
        if question1 not in SECURITY_QUESTIONS or question2 not in SECURITY_QUESTIONS:
            raise ValidationFailed("Unknown security question")
        if not answer1.strip() or not answer2.strip():
            raise ValidationFailed("Please answer both security questions")

        salt = new_answer_salt()
        record = await self.questions.upsert(
            user_id,
            question1,
            question2,
            salt,
            hash_answer(answer1, salt),
            hash_answer(answer2, salt),
        )
        logger.info(f"Security questions saved: user_id={user_id}")
        return record
