"""
Security question repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.security_questions import SecurityQuestion
from ..entities.users import User
from .base import AsyncBaseRepository


class SecurityQuestionRepository(AsyncBaseRepository[SecurityQuestion]):
    """Repository for security-question records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SecurityQuestion)

    async def get_by_user_id(self, user_id: str) -> Optional[SecurityQuestion]:
        stmt = select(SecurityQuestion).where(SecurityQuestion.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[SecurityQuestion]:
        """Record of the account registered under ``email``, if both exist."""
        stmt = (
            select(SecurityQuestion)
            .join(User, User.id == SecurityQuestion.user_id)
            .where(User.email == email.strip().lower())
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert(
        self, user_id: str, question1: str, question2: str, salt: str, answer1_hash: str, answer2_hash: str
    ) -> SecurityQuestion:
        """Create or replace the user's question pair."""
        record = await self.get_by_user_id(user_id)
        if record is None:
            record = SecurityQuestion(
                user_id=user_id,
                question1=question1,
                question2=question2,
                salt=salt,
                answer1_hash=answer1_hash,
                answer2_hash=answer2_hash,
            )
            return await self.create(record)

        record.question1 = question1
        record.question2 = question2
        record.salt = salt
        record.answer1_hash = answer1_hash
        record.answer2_hash = answer2_hash
        return await self.update(record)
