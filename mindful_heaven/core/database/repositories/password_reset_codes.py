"""
One-time reset code repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.password_reset_codes import PasswordResetCode
from .base import AsyncBaseRepository


class PasswordResetCodeRepository(AsyncBaseRepository[PasswordResetCode]):
    """Repository for emailed reset codes."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PasswordResetCode)

    async def invalidate_unused(self, email: str) -> int:
        """Mark every unused code of the email used.

        Returns:
            Number of codes invalidated
        """
        stmt = (
            update(PasswordResetCode)
            .where(PasswordResetCode.email == email)
            .where(PasswordResetCode.used == False)  # noqa: E712
            .values(used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def find_valid(self, email: str, code: str, now: datetime) -> Optional[PasswordResetCode]:
        """Newest unused code matching email and value that expires after ``now``."""
        stmt = (
            select(PasswordResetCode)
            .where(PasswordResetCode.email == email)
            .where(PasswordResetCode.code == code)
            .where(PasswordResetCode.used == False)  # noqa: E712
            .where(PasswordResetCode.expires_at > now)
            .order_by(PasswordResetCode.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def mark_used(self, record: PasswordResetCode) -> PasswordResetCode:
        record.used = True
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record
