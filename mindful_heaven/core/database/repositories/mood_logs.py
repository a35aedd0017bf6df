"""
Mood journal repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.mood_logs import MoodLog
from .base import AsyncBaseRepository


class MoodLogRepository(AsyncBaseRepository[MoodLog]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MoodLog)

    async def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[MoodLog]:
        stmt = (
            select(MoodLog)
            .where(MoodLog.user_id == user_id)
            .order_by(MoodLog.created_at.desc())  # type: ignore[attr-defined]
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
