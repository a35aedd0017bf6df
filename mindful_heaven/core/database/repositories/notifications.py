"""
Notification repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.notifications import Notification
from .base import AsyncBaseRepository


class NotificationRepository(AsyncBaseRepository[Notification]):
    """Repository for in-app notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())  # type: ignore[attr-defined]
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, notification_id: str, user_id: str) -> Optional[Notification]:
        notification = await self.get_by_id(notification_id)
        if notification is None or notification.user_id != user_id:
            return None
        return notification

    async def unread_count(self, user_id: str) -> int:
        stmt = (
            select(func.count(Notification.id))
            .where(Notification.user_id == user_id)
            .where(Notification.read == False)  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the user read.

        Returns:
            Number of notifications updated
        """
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.read == False)  # noqa: E712
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
