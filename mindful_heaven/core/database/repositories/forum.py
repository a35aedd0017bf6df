"""
Forum repository.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.forum import ForumCategory, ForumPost, ForumReply
from .base import AsyncBaseRepository


class ForumRepository(AsyncBaseRepository[ForumPost]):
    """Repository for forum posts and their replies."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ForumPost)

    async def list_posts(
        self,
        category: Optional[ForumCategory] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ForumPost]:
        """Posts newest first, optionally filtered by category and a search term.

        The search term matches title or content case-insensitively.
        """
        stmt = select(ForumPost).order_by(ForumPost.created_at.desc())  # type: ignore[attr-defined]
        if category is not None:
            stmt = stmt.where(ForumPost.category == category)
        if search and search.strip():
            term = search.strip().lower()
            stmt = stmt.where(
                or_(func.lower(ForumPost.title).contains(term), func.lower(ForumPost.content).contains(term))
            )
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def reply_counts(self, post_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = (
            select(ForumReply.post_id, func.count(ForumReply.id))
            .where(ForumReply.post_id.in_(ids))
            .group_by(ForumReply.post_id)
        )
        result = await self.session.execute(stmt)
        return {post_id: count for post_id, count in result.all()}

    async def delete_post(self, post: ForumPost) -> None:
        """Delete a post together with its replies."""
        await self.session.execute(delete(ForumReply).where(ForumReply.post_id == post.id))
        await self.session.delete(post)
        await self.session.commit()

    async def get_replies(self, post_id: str) -> List[ForumReply]:
        stmt = (
            select(ForumReply)
            .where(ForumReply.post_id == post_id)
            .order_by(ForumReply.created_at.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_reply(self, reply_id: str) -> Optional[ForumReply]:
        return await self.session.get(ForumReply, reply_id)

    async def add_reply(self, post: ForumPost, user_id: str, content: str) -> ForumReply:
        reply = ForumReply(post_id=post.id, user_id=user_id, content=content)
        self.session.add(reply)
        await self.session.commit()
        await self.session.refresh(reply)
        return reply

    async def delete_reply(self, reply: ForumReply) -> None:
        await self.session.delete(reply)
        await self.session.commit()
