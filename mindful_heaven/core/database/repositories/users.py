"""
User account repository.

Besides credential lookups this repository owns account purging, which
removes every row that belongs to a user across all domains.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.ai_chats import ChatMessage, ChatSession
from ..entities.forum import ForumPost, ForumReply
from ..entities.mood_logs import MoodLog
from ..entities.notifications import Notification
from ..entities.password_reset_codes import PasswordResetCode
from ..entities.peer_chats import HiddenConversation, PeerChat, PeerMessage
from ..entities.profiles import Profile
from ..entities.security_questions import SecurityQuestion
from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for account credentials."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Look a user up by email, case-insensitively."""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def set_password_hash(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        return await self.update(user)

    async def purge(self, user_id: str) -> bool:
        """Delete a user and all data owned by them.

        Peer chats the user took part in are removed with all their messages,
        since the other participant can no longer reply into them.

        Returns:
            True if the user existed
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        chat_ids = select(ChatSession.id).where(ChatSession.user_id == user_id)
        await self.session.execute(delete(ChatMessage).where(ChatMessage.chat_id.in_(chat_ids)))
        await self.session.execute(delete(ChatSession).where(ChatSession.user_id == user_id))

        own_posts = select(ForumPost.id).where(ForumPost.user_id == user_id)
        await self.session.execute(
            delete(ForumReply).where(or_(ForumReply.user_id == user_id, ForumReply.post_id.in_(own_posts)))
        )
        await self.session.execute(delete(ForumPost).where(ForumPost.user_id == user_id))

        peer_chat_ids = select(PeerChat.id).where(
            or_(PeerChat.participant1_id == user_id, PeerChat.participant2_id == user_id)
        )
        await self.session.execute(delete(PeerMessage).where(PeerMessage.chat_id.in_(peer_chat_ids)))
        await self.session.execute(
            delete(HiddenConversation).where(
                or_(HiddenConversation.user_id == user_id, HiddenConversation.chat_id.in_(peer_chat_ids))
            )
        )
        await self.session.execute(
            delete(PeerChat).where(or_(PeerChat.participant1_id == user_id, PeerChat.participant2_id == user_id))
        )

        for model in (MoodLog, Notification, SecurityQuestion, Profile):
            await self.session.execute(delete(model).where(model.user_id == user_id))
        await self.session.execute(
            update(PasswordResetCode).where(PasswordResetCode.email == user.email).values(used=True)
        )

        await self.session.delete(user)
        await self.session.commit()
        return True
