"""
AI chat session repository.

This module provides data access operations for chat sessions and their
message history. Every lookup is scoped to the owning user.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now_naive
from ..entities.ai_chats import ChatMessage, ChatSession, MessageRole
from .base import AsyncBaseRepository


class ChatSessionRepository(AsyncBaseRepository[ChatSession]):
    """Repository for chat session data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ChatSession)

    async def list_for_user(self, user_id: str) -> List[ChatSession]:
        """Sessions of a user, most recently active first."""
        stmt = (
            select(ChatSession)
            .where(ChatSession.user_id == user_id)
            .order_by(ChatSession.updated_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, chat_id: str, user_id: str) -> Optional[ChatSession]:
        chat = await self.get_by_id(chat_id)
        if chat is None or chat.user_id != user_id:
            return None
        return chat

    async def delete_with_messages(self, chat: ChatSession) -> None:
        await self.session.execute(delete(ChatMessage).where(ChatMessage.chat_id == chat.id))
        await self.session.delete(chat)
        await self.session.commit()

    async def get_messages(self, chat_id: str, limit: Optional[int] = None, offset: Optional[int] = None) -> List[ChatMessage]:
        """Messages of a session in chronological order."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.chat_id == chat_id)
            .order_by(ChatMessage.created_at.asc())  # type: ignore[attr-defined]
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_messages(self, chat_id: str, role: Optional[MessageRole] = None) -> int:
        stmt = select(ChatMessage.id).where(ChatMessage.chat_id == chat_id)
        if role is not None:
            stmt = stmt.where(ChatMessage.role == role)
        result = await self.session.execute(stmt)
        return len(result.scalars().all())

    async def add_message(self, chat: ChatSession, role: MessageRole, content: str) -> ChatMessage:
        """Append a message and bump the session's ``updated_at``."""
        message = ChatMessage(chat_id=chat.id, role=role, content=content)
        self.session.add(message)
        chat.updated_at = utc_now_naive()
        self.session.add(chat)
        await self.session.commit()
        await self.session.refresh(message)
        return message
