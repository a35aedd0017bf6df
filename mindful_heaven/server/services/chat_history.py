"""
Service for AI chat sessions and their transcripts.

Wraps the chat session repository with ownership checks and the titling
rule: the first user message of an untitled chat becomes its title.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.ai_chats import ChatMessage, ChatSession, MessageRole
from mindful_heaven.core.database.repositories import ChatSessionRepository
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.server.core.constant import CHAT_TITLE_MAX_CHARS, DEFAULT_CHAT_TITLE

logger = get_logger(__name__)


def title_from_message(content: str) -> str:
    """First 30 characters of the message, with an ellipsis when cut."""
    content = content.strip()
    if len(content) > CHAT_TITLE_MAX_CHARS:
        return f"{content[:CHAT_TITLE_MAX_CHARS]}..."
    return content or DEFAULT_CHAT_TITLE


class ChatHistoryService:
    """Chat sessions of one user."""

    def __init__(self, session: AsyncSession) -> None:
        self.chats = ChatSessionRepository(session)

    async def list_chats(self, user_id: str) -> List[ChatSession]:
        return await self.chats.list_for_user(user_id)

    async def get_chat(self, chat_id: str, user_id: str) -> Optional[ChatSession]:
        return await self.chats.get_for_user(chat_id, user_id)

    async def create_chat(self, user_id: str, title: Optional[str] = None) -> ChatSession:
        chat = await self.chats.create(ChatSession(user_id=user_id, title=(title or "").strip() or DEFAULT_CHAT_TITLE))
        logger.debug(f"Created chat {chat.id} for user {user_id}")
        return chat

    async def rename_chat(self, chat: ChatSession, title: str) -> ChatSession:
        chat.title = title.strip() or DEFAULT_CHAT_TITLE
        return await self.chats.update(chat)

    async def delete_chat(self, chat: ChatSession) -> None:
        await self.chats.delete_with_messages(chat)

    async def messages(self, chat: ChatSession) -> List[ChatMessage]:
        return await self.chats.get_messages(chat.id)

    async def add_message(self, chat: ChatSession, role: MessageRole, content: str) -> ChatMessage:
        """
        Append a message to the transcript.

        The first user message of a chat still carrying the default title
        renames it.
        """
        if role == MessageRole.USER and chat.title == DEFAULT_CHAT_TITLE:
            if await self.chats.count_messages(chat.id, MessageRole.USER) == 0:
                chat.title = title_from_message(content)
        return await self.chats.add_message(chat, role, content)
