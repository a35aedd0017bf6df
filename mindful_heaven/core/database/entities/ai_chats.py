"""
AI chat session entity models.

A chat session is one conversation with the support assistant; its messages
are the transcript replayed to the completion relay on every send.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class MessageRole(str, Enum):
    """Role of message sender in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatSession(Base, table=True):
    """Conversation with the AI assistant.

    Table: ai_chats
    """

    __tablename__ = "ai_chats"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    title: str = Field(default="New Chat", max_length=200, description="Chat session title")
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)

    def __repr__(self) -> str:
        return f"ChatSession(id={self.id}, title={self.title})"


class ChatMessage(Base, table=True):
    """Individual message within a chat session.

    Table: ai_chat_messages
    """

    __tablename__ = "ai_chat_messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    chat_id: str = Field(foreign_key="ai_chats.id", index=True, max_length=36)
    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)

    def __repr__(self) -> str:
        return f"ChatMessage(id={self.id}, role={self.role}, chat_id={self.chat_id})"
