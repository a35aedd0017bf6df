"""
AI chat I/O models for API requests and responses.

This module contains the schemas of the chat session endpoints and of the
completion relay.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mindful_heaven.core.database.entities.ai_chats import MessageRole


class ChatSessionRead(BaseModel):
    """Schema for reading chat session from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = Field(description="Chat session title")
    created_at: datetime
    updated_at: datetime


class ChatSessionCreate(BaseModel):
    """Schema for creating chat session via API."""

    title: Optional[str] = Field(default=None, description="Chat session title, 'New Chat' when omitted")


class ChatSessionUpdate(BaseModel):
    """Schema for renaming a chat session."""

    title: str


class ChatMessageRead(BaseModel):
    """Schema for reading chat message from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str = Field(description="Chat session ID")
    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    created_at: datetime


class ChatMessageCreate(BaseModel):
    """Schema for appending a message to a chat session."""

    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")


class ChatHistoryRead(BaseModel):
    """Schema for reading full chat history."""

    session: ChatSessionRead
    messages: List[ChatMessageRead]


class RelayMessage(BaseModel):
    """One turn of the conversation forwarded to the completion relay.

    ``role`` is checked by the relay rather than by the schema so that an
    unsupported role yields a 400 with the relay's error body.
    """

    role: str
    content: str


class RelayRequest(BaseModel):
    """Body of ``POST /ai-chat``."""

    messages: List[RelayMessage] = Field(default_factory=list, description="Conversation so far, oldest first")
    stream: bool = Field(default=True, description="Relay the upstream event stream instead of a JSON body")


class RelayCompletion(BaseModel):
    """Non-streaming relay response."""

    content: str
