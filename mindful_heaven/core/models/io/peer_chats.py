"""
Peer messaging I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .profiles import PublicProfileRead


class PeerChatStart(BaseModel):
    """Start (or reopen) a chat with another user."""

    other_user_id: str


class PeerChatRead(BaseModel):
    """Entry of the caller's conversation list."""

    id: str
    other_user: PublicProfileRead
    last_message: Optional[str] = Field(default=None, description="Preview of the latest message")
    created_at: datetime
    updated_at: datetime


class PeerMessageCreate(BaseModel):
    """A text message, optionally carrying one uploaded image or video."""

    content: str = ""
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class PeerMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str
    sender_id: str
    content: str
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    deleted_for_sender: bool
    created_at: datetime


class HideResult(BaseModel):
    hidden: int = Field(description="Number of conversations newly hidden")
