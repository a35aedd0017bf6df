"""
Peer-to-peer messaging entity models.

Deleting a message never removes the row: ``deleted_for_sender`` hides it from
its sender only, ``deleted_for_everyone`` hides it from both participants.
Hiding a conversation is per user and recorded in ``deleted_conversations``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class PeerChat(Base, table=True):
    """Conversation between two users.

    Table: peer_chats
    """

    __tablename__ = "peer_chats"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    participant1_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    participant2_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)

    def other_participant(self, user_id: str) -> str:
        return self.participant2_id if self.participant1_id == user_id else self.participant1_id

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.participant1_id, self.participant2_id)


class PeerMessage(Base, table=True):
    """Message inside a peer chat, optionally carrying one image or video.

    Table: peer_messages
    """

    __tablename__ = "peer_messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    chat_id: str = Field(foreign_key="peer_chats.id", index=True, max_length=36)
    sender_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    content: str = Field(default="")
    image_url: Optional[str] = Field(default=None)
    video_url: Optional[str] = Field(default=None)
    deleted_for_sender: bool = Field(default=False)
    deleted_for_everyone: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)


class HiddenConversation(Base, table=True):
    """Marks a peer chat as removed from one user's conversation list.

    Table: deleted_conversations
    """

    __tablename__ = "deleted_conversations"
    __table_args__ = (
        UniqueConstraint("user_id", "chat_id", name="uq_deleted_conversations_user_chat"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    chat_id: str = Field(foreign_key="peer_chats.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
