"""
Notification entity.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class NotificationType(str, Enum):
    FORUM = "forum"
    MESSAGE = "message"
    SYSTEM = "system"


class ReferenceType(str, Enum):
    """What ``reference_id`` points at."""

    FORUM_POST = "forum_post"
    PEER_CHAT = "peer_chat"


class Notification(Base, table=True):
    """In-app notification for a user.

    Table: notifications
    """

    __tablename__ = "notifications"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    title: str = Field(max_length=200)
    message: str
    type: NotificationType = Field(default=NotificationType.SYSTEM)
    read: bool = Field(default=False, index=True)
    reference_id: Optional[str] = Field(default=None, max_length=36)
    reference_type: Optional[ReferenceType] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)
