"""
Profile entity.

A profile carries the anonymous identity other users see in the forum and
in peer messaging.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


def default_alias(user_id: str) -> str:
    """Alias assigned at sign-up, e.g. ``Anonymous3F2A1C``."""
    return f"Anonymous{user_id[:6].upper()}"


class Profile(Base, table=True):
    """Public, anonymous profile of a user.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, unique=True, max_length=36)
    anonymous_alias: str = Field(max_length=100, description="Display name shown instead of the real identity")
    avatar_url: Optional[str] = Field(default=None, description="Public URL of the avatar image")
    bio: Optional[str] = Field(default=None, description="Free-text bio")
    notifications_enabled: bool = Field(default=True, description="Whether the user receives notifications")
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Profile(user_id={self.user_id}, alias={self.anonymous_alias})"
