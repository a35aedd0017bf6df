"""
Community forum entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class ForumCategory(str, Enum):
    GENERAL = "general"
    STRESS = "stress"
    ANXIETY = "anxiety"
    DEPRESSION = "depression"
    RELATIONSHIPS = "relationships"
    ACADEMICS = "academics"


class ForumPost(Base, table=True):
    """Discussion thread opened by a user.

    Table: forum_posts
    """

    __tablename__ = "forum_posts"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    title: str = Field(max_length=300)
    content: str
    category: ForumCategory = Field(default=ForumCategory.GENERAL)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)


class ForumReply(Base, table=True):
    """Reply to a forum post.

    Table: forum_replies
    """

    __tablename__ = "forum_replies"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    post_id: str = Field(foreign_key="forum_posts.id", index=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    content: str
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)
