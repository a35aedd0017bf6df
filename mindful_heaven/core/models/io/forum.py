"""
Forum I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mindful_heaven.core.database.entities.forum import ForumCategory


class ForumPostCreate(BaseModel):
    title: str
    content: str
    category: ForumCategory = ForumCategory.GENERAL


class ForumPostRead(BaseModel):
    """Post as listed in the forum, with its author's alias and reply count."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str
    category: ForumCategory
    author_alias: str = Field(description="Anonymous alias of the author")
    reply_count: int = 0
    created_at: datetime
    updated_at: datetime


class ForumReplyCreate(BaseModel):
    content: str


class ForumReplyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    user_id: str
    content: str
    author_alias: str
    created_at: datetime
