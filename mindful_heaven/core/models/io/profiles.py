"""
Profile I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileRead(BaseModel):
    """Schema for reading a profile from API."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    anonymous_alias: str = Field(description="Anonymous identity shown to other users")
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    notifications_enabled: bool
    created_at: datetime
    updated_at: datetime


class PublicProfileRead(BaseModel):
    """Profile fields visible to other users."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    anonymous_alias: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile. Omitted fields are left unchanged."""

    anonymous_alias: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    notifications_enabled: Optional[bool] = None
