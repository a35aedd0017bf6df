"""
Mood journal entity.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class Mood(str, Enum):
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    LOW = "low"
    STRUGGLING = "struggling"


class MoodLog(Base, table=True):
    """One journal entry.

    Table: mood_logs
    """

    __tablename__ = "mood_logs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    mood: Mood
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)
