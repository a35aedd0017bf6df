"""
Mood journal I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mindful_heaven.core.database.entities.mood_logs import Mood


class MoodLogCreate(BaseModel):
    mood: Mood
    notes: Optional[str] = None


class MoodLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mood: Mood
    notes: Optional[str] = None
    created_at: datetime
