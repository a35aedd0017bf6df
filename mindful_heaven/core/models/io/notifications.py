"""
Notification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mindful_heaven.core.database.entities.notifications import NotificationType, ReferenceType


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    message: str
    type: NotificationType
    read: bool
    reference_id: Optional[str] = None
    reference_type: Optional[ReferenceType] = None
    created_at: datetime


class UnreadCount(BaseModel):
    count: int


class MarkedRead(BaseModel):
    updated: int
