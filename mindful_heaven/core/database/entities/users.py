"""
User account entity.

Stores login identity only. Everything shown to other users lives on the
profile, keyed by the same id.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class User(Base, table=True):
    """Account credentials.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    email: str = Field(index=True, unique=True, max_length=320, description="Lower-cased login email")
    password_hash: str = Field(description="bcrypt hash of the account password")
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
