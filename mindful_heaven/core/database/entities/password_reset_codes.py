"""
One-time password reset code entity.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class PasswordResetCode(Base, table=True):
    """Emailed numeric code authorising one password change.

    Table: password_reset_codes
    """

    __tablename__ = "password_reset_codes"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    email: str = Field(index=True, max_length=320, description="Lower-cased email the code was sent to")
    code: str = Field(max_length=12)
    expires_at: datetime = Field(sa_type=DateTime)
    used: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime, index=True)

    def __repr__(self) -> str:
        return f"PasswordResetCode(id={self.id}, email={self.email}, used={self.used})"
