"""
Security question entity.

Holds the two configured prompts and salted hashes of their answers. The
plain answers are never stored.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now_naive


class SecurityQuestion(Base, table=True):
    """Security-question pair of one user.

    Table: security_questions
    """

    __tablename__ = "security_questions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, unique=True, max_length=36)
    question1: str
    question2: str
    salt: str = Field(max_length=64)
    answer1_hash: str = Field(max_length=64)
    answer2_hash: str = Field(max_length=64)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"SecurityQuestion(user_id={self.user_id})"
