"""
Security question and password reset I/O models.

The reset endpoints accept camelCase ``newPassword`` as sent by the web
client; every field is optional at the schema level because missing fields
are reported by the reset services with their own messages.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SecurityQuestionCatalogue(BaseModel):
    """Questions a user may choose from."""

    questions: List[str]


class SecurityQuestionsRead(BaseModel):
    """The caller's configured questions; answers are never returned."""

    has_questions: bool
    question1: Optional[str] = None
    question2: Optional[str] = None


class SecurityQuestionsSave(BaseModel):
    question1: str
    question2: str
    answer1: str
    answer2: str


class SecurityResetRequest(BaseModel):
    """Body of ``POST /security-password-reset``."""

    model_config = ConfigDict(populate_by_name=True)

    action: Optional[str] = None
    email: Optional[str] = None
    answer1: Optional[str] = None
    answer2: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")


class CodeResetRequest(BaseModel):
    """Body of ``POST /password-reset``."""

    model_config = ConfigDict(populate_by_name=True)

    action: Optional[str] = None
    email: Optional[str] = None
    code: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")
