"""
Account I/O models for API requests and responses.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    email: str = Field(description="Login email; stored lower-cased")
    password: str = Field(description="Account password")


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for an access token."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Access token issued on signup or login."""

    access_token: str
    token_type: str = "bearer"
    user_id: str


class CurrentUserRead(BaseModel):
    """Identity of the authenticated caller."""

    id: str
    email: str


class ChangePasswordRequest(BaseModel):
    """Schema for changing the password of the authenticated user."""

    new_password: str = Field(description="New account password")
