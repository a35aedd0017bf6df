"""
Service error hierarchy.

Services raise these instead of ``HTTPException`` when the caller expects the
structured ``{"error": ...}`` body of the relay and password-reset endpoints.
A registered exception handler renders them.
"""

from __future__ import annotations

from typing import Any, Dict


class ServiceError(Exception):
    """Base error carrying an HTTP status and a user-facing message."""

    status_code: int = 500

    def __init__(self, message: str, /, status_code: int | None = None, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = extra

    def to_payload(self) -> Dict[str, Any]:
        """Body returned to the client."""
        return {"error": self.message, **self.extra}


class ValidationFailed(ServiceError):
    """Missing or malformed input."""

    status_code = 400


class NotAuthorized(ServiceError):
    """Wrong security answers or credentials. Messages stay deliberately vague."""

    status_code = 401


class NotFound(ServiceError):
    """The referenced record does not exist."""

    status_code = 404


class UpstreamError(ServiceError):
    """A third-party API failed; status is chosen by the caller's mapping."""

    status_code = 500
