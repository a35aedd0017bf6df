"""
Security-question password reset endpoint.

One endpoint, three actions selected by ``action``: ``get-questions``,
``verify-answers`` and ``verify-and-reset``. No authentication; the answers
are the proof of identity.
"""

from fastapi import APIRouter

from mindful_heaven.core.models.io import SecurityResetRequest
from mindful_heaven.server.services.deps import SecurityResetServiceDep

router = APIRouter(tags=["password-reset"])


@router.post(
    "",
    summary="Reset Password With Security Questions",
    description="Look up the questions of an account, verify answers, or verify answers and set a new password.",
    responses={
        200: {"description": "Questions, verification result, or password updated"},
        400: {"description": "Missing required fields, password too short, or invalid action"},
        401: {"description": "Security answers are incorrect"},
        404: {"description": "No security questions for this email"},
        500: {"description": "Failed to update password"},
    },
)
async def security_password_reset(payload: SecurityResetRequest, service: SecurityResetServiceDep) -> dict:
    """
    Run one step of the reset.

    - **action**: ``get-questions``, ``verify-answers`` or ``verify-and-reset``.
    - **email**: Account email.
    - **answer1**, **answer2**: Answers, for the verify actions.
    - **newPassword**: New password, for ``verify-and-reset``.
    """
    return await service.handle(payload)
