"""
One-time-code password reset endpoint.

``send`` emails a 6-digit code valid for 10 minutes; ``verify`` spends the
code and sets the new password. The ``send`` answer is the same whether or
not the email has an account.
"""

from fastapi import APIRouter

from mindful_heaven.core.models.io import CodeResetRequest
from mindful_heaven.server.services.deps import CodeResetServiceDep

router = APIRouter(tags=["password-reset"])


@router.post(
    "",
    summary="Reset Password With Emailed Code",
    description="Send a one-time code to an email, or verify a code and set a new password.",
    responses={
        200: {"description": "Code sent (or generic success) / password updated"},
        400: {"description": "Email missing, code or password missing, invalid or expired code, invalid action"},
        404: {"description": "User not found"},
    },
)
async def password_reset(payload: CodeResetRequest, service: CodeResetServiceDep) -> dict:
    """
    Run one step of the reset.

    - **action**: ``send`` or ``verify``.
    - **email**: Account email.
    - **code**: The emailed code, for ``verify``.
    - **newPassword**: New password, for ``verify``.
    """
    return await service.handle(payload)
