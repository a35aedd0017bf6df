"""
API endpoints for accounts.

Sign-up creates the account together with its anonymous profile. Tokens are
bearer JWTs; every other router authenticates with them.
"""

from fastapi import APIRouter, status

from mindful_heaven.core.models.io import (
    ChangePasswordRequest,
    CurrentUserRead,
    LoginRequest,
    SignupRequest,
    TokenResponse,
)
from mindful_heaven.server.services.accounts import AccountService, issue_token
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter(tags=["auth"])


@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Create an account and its anonymous profile, and sign in.",
    response_description="Access token for the new account.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Invalid email, weak password or email already registered"},
    },
)
async def signup(payload: SignupRequest, session: SessionDep) -> TokenResponse:
    """
    Create an account.

    - **email**: Login email, case-insensitive.
    - **password**: At least 6 characters.
    """
    user = await AccountService(session).signup(payload.email, payload.password)
    return TokenResponse(access_token=issue_token(user), user_id=user.id)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Exchange email and password for an access token.",
    response_description="Access token.",
    responses={
        200: {"description": "Signed in"},
        401: {"description": "Invalid email or password"},
    },
)
async def login(payload: LoginRequest, session: SessionDep) -> TokenResponse:
    user = await AccountService(session).login(payload.email, payload.password)
    return TokenResponse(access_token=issue_token(user), user_id=user.id)


@router.get(
    "/me",
    response_model=CurrentUserRead,
    summary="Current User",
    description="Identity of the authenticated caller.",
)
async def me(user: CurrentUserDep) -> CurrentUserRead:
    return CurrentUserRead(id=user.id, email=user.email)


@router.post(
    "/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change Password",
    description="Change the password of the authenticated caller.",
    responses={
        204: {"description": "Password changed"},
        400: {"description": "Password too short"},
    },
)
async def change_password(payload: ChangePasswordRequest, user: CurrentUserDep, session: SessionDep) -> None:
    await AccountService(session).change_password(user, payload.new_password)


@router.delete(
    "/account",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Account",
    description="Delete the caller's account and every record it owns: profile, chats, forum posts, "
    "peer conversations, mood logs, notifications and security questions.",
    responses={204: {"description": "Account deleted"}},
)
async def delete_account(user: CurrentUserDep, session: SessionDep) -> None:
    await AccountService(session).delete_account(user)
