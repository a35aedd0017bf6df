"""
Request Dependencies.

Typed ``Annotated`` dependencies for API endpoints: the database session,
the authenticated user, and the services built on top of them. Endpoints
depend on the provider functions here so tests can override them.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database import get_session
from mindful_heaven.core.database.entities.users import User
from mindful_heaven.core.database.repositories import UserRepository
from mindful_heaven.core.security import decode_access_token
from mindful_heaven.server.core.config import settings

from .completion_relay import CompletionRelay, get_completion_relay
from .email_delivery import EmailService, get_email_service
from .object_storage import ObjectStorage, get_object_storage
from .password_reset import CodeResetService
from .security_reset import SecurityResetService

SessionDep = Annotated[AsyncSession, Depends(get_session)]

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    session: SessionDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> User:
    """Resolve the bearer token to a user, or answer 401."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized
    user_id = decode_access_token(credentials.credentials, settings.auth.jwt_secret, settings.auth.jwt_algorithm)
    if user_id is None:
        raise unauthorized
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise unauthorized
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
CompletionRelayDep = Annotated[CompletionRelay, Depends(get_completion_relay)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
ObjectStorageDep = Annotated[ObjectStorage, Depends(get_object_storage)]


def get_security_reset_service(session: SessionDep) -> SecurityResetService:
    return SecurityResetService(session)


def get_code_reset_service(session: SessionDep, email_service: EmailServiceDep) -> CodeResetService:
    return CodeResetService(session, email_service)


SecurityResetServiceDep = Annotated[SecurityResetService, Depends(get_security_reset_service)]
CodeResetServiceDep = Annotated[CodeResetService, Depends(get_code_reset_service)]
