"""
FastAPI dependencies for authentication.

``get_current_identity`` is the auth gate: every protected route depends on
it, and it is the only code that turns a bearer token into an
``Identity``.  Handlers never look at the token or the request body to
decide who the caller is.
"""

from __future__ import annotations

import logging
import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenError, TokenService
from auth.models import Identity
from auth.password import PasswordHasher
from auth.service import AuthService
from auth.store import CredentialStore
from database.session import get_db_session
from utils.errors import Unauthorized

logger = logging.getLogger(__name__)


def authenticate_bearer(authorization: Optional[str], tokens: TokenService) -> Identity:
    """
    Verify an ``Authorization`` header value.

    NoToken → rejected.  TokenPresent → verified, or rejected on any
    verification failure.  Rejection is always the same ``Unauthorized``.
    """
    if not authorization:
        logger.debug("Auth gate: no credentials")
        raise Unauthorized()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.debug("Auth gate: unsupported authorization scheme")
        raise Unauthorized()

    result = tokens.verify(token)
    if isinstance(result, TokenError):
        logger.debug("Auth gate: token rejected (%s)", result.value)
        raise Unauthorized()

    try:
        subject_id = uuid.UUID(result.sub)
    except ValueError:
        logger.debug("Auth gate: token subject is not a user id")
        raise Unauthorized()

    return Identity(subject_id=subject_id, subject_email=result.email)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Run the auth gate and attach the verified identity to the request."""
    identity = authenticate_bearer(authorization, tokens)
    request.state.identity = identity
    return identity


def get_auth_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(CredentialStore(session), hasher, tokens)
