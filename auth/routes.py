"""
Auth API routes — register, login, me.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_auth_service, get_current_identity
from auth.models import (
    Identity,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
)
from auth.service import AuthService
from auth.store import CredentialStore
from utils.errors import Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """Register a new user."""
    return await auth.register(req.email, req.password)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email + password."""
    return await auth.login(req.email, req.password)


@router.get("/me", response_model=UserPublic)
async def me(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(db_session),
) -> UserPublic:
    """Return the account behind the presented token."""
    user = await CredentialStore(session).get_by_id(identity.subject_id)
    if user is None:
        # Token outlived its account.
        raise Unauthorized()
    return UserPublic.model_validate(user)
