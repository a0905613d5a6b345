"""
Registration and login flows.

Registration: password hasher → credential store.
Login: credential store lookup → password verify → token issue.
"""

from __future__ import annotations

import asyncio
import logging

from auth.jwt import TokenService
from auth.models import LoginResponse, UserPublic
from auth.password import PasswordHasher
from auth.store import CredentialStore
from utils.errors import Unauthorized

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, email: str, password: str) -> UserPublic:
        """Create an account; raises ``DuplicateEmail`` if it already exists."""
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = await self.store.create(email, password_hash)
        logger.info("Registered user %s", user.user_id)
        return UserPublic.model_validate(user)

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Exchange credentials for an access token.

        Unknown email and wrong password both raise the same
        ``Unauthorized`` after doing the same amount of bcrypt work.
        """
        user = await self.store.find_by_email(email)
        if user is None:
            await asyncio.to_thread(self.hasher.verify_dummy, password)
            logger.info("Login rejected")
            raise Unauthorized()

        ok = await asyncio.to_thread(self.hasher.verify, password, user.password_hash)
        if not ok:
            logger.info("Login rejected")
            raise Unauthorized()

        token = self.tokens.issue(str(user.user_id), user.email)
        logger.info("Login: %s", user.user_id)
        return LoginResponse(email=user.email, access_token=token)
