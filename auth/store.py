"""
Credential store: users and their bcrypt password hashes.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import User
from utils.errors import DuplicateEmail

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive lookup."""
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create(self, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises ``DuplicateEmail`` when the address is taken, including when
        a concurrent registration wins the race to the unique index.
        """
        if await self.find_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(user_id=uuid.uuid4(), email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            logger.info("Registration race lost for an existing email")
            raise DuplicateEmail()
        return user
