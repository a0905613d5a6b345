"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import logging

import bcrypt

from utils.errors import InvalidInput

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        logger.warning("Stored password hash could not be parsed")
        return False


class PasswordHasher:
    """Binds the configured work factor to ``hash_password``/``verify_password``."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        # Built up front so an unknown-email login costs exactly one bcrypt call.
        self._dummy_hash = hash_password("dummy-password", rounds=rounds)

    def hash(self, password: str) -> str:
        return hash_password(password, rounds=self.rounds)

    def verify(self, password: str, password_hash: str) -> bool:
        return verify_password(password, password_hash)

    def verify_dummy(self, password: str) -> bool:
        """
        Run a full verification against a throwaway hash.

        Used when the account does not exist so the response time matches
        the wrong-password path.  Always returns ``False``.
        """
        verify_password(password, self._dummy_hash)
        return False
