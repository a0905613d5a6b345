"""
JWT-style token creation and verification.

Tokens are a base64url-encoded JSON payload and a base64url HMAC-SHA256
signature over that encoded payload, joined by a dot::

    <payload>.<signature>

The secret and lifetime are handed to ``TokenService`` when it is built;
nothing here reads the environment.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from enum import Enum
from typing import Callable, Union

from pydantic import BaseModel, ValidationError


class TokenError(str, Enum):
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


class TokenClaims(BaseModel):
    sub: str
    email: str
    iat: int
    exp: int


def _b64encode(data: bytes) -> str:
    return urlsafe_b64encode(data).rstrip(b"=").decode()


def _b64decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return urlsafe_b64decode(padded.encode("ascii"))


class TokenService:
    """Issues and verifies signed, time-bounded access tokens."""

    def __init__(
        self,
        secret: str,
        expiry_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, payload_segment: str) -> str:
        digest = hmac.new(self._secret, payload_segment.encode(), hashlib.sha256).digest()
        return _b64encode(digest)

    def issue(self, subject_id: str, subject_email: str) -> str:
        """Create a signed token for ``subject_id`` valid for ``expiry_seconds``."""
        issued_at = int(self._clock())
        payload = {
            "sub": str(subject_id),
            "email": subject_email,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        segment = _b64encode(json.dumps(payload, separators=(",", ":")).encode())
        return segment + "." + self._sign(segment)

    def verify(self, token: str) -> Union[TokenClaims, TokenError]:
        """
        Check signature and expiry.

        Returns the decoded claims, or the ``TokenError`` describing the
        first check that failed.  Never raises.
        """
        if not isinstance(token, str):
            return TokenError.MALFORMED
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return TokenError.MALFORMED
        segment, signature = parts

        try:
            signature.encode("ascii")
        except UnicodeEncodeError:
            return TokenError.MALFORMED
        if not hmac.compare_digest(signature.encode("ascii"), self._sign(segment).encode("ascii")):
            return TokenError.BAD_SIGNATURE

        try:
            claims = TokenClaims.model_validate(json.loads(_b64decode(segment)))
        except (ValueError, ValidationError):
            return TokenError.MALFORMED

        if claims.exp <= self._clock():
            return TokenError.EXPIRED
        return claims
