"""This module re-exports the User model and defines the request, response
and identity schemas used by the auth package.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

from database.models import User  # noqa: F401

__all__ = [
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "User",
    "UserPublic",
]


class Identity(BaseModel):
    """A caller identity that has passed the auth gate."""

    model_config = ConfigDict(frozen=True)

    subject_id: uuid.UUID
    subject_email: str


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserPublic(BaseModel):
    """Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    email: str


class LoginResponse(BaseModel):
    email: str
    access_token: str
    token_type: str = "bearer"
