"""
Pydantic schemas for the task API.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from database.models import TaskStatus


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreate(BaseModel):
    """
    Body of ``POST /tasks``.

    Unknown keys (``owner_id`` included) are dropped; ownership comes from
    the verified token only.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskUpdate(BaseModel):
    """Body of ``PATCH /tasks/{id}``; only fields that are present are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    owner_id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskDeleted(BaseModel):
    message: str = "Task deleted successfully"
    task_id: uuid.UUID
