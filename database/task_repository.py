"""
Ownership-scoped task persistence.

Every query filters on the task id *and* the owner id in a single
statement.  A task that exists but belongs to someone else is therefore
indistinguishable from one that does not exist: both raise ``NotFound``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, TaskStatus
from utils.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
UPDATABLE_FIELDS = ("title", "description", "status")


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise InvalidInput("Title must not be empty")
    return title


def _coerce_status(status: Any) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise InvalidInput(f"Status must be one of: {allowed}")


class TaskRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            raise

    async def _get_owned(self, task_id: str | uuid.UUID, owner_id: uuid.UUID) -> Task:
        tid = _to_uuid(task_id)
        if tid is None:
            raise NotFound(TASK_NOT_FOUND)
        result = await self._session.execute(
            select(Task).where(Task.task_id == tid, Task.owner_id == owner_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFound(TASK_NOT_FOUND)
        return task

    async def list(self, owner_id: uuid.UUID) -> List[Task]:
        result = await self._session.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at)
        )
        return list(result.scalars().all())

    async def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: Optional[str] = None,
        status: Optional[TaskStatus | str] = None,
    ) -> Task:
        """Insert a task owned by ``owner_id``; status defaults to ``pending``."""
        now = datetime.now(timezone.utc)
        task = Task(
            task_id=uuid.uuid4(),
            owner_id=owner_id,
            title=_clean_title(title),
            description=description,
            status=_coerce_status(status) if status is not None else TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._session.add(task)
        await self._commit()
        logger.info("Created task %s for %s", task.task_id, owner_id)
        return task

    async def get(self, task_id: str | uuid.UUID, owner_id: uuid.UUID) -> Task:
        return await self._get_owned(task_id, owner_id)

    async def update(
        self,
        task_id: str | uuid.UUID,
        owner_id: uuid.UUID,
        fields: Mapping[str, Any],
    ) -> Task:
        """
        Apply the supplied ``title`` / ``description`` / ``status``.

        Any other key, ``owner_id`` included, is ignored.  A ``None`` title
        or status counts as not supplied; a ``None`` description clears it.
        """
        task = await self._get_owned(task_id, owner_id)

        changes: dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if key == "title" and value is not None:
                changes["title"] = _clean_title(value)
            elif key == "status" and value is not None:
                changes["status"] = _coerce_status(value)
            elif key == "description":
                changes["description"] = value

        if changes:
            for key, value in changes.items():
                setattr(task, key, value)
            task.updated_at = datetime.now(timezone.utc)
            await self._commit()
            logger.info("Updated task %s (%s)", task.task_id, ", ".join(sorted(changes)))
        return task

    async def delete(self, task_id: str | uuid.UUID, owner_id: uuid.UUID) -> None:
        tid = _to_uuid(task_id)
        if tid is None:
            raise NotFound(TASK_NOT_FOUND)
        result = await self._session.execute(
            delete(Task).where(Task.task_id == tid, Task.owner_id == owner_id)
        )
        if result.rowcount == 0:
            raise NotFound(TASK_NOT_FOUND)
        await self._commit()
        logger.info("Deleted task %s", tid)
