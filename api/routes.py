"""
Task REST routes.

Every handler takes the caller's ``Identity`` from the auth gate and hands
``identity.subject_id`` to the repository as the owner.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_identity
from auth.models import Identity
from database.task_repository import TaskRepository
from utils.schemas import TaskCreate, TaskDeleted, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def task_repository(session: AsyncSession = Depends(db_session)) -> TaskRepository:
    return TaskRepository(session)


@router.get("", response_model=List[TaskOut])
async def list_tasks(
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(task_repository),
):
    return await repo.list(identity.subject_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(task_repository),
):
    return await repo.create(
        identity.subject_id,
        title=body.title,
        description=body.description,
        status=body.status,
    )


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(task_repository),
):
    return await repo.get(task_id, identity.subject_id)


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(task_repository),
):
    return await repo.update(
        task_id,
        identity.subject_id,
        body.model_dump(exclude_unset=True),
    )


@router.delete("/{task_id}", response_model=TaskDeleted)
async def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(task_repository),
):
    await repo.delete(task_id, identity.subject_id)
    return TaskDeleted(task_id=task_id)
