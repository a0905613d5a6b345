"""
Tests for the ownership-scoped task repository.
"""

import uuid

import pytest

from auth.store import CredentialStore
from database.models import TaskStatus
from database.task_repository import TaskRepository
from utils.errors import InvalidInput, NotFound


async def _two_users(db):
    store = CredentialStore(db)
    alice = await store.create("alice@example.com", "h1")
    bob = await store.create("bob@example.com", "h2")
    return alice.user_id, bob.user_id


class TestCreate:
    @pytest.mark.asyncio
    async def test_defaults(self, db):
        alice, _ = await _two_users(db)
        task = await TaskRepository(db).create(alice, "Buy milk")
        assert task.title == "Buy milk"
        assert task.description is None
        assert task.status == TaskStatus.PENDING
        assert task.owner_id == alice

    @pytest.mark.asyncio
    async def test_explicit_status_and_description(self, db):
        alice, _ = await _two_users(db)
        task = await TaskRepository(db).create(alice, "Write report", "Q3 numbers", "in_progress")
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.description == "Q3 numbers"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   "])
    async def test_empty_title(self, db, title):
        alice, _ = await _two_users(db)
        with pytest.raises(InvalidInput):
            await TaskRepository(db).create(alice, title)

    @pytest.mark.asyncio
    async def test_title_stored_as_given(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "  Buy milk ")
        assert task.title == "  Buy milk "
        updated = await repo.update(task.task_id, alice, {"title": " Buy oat milk"})
        assert updated.title == " Buy oat milk"

    @pytest.mark.asyncio
    async def test_unknown_status(self, db):
        alice, _ = await _two_users(db)
        with pytest.raises(InvalidInput, match="Status must be one of"):
            await TaskRepository(db).create(alice, "Task", status="archived")


class TestOwnership:
    @pytest.mark.asyncio
    async def test_list_only_returns_own_tasks(self, db):
        alice, bob = await _two_users(db)
        repo = TaskRepository(db)
        await repo.create(alice, "a1")
        await repo.create(alice, "a2")
        await repo.create(bob, "b1")
        assert {t.title for t in await repo.list(alice)} == {"a1", "a2"}
        assert [t.title for t in await repo.list(bob)] == ["b1"]

    @pytest.mark.asyncio
    async def test_get_other_users_task_is_not_found(self, db):
        alice, bob = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")

        assert (await repo.get(task.task_id, alice)).task_id == task.task_id

        with pytest.raises(NotFound) as foreign:
            await repo.get(task.task_id, bob)
        with pytest.raises(NotFound) as missing:
            await repo.get(uuid.uuid4(), bob)
        assert foreign.value.message == missing.value.message

    @pytest.mark.asyncio
    async def test_get_accepts_string_ids(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        assert (await repo.get(str(task.task_id), alice)).title == "Buy milk"

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, db):
        alice, _ = await _two_users(db)
        with pytest.raises(NotFound):
            await TaskRepository(db).get("not-a-uuid", alice)

    @pytest.mark.asyncio
    async def test_update_other_users_task_is_not_found(self, db):
        alice, bob = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        with pytest.raises(NotFound):
            await repo.update(task.task_id, bob, {"title": "hijacked"})
        assert (await repo.get(task.task_id, alice)).title == "Buy milk"

    @pytest.mark.asyncio
    async def test_delete_other_users_task_is_not_found(self, db):
        alice, bob = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        with pytest.raises(NotFound):
            await repo.delete(task.task_id, bob)
        # objects already loaded in the session stay usable
        assert task.title == "Buy milk"
        assert (await repo.get(task.task_id, alice)).task_id == task.task_id


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_partial_update(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk", "2 litres")
        updated = await repo.update(task.task_id, alice, {"status": "completed"})
        assert updated.status == TaskStatus.COMPLETED
        assert updated.title == "Buy milk"
        assert updated.description == "2 litres"

    @pytest.mark.asyncio
    async def test_owner_cannot_be_changed(self, db):
        alice, bob = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        updated = await repo.update(task.task_id, alice, {"owner_id": bob, "title": "Buy oat milk"})
        assert updated.owner_id == alice
        assert updated.title == "Buy oat milk"
        assert await repo.list(bob) == []

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk", "2 litres")
        updated = await repo.update(task.task_id, alice, {"description": None})
        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_rejects_empty_title(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        with pytest.raises(InvalidInput):
            await repo.update(task.task_id, alice, {"title": " "})

    @pytest.mark.asyncio
    async def test_delete_is_permanent(self, db):
        alice, _ = await _two_users(db)
        repo = TaskRepository(db)
        task = await repo.create(alice, "Buy milk")
        await repo.delete(task.task_id, alice)
        with pytest.raises(NotFound):
            await repo.get(task.task_id, alice)
        with pytest.raises(NotFound):
            await repo.delete(task.task_id, alice)
