# tests/conftest.py

import pytest

from todoapp.services.persister import TaskPersister
from todoapp.services.task_store import TaskStore

from fakes import ManualScheduler, MemoryStorage


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def seeded_store() -> TaskStore:
    """Three tasks: a (open), b (done), c (open)."""
    return TaskStore(
        [
            {"title": "a", "completed": False},
            {"title": "b", "completed": True},
            {"title": "c", "completed": False},
        ]
    )


@pytest.fixture()
def persister(store: TaskStore, storage: MemoryStorage, scheduler: ManualScheduler):
    p = TaskPersister(store, storage, scheduler, key="todos", delay=0.5)
    yield p
    p.dispose()
