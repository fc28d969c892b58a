"""
persister.py - Debounced snapshot persistence
Single responsibility: load the stored task snapshot and write it back
after changes settle.
"""
import json
import logging
from typing import Any

from todoapp.config import PERSIST_DEBOUNCE_SECONDS, STORAGE_KEY
from todoapp.reactive.debounce import DebouncedReaction
from todoapp.reactive.scheduler import Scheduler
from todoapp.services.task_store import TaskStore

logger = logging.getLogger(__name__)


def parse_snapshot(raw: str | None) -> list[dict[str, Any]]:
    """Stored JSON -> list of records. Anything unusable becomes []."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Stored snapshot is not valid JSON; starting empty")
        return []
    if not isinstance(data, list):
        logger.warning("Stored snapshot is not a list; starting empty")
        return []
    return [r for r in data if isinstance(r, dict)]


def load_snapshot(storage, key: str = STORAGE_KEY) -> list[dict[str, Any]]:
    return parse_snapshot(storage.get(key))


def serialize_snapshot(records: list[dict[str, Any]]) -> str:
    return json.dumps(
        [{"title": r["title"], "completed": r["completed"]} for r in records],
        ensure_ascii=False,
    )


class TaskPersister:
    """
    Writes the whole task list to storage once changes have been quiet for
    ``delay`` seconds. Depends on the list structure and on every task's
    title/completed, so any of those re-arms the timer.
    """

    def __init__(
        self,
        store: TaskStore,
        storage,
        scheduler: Scheduler,
        key: str = STORAGE_KEY,
        delay: float = PERSIST_DEBOUNCE_SECONDS,
    ):
        self.store = store
        self.storage = storage
        self.key = key
        self.flush_count = 0
        self._reaction = DebouncedReaction(
            source=store.snapshot,
            effect=self._write,
            scheduler=scheduler,
            delay=delay,
        )

    @property
    def pending(self) -> bool:
        return self._reaction.pending

    def _write(self, records: list[dict[str, Any]]) -> None:
        self.storage.set(self.key, serialize_snapshot(records))
        self.flush_count += 1
        logger.debug("Persisted %d task(s) under %s", len(records), self.key)

    def flush_now(self) -> bool:
        return self._reaction.flush_now()

    def dispose(self) -> None:
        self._reaction.dispose()
