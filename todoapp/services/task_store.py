"""
task_store.py - Task store
Single responsibility: own the task list, its derived views and commands.

Notification rule: a plain write notifies only on a changed value. Commands
that must re-trigger every dependent regardless of the stored value (the
bulk "mark all" toggle) use force_set. Multi-write commands run as one
batch, so subscribers see a single, settled update.
"""
import logging
from typing import Any, Iterable

from todoapp.domain.filters import SHOW_ACTIVE, SHOW_ALL, SHOW_COMPLETED
from todoapp.domain.models import Task
from todoapp.reactive.computed import Computed
from todoapp.reactive.observable import Observable, ObservableList, action, batch, unwrap

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(self, records: Iterable[dict[str, Any]] | None = None):
        # restored exactly once, at construction
        self.tasks = ObservableList(Task.from_snapshot(r) for r in (records or []))
        self.current = Observable("")
        self.show_mode = Observable(SHOW_ALL)

        self.filtered_tasks = Computed(self._filtered_tasks, name="filtered_tasks")
        self.completed_count = Computed(self._completed_count, name="completed_count")
        self.remaining_count = Computed(self._remaining_count, name="remaining_count")
        self.all_completed = Computed(
            self._all_completed_read,
            write=self._all_completed_write,
            name="all_completed",
        )

    # -- derived views -----------------------------------------------------

    def _filtered_tasks(self) -> list[Task]:
        mode = self.show_mode.get()
        if mode == SHOW_ACTIVE:
            return [t for t in self.tasks if not t.completed.get()]
        if mode == SHOW_COMPLETED:
            return [t for t in self.tasks if t.completed.get()]
        return self.tasks.get()

    def _completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed.get())

    def _remaining_count(self) -> int:
        return len(self.tasks) - self.completed_count.get()

    def _all_completed_read(self) -> bool:
        return self.remaining_count.get() == 0

    def _all_completed_write(self, value: bool) -> None:
        value = bool(value)
        with batch():
            for task in self.tasks.peek():
                # forced: tasks already at value must notify too
                task.completed.force_set(value)

    # -- commands ----------------------------------------------------------

    @action
    def add(self, text: str | None = None) -> Task | None:
        """Append a task titled with the trimmed text (default: the input buffer)."""
        raw = self.current.peek() if text is None else text
        title = (raw or "").strip()
        if not title:
            return None
        task = Task(title)
        self.tasks.append(task)
        self.current.set("")
        logger.debug("Added task %r", title)
        return task

    def remove(self, task: Task) -> bool:
        return self.tasks.remove(task)

    def remove_completed(self) -> list[Task]:
        removed = self.tasks.remove_where(lambda t: t.completed.peek())
        if removed:
            logger.debug("Removed %d completed task(s)", len(removed))
        return removed

    def edit_task(self, task: Task) -> None:
        task.begin_edit()

    @action
    def save_editing(self, task: Task) -> None:
        """Leave edit mode, committing the trimmed title or removing the task if empty."""
        task.end_edit()
        title = task.title.peek() or ""
        trimmed = title.strip()
        if title != trimmed:
            task.title.set(trimmed)
        if not trimmed:
            self.remove(task)

    @action
    def cancel_editing(self, task: Task) -> None:
        previous = task.previous_title
        task.end_edit()
        if previous is not None:
            task.title.set(previous)

    # -- helpers -----------------------------------------------------------

    def get_label(self, count) -> str:
        return "item" if unwrap(count) == 1 else "items"

    def snapshot(self) -> list[dict[str, Any]]:
        """Persisted representation; reads are tracked when called inside a reaction."""
        return [t.to_snapshot() for t in self.tasks]
