"""
models.py - Domain models
Single responsibility: the task entity and its persisted representation.
"""
from typing import Any, Optional

from todoapp.reactive.observable import Observable


class Task:
    """
    A single list item.

    title, completed and editing are observables. previous_title holds the
    title from before the edit started and is set iff editing is True.
    Only title and completed are ever persisted.
    """

    def __init__(self, title: str, completed: bool = False):
        self.title = Observable(title)
        self.completed = Observable(bool(completed))
        self.editing = Observable(False)
        self.previous_title: Optional[str] = None

    def begin_edit(self) -> None:
        # capture before the editing flag notifies anyone
        self.previous_title = self.title.peek()
        self.editing.set(True)

    def end_edit(self) -> None:
        self.editing.set(False)
        self.previous_title = None

    def to_snapshot(self) -> dict[str, Any]:
        return {"title": self.title.get(), "completed": self.completed.get()}

    @classmethod
    def from_snapshot(cls, record: dict[str, Any]) -> "Task":
        title = record.get("title")
        return cls(
            title="" if title is None else str(title),
            # only a real JSON true counts; "false" or 1 are not completions
            completed=record.get("completed") is True,
        )

    def __repr__(self) -> str:
        return (
            f"Task(title={self.title.peek()!r}, completed={self.completed.peek()}, "
            f"editing={self.editing.peek()})"
        )
