"""
computed.py - Derived values
Single responsibility: keep a value derived from observables current.
"""

from typing import Any, Callable

import snarfx

from todoapp.reactive.observable import untracked


class Computed(snarfx.Computed):
    """
    Value derived from observables, lists and other computeds.

    Dependencies are whatever the read function touched on its last run,
    so branches not taken are not tracked. Evaluation is lazy: a change
    only marks the value stale, the next get() recomputes it.

    Passing ``write`` makes the computed writable: set(v) calls the setter
    instead of storing a value. A read function that writes to one of its
    own sources is not re-run by that write.
    """

    __slots__ = ("_write_fn", "name")

    def __init__(
        self,
        read: Callable[[], Any],
        write: Callable[[Any], None] | None = None,
        name: str | None = None,
    ):
        super().__init__(read)
        self._write_fn = write
        self.name = name or getattr(read, "__name__", "computed")

    def peek(self) -> Any:
        return untracked(self.get)

    @property
    def writable(self) -> bool:
        return self._write_fn is not None

    def set(self, value: Any) -> None:
        if self._write_fn is None:
            raise TypeError(f"Computed '{self.name}' is read-only")
        self._write_fn(value)

    def __repr__(self) -> str:
        return f"Computed({self.name})"
