"""
observable.py - Observable primitives on snarfx
Single responsibility: hold mutable values and notify dependents on change.

Dependency tracking and batching come from snarfx. This module adds the
pieces the store needs on top: untracked reads, forced notification,
identity removal and subscriptions that run once the outermost batch has
settled.
"""

from contextlib import contextmanager
import functools
from typing import Any, Callable

import snarfx
from snarfx._tracking import current_derivation


def untracked(fn: Callable[[], Any]) -> Any:
    """Call fn without registering its reads on the running derivation."""
    token = current_derivation.set(None)
    try:
        return fn()
    finally:
        current_derivation.reset(token)


# ---------------------------------------------------------------------------
# Batching
# ---------------------------------------------------------------------------

_batch_depth = 0
# Subscriptions notified inside the current batch, in first-notified order
_queued: dict = {}


@contextmanager
def batch():
    """
    Group writes into one update.

    Derived values settle inside snarfx's transaction; subscriptions are
    delivered afterwards, each at most once, and only see final values.
    """
    global _batch_depth
    _batch_depth += 1
    try:
        with snarfx.transaction():
            yield
    finally:
        _batch_depth -= 1
        if _batch_depth == 0:
            _drain()


def action(fn):
    """Decorator form of batch()."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        with batch():
            return fn(*args, **kwargs)

    return wrapper


def _drain() -> None:
    while _queued:
        sub = next(iter(_queued))
        del _queued[sub]
        sub._deliver()


# ---------------------------------------------------------------------------
# Observable value
# ---------------------------------------------------------------------------


class Observable(snarfx.Observable):
    """
    Single mutable value.

    set() notifies only when the new value differs (==) from the old one;
    force_set() always notifies.
    """

    __slots__ = ()

    def peek(self) -> Any:
        return untracked(self.get)

    def force_set(self, value: Any) -> None:
        if self.peek() == value:
            self._notify()
        else:
            self.set(value)

    def _notify(self) -> None:
        with batch():
            super()._notify()


# ---------------------------------------------------------------------------
# Observable collection
# ---------------------------------------------------------------------------


class ObservableList(snarfx.ObservableList):
    """Ordered sequence whose structural changes notify dependents."""

    __slots__ = ()

    def get(self) -> list:
        return list(self)

    def peek(self) -> list:
        return list(self._items)

    def remove(self, item: Any) -> bool:
        """Remove by identity. Returns False (no notification) if absent."""
        for i, existing in enumerate(self._items):
            if existing is item:
                del self[i]
                return True
        return False

    def remove_where(self, predicate: Callable[[Any], bool]) -> list:
        """Remove every matching item; survivors keep their relative order."""
        removed = [item for item in self._items if predicate(item)]
        with batch():
            for item in removed:
                self.remove(item)
        return removed

    def _notify(self) -> None:
        with batch():
            super()._notify()


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


class Subscription:
    """
    Calls ``callback(value)`` after every batch that notified ``source``.

    Computed sources are only delivered when their value changed; plain
    observables and lists are delivered on every notification, forced ones
    included.
    """

    def __init__(self, source, callback: Callable[[Any], None]):
        self._source = source
        self.callback = callback
        self._compare = isinstance(source, snarfx.Computed)
        self._started = False
        self._reaction = snarfx.autorun(self._track)
        self._last = source.peek()
        self._started = True

    @property
    def active(self) -> bool:
        return self._reaction is not None

    def _track(self) -> None:
        self._source.get()
        if not self._started:
            return
        _queued[self] = None
        if _batch_depth == 0:
            _drain()

    def _deliver(self) -> None:
        if self._reaction is None:
            return
        value = self._source.peek()
        if self._compare and value == self._last:
            return
        self._last = value
        self.callback(value)

    def dispose(self) -> None:
        if self._reaction is not None:
            self._reaction.dispose()
            self._reaction = None
        _queued.pop(self, None)


def subscribe(source, callback: Callable[[Any], None]) -> Subscription:
    return Subscription(source, callback)


def unwrap(value: Any) -> Any:
    """Return the current value of an observable/computed, or value itself."""
    if isinstance(value, (snarfx.Observable, snarfx.ObservableList, snarfx.Computed)):
        return value.get()
    return value
