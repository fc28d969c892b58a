"""
bindings.py - Input bindings
Single responsibility: adapt raw keyboard/focus events to store commands.
"""

from typing import Any, Callable

import flet as ft

from todoapp.config import ENTER_KEY, ESCAPE_KEY
from todoapp.reactive.observable import Observable, Subscription
from todoapp.reactive.scheduler import Scheduler

KeyHandler = Callable[[Any, Any], Any]


# ---------------------------------------------------------------------------
# Key-filtered handlers
# ---------------------------------------------------------------------------


def key_handler_factory(key: str) -> Callable[[KeyHandler], KeyHandler]:
    """
    Build a binder for one key.

    The binder wraps handler(data, event) so that it is only invoked for
    events whose ``key`` equals ``key``; every other event is dropped.
    """

    def bind(handler: KeyHandler) -> KeyHandler:
        def wrapped(data, event):
            if getattr(event, "key", None) == key:
                return handler(data, event)
            return None

        wrapped.key = key
        return wrapped

    return bind


enter_key = key_handler_factory(ENTER_KEY)
escape_key = key_handler_factory(ESCAPE_KEY)


def key_listener(control, data, *handlers: KeyHandler) -> ft.KeyboardListener:
    """
    Wrap an input so key releases while it has focus reach ``handlers``.

    Each handler is called as handler(data, event); key-filtered handlers
    drop the events that are not theirs.
    """

    def on_key_up(event) -> None:
        for handler in handlers:
            handler(data, event)

    return ft.KeyboardListener(content=control, on_key_up=on_key_up)


# ---------------------------------------------------------------------------
# Focus
# ---------------------------------------------------------------------------


class SelectAndFocus:
    """
    Keep a control focused while ``has_focus`` is True.

    A focus event on the control re-applies focus. Changes of ``has_focus``
    are applied on the next scheduler turn, after the bindings updating the
    same control in the current pass have run. An ``on_focus`` handler
    already set on the control keeps being called.
    """

    def __init__(self, control, has_focus: Observable, scheduler: Scheduler):
        self.control = control
        self.has_focus = has_focus
        self._scheduler = scheduler
        self._pending = None
        self._chained_on_focus = getattr(control, "on_focus", None)
        control.on_focus = self._on_focus
        self._subscription = Subscription(has_focus, self._on_change)
        self._on_change(has_focus.peek())

    def _on_focus(self, e=None) -> None:
        if self._chained_on_focus is not None:
            self._chained_on_focus(e)
        if self._subscription is not None:
            # flet's focus() may be a coroutine; the scheduler awaits it
            self._scheduler.call_soon(self.control.focus)

    def _on_change(self, _value) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self._scheduler.call_soon(self._apply)

    def _apply(self):
        self._pending = None
        if self._subscription is None or not self.has_focus.peek():
            return None
        return self.control.focus()

    def dispose(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
