"""
scheduler.py - Deferred callbacks
Single responsibility: run callbacks later on the UI event loop.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...

    def call_soon(self, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioScheduler:
    """
    Scheduler on top of a ``run_task`` callable (flet's ``page.run_task``).

    Each call starts a task that sleeps for the delay and then runs the
    callback; cancelling the returned task drops the callback. Callbacks may
    return an awaitable, which is awaited on the loop.
    """

    def __init__(self, run_task: Callable[..., Any]):
        self._run_task = run_task

    def call_later(self, delay: float, callback: Callable[[], Any]):
        async def runner():
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                return
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Scheduled callback failed")

        return self._run_task(runner)

    def call_soon(self, callback: Callable[[], Any]):
        return self.call_later(0, callback)
