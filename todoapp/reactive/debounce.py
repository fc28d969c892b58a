"""
debounce.py - Quiescence-coalesced reactions
Single responsibility: run an effect once after its sources stop changing.
"""

from typing import Any, Callable

import snarfx

from todoapp.reactive.observable import untracked
from todoapp.reactive.scheduler import Scheduler


class DebouncedReaction:
    """
    Reaction whose effect is coalesced over a quiet window.

    ``source`` runs under a snarfx reaction, so every notification from
    anything it read (forced ones included) re-tracks it and (re)arms a
    timer of ``delay`` seconds. Only a timer that survives the whole window
    fires, re-evaluating ``source`` against the latest state and passing
    the result to ``effect``. A burst of changes yields one effect call.
    """

    def __init__(
        self,
        source: Callable[[], Any],
        effect: Callable[[Any], None],
        scheduler: Scheduler,
        delay: float,
    ):
        self._source = source
        self._effect = effect
        self._scheduler = scheduler
        self.delay = delay
        self._pending = None
        self._started = False
        self.run_count = 0
        self._reaction = snarfx.autorun(self._track)
        self._started = True

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _track(self) -> None:
        # re-read on every run: tasks added by this change are tracked too
        self._source()
        if not self._started:
            return
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self._scheduler.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._pending = None
        if self._reaction is None:
            return
        value = untracked(self._source)
        self.run_count += 1
        self._effect(value)

    def flush_now(self) -> bool:
        """Run a pending effect immediately. Returns False if nothing was pending."""
        if self._pending is None:
            return False
        self._pending.cancel()
        self._fire()
        return True

    def dispose(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._reaction is not None:
            self._reaction.dispose()
            self._reaction = None
