# tests/test_debounce.py

import asyncio

from todoapp.reactive.debounce import DebouncedReaction
from todoapp.reactive.observable import Observable, ObservableList
from todoapp.reactive.scheduler import AsyncioScheduler


def test_effect_runs_once_after_quiet(scheduler) -> None:
    value = Observable(0)
    effects = []
    reaction = DebouncedReaction(value.get, effects.append, scheduler, delay=0.5)

    for n in range(1, 6):
        value.set(n)
        scheduler.advance(0.1)

    assert effects == []
    scheduler.advance(0.5)
    assert effects == [5]
    assert reaction.run_count == 1


def test_equal_writes_do_not_arm_but_forced_ones_do(scheduler) -> None:
    value = Observable("same")
    effects = []
    DebouncedReaction(value.get, effects.append, scheduler, delay=0.5)

    value.set("same")
    scheduler.advance(1)
    assert effects == []

    value.force_set("same")
    scheduler.advance(1)
    assert effects == ["same"]


def test_new_sources_rearm_immediately(scheduler) -> None:
    items = ObservableList()
    effects = []
    DebouncedReaction(
        lambda: [o.get() for o in items], effects.append, scheduler, delay=0.5
    )

    late = Observable("new")
    items.append(late)
    scheduler.advance(0.4)
    late.set("edited")
    scheduler.advance(0.4)

    # 0.8s since the append, but only 0.4s since the edit
    assert effects == []
    scheduler.advance(0.1)
    assert effects == [["edited"]]


def test_asyncio_scheduler_runs_and_cancels() -> None:
    ran = []

    async def scenario():
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(lambda fn: loop.create_task(fn()))

        kept = scheduler.call_later(0.01, lambda: ran.append("kept"))
        dropped = scheduler.call_later(0.01, lambda: ran.append("dropped"))
        dropped.cancel()

        async def focus():
            ran.append("awaited")

        scheduler.call_soon(focus)
        await asyncio.sleep(0.05)
        return kept

    kept = asyncio.run(scenario())

    assert sorted(ran) == ["awaited", "kept"]
    assert kept.done()


def test_asyncio_scheduler_debounces_reaction() -> None:
    effects = []

    async def scenario():
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(lambda fn: loop.create_task(fn()))
        value = Observable(0)
        DebouncedReaction(value.get, effects.append, scheduler, delay=0.05)
        for n in range(1, 4):
            value.set(n)
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.2)

    asyncio.run(scenario())

    assert effects == [3]
