from __future__ import annotations

import asyncio

from blockfall.scheduler import AsyncioTimer, ManualTimer, TickScheduler


def test_manual_timer_fires_every_interval() -> None:
    timer = ManualTimer()
    fired: list[float] = []
    timer.call_every(100, lambda: fired.append(timer.now))
    timer.advance(99)
    assert fired == []
    timer.advance(251)
    assert fired == [100, 200, 300]
    assert timer.now == 350


def test_manual_timer_cancel_stops_callbacks() -> None:
    timer = ManualTimer()
    fired: list[float] = []
    handle = timer.call_every(10, lambda: fired.append(timer.now))
    timer.advance(25)
    handle.cancel()
    timer.advance(100)
    assert fired == [10, 20]
    assert timer.pending == 0


def test_callback_may_cancel_its_own_timer() -> None:
    timer = ManualTimer()
    fired: list[float] = []

    def once() -> None:
        fired.append(timer.now)
        handle.cancel()

    handle = timer.call_every(10, once)
    timer.advance(100)
    assert fired == [10]


def test_scheduler_tags_ticks_with_generation() -> None:
    timer = ManualTimer()
    ticks: list[int] = []
    scheduler = TickScheduler(timer, ticks.append, interval_ms=500)
    scheduler.start()
    timer.advance(1000)
    assert len(ticks) == 2
    assert all(scheduler.is_current(g) for g in ticks)

    scheduler.stop()
    assert not scheduler.running
    assert not any(scheduler.is_current(g) for g in ticks)
    timer.advance(1000)
    assert len(ticks) == 2


def test_restart_begins_a_fresh_period() -> None:
    timer = ManualTimer()
    ticks: list[int] = []
    scheduler = TickScheduler(timer, ticks.append, interval_ms=500)
    scheduler.start()
    timer.advance(400)
    scheduler.start()
    timer.advance(400)
    assert ticks == []
    timer.advance(100)
    assert len(ticks) == 1
    assert timer.pending == 1


def test_asyncio_timer_fires_until_cancelled() -> None:
    async def scenario() -> tuple[int, int]:
        fired: list[int] = []
        handle = AsyncioTimer().call_every(5, lambda: fired.append(1))
        await asyncio.sleep(0.05)
        handle.cancel()
        seen = len(fired)
        await asyncio.sleep(0.03)
        return seen, len(fired)

    seen, final = asyncio.run(scenario())
    assert seen >= 1
    assert final == seen
