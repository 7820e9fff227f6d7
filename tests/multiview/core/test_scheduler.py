from __future__ import annotations

import asyncio

from multiview.core.scheduler import AsyncioScheduler, ManualScheduler, PollingScheduler


def test_manual_scheduler_runs_due_callbacks_in_order():
    scheduler = ManualScheduler()
    ran = []
    scheduler.call_later(2, lambda: ran.append("late"))
    scheduler.call_later(1, lambda: ran.append("early"))

    assert scheduler.advance(0.5) == 0
    assert scheduler.advance(2) == 2
    assert ran == ["early", "late"]


def test_cancel_is_idempotent():
    scheduler = ManualScheduler()
    ran = []
    handle = scheduler.call_later(1, lambda: ran.append(1))

    scheduler.cancel(handle)
    scheduler.cancel(handle)
    scheduler.cancel("unknown")
    scheduler.advance(5)

    assert ran == []
    assert scheduler.pending() == 0


def test_polling_scheduler_follows_clock():
    now = [100.0]
    scheduler = PollingScheduler(clock=lambda: now[0])
    ran = []
    scheduler.call_later(2, lambda: ran.append(1))

    assert scheduler.run_due() == 0
    now[0] = 102.0
    assert scheduler.run_due() == 1
    assert ran == [1]


def test_asyncio_scheduler_uses_loop_timers():
    async def main():
        scheduler = AsyncioScheduler()
        ran = []
        scheduler.call_later(0.01, lambda: ran.append("kept"))
        cancelled = scheduler.call_later(0.01, lambda: ran.append("cancelled"))
        scheduler.cancel(cancelled)
        await asyncio.sleep(0.05)
        return ran

    assert asyncio.run(main()) == ["kept"]


def test_polling_scheduler_is_driven_by_run_due_only():
    scheduler = PollingScheduler(clock=lambda: 0.0)

    assert not hasattr(scheduler, "advance")
    scheduler.call_later(0, lambda: None)
    assert scheduler.pending() == 1
    assert scheduler.run_due() == 1
