import asyncio

import pytest

from pokerui.scheduler import ManualScheduler, Scheduler


def test_manual_scheduler_runs_callbacks_when_due():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(100, calls.append, "late")
    scheduler.call_later(50, calls.append, "early")

    assert scheduler.advance(49) == 0
    assert scheduler.advance(1) == 1
    assert calls == ["early"]

    scheduler.advance(50)
    assert calls == ["early", "late"]
    assert scheduler.now_ms == 100
    assert scheduler.pending == []


def test_cancelled_task_never_runs():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.call_later(10, calls.append, 1)

    assert task.cancel() is True
    assert task.cancel() is False
    scheduler.advance(100)

    assert calls == []
    assert task.cancelled and not task.done


def test_callbacks_scheduled_while_advancing():
    scheduler = ManualScheduler()
    calls = []

    def chain():
        calls.append(scheduler.now_ms)
        scheduler.call_later(20, calls.append, "chained")

    scheduler.call_later(10, chain)
    scheduler.advance(25)
    assert calls == [10]

    scheduler.advance(5)
    assert calls == [10, "chained"]


def test_run_all_and_failing_callback(caplog):
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(5000, calls.append, "later")
    scheduler.call_later(1, lambda: 1 / 0)

    assert scheduler.run_all() == 2
    assert calls == ["later"]
    assert any(r.levelname == "ERROR" for r in caplog.records)


@pytest.mark.asyncio
async def test_loop_scheduler_uses_event_loop():
    scheduler = Scheduler()
    fired = asyncio.Event()
    task = scheduler.call_later(5, fired.set)

    await asyncio.wait_for(fired.wait(), 1)
    assert task.done


@pytest.mark.asyncio
async def test_loop_scheduler_cancel():
    scheduler = Scheduler()
    calls = []
    task = scheduler.call_later(5, calls.append, 1)
    task.cancel()

    await asyncio.sleep(0.02)
    assert calls == []
