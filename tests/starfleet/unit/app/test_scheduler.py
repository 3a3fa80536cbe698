from __future__ import annotations

import pytest

from starfleet.game.app.scheduler import Scheduler


def test_scheduler_call_later_runs_when_due() -> None:
    scheduler = Scheduler()
    calls: list[str] = []
    scheduler.call_later(0.2, lambda: calls.append("once"))

    assert scheduler.advance(0.1) == 0
    assert calls == []
    assert scheduler.advance(0.1) == 1
    assert calls == ["once"]
    assert scheduler.advance(1.0) == 0


def test_scheduler_cancel_prevents_execution() -> None:
    scheduler = Scheduler()
    calls: list[str] = []
    task_id = scheduler.call_later(0.1, lambda: calls.append("never"))
    scheduler.cancel(task_id)
    assert scheduler.advance(0.2) == 0
    assert calls == []


def test_scheduler_drain_runs_everything_pending() -> None:
    scheduler = Scheduler()
    calls: list[int] = []
    scheduler.call_later(5.0, lambda: calls.append(2))
    scheduler.call_later(1.0, lambda: calls.append(1))
    assert scheduler.drain() == 2
    assert calls == [1, 2]
    assert scheduler.now_seconds == pytest.approx(5.0)
    assert scheduler.drain() == 0


def test_scheduler_validates_time_arguments() -> None:
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-0.1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)
