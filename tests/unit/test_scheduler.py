"""Unit tests for the debounce schedulers."""

import asyncio

import pytest

from configurator.domain.formula.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    """Tests for the virtual-clock scheduler."""

    def test_callbacks_run_when_due(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []
        scheduler.call_later(0.3, lambda: calls.append("a"))

        assert scheduler.advance(0.2) == 0
        assert calls == []
        assert scheduler.advance(0.1) == 1
        assert calls == ["a"]
        assert scheduler.now() == pytest.approx(0.3)

    def test_due_order_then_scheduling_order(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []
        scheduler.call_later(0.4, lambda: calls.append("late"))
        scheduler.call_later(0.1, lambda: calls.append("first"))
        scheduler.call_later(0.1, lambda: calls.append("second"))

        scheduler.advance(1.0)

        assert calls == ["first", "second", "late"]

    def test_cancelled_callbacks_do_not_run(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []
        handle = scheduler.call_later(0.1, lambda: calls.append("a"))

        handle.cancel()

        assert scheduler.pending == 0
        assert scheduler.advance(1.0) == 0
        assert calls == []

    def test_callbacks_scheduled_while_advancing(self) -> None:
        scheduler = ManualScheduler()
        calls: list[float] = []

        def first() -> None:
            calls.append(scheduler.now())
            scheduler.call_later(0.2, lambda: calls.append(scheduler.now()))

        scheduler.call_later(0.1, first)
        scheduler.advance(0.5)

        assert calls == [pytest.approx(0.1), pytest.approx(0.3)]
        assert scheduler.now() == pytest.approx(0.5)

    def test_run_all(self) -> None:
        scheduler = ManualScheduler(start=10.0)
        scheduler.call_later(5.0, lambda: None)
        scheduler.call_later(2.0, lambda: None)

        assert scheduler.run_all() == 2
        assert scheduler.now() == pytest.approx(15.0)
        assert scheduler.pending == 0

    def test_negative_delay_runs_immediately(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []
        scheduler.call_later(-1.0, lambda: calls.append("a"))

        scheduler.advance(0.0)

        assert calls == ["a"]


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_runs_on_event_loop(self) -> None:
        scheduler = AsyncioScheduler()
        done = asyncio.Event()

        scheduler.call_later(0.01, done.set)

        await asyncio.wait_for(done.wait(), timeout=1.0)
        assert done.is_set()

    @pytest.mark.asyncio
    async def test_cancelled_handle(self) -> None:
        scheduler = AsyncioScheduler()
        calls: list[str] = []

        handle = scheduler.call_later(0.01, lambda: calls.append("a"))
        handle.cancel()
        await asyncio.sleep(0.05)

        assert calls == []
        assert scheduler.now() == pytest.approx(asyncio.get_running_loop().time(), abs=1.0)
