"""Cancelable delayed tasks for debounced recomputation.

``ManualScheduler`` runs on a virtual clock that only moves when
``advance`` is called, which makes debounce behaviour deterministic in
tests and in the CLI. ``AsyncioScheduler`` delegates to an event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass(order=True)
class ManualHandle:
    """A pending callback on a ManualScheduler."""

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit virtual clock.

    Example:
        >>> scheduler = ManualScheduler()
        >>> calls = []
        >>> _ = scheduler.call_later(0.3, lambda: calls.append("ran"))
        >>> _ = scheduler.advance(0.2)
        >>> calls
        []
        >>> _ = scheduler.advance(0.1)
        >>> calls
        ['ran']
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[ManualHandle] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    __call__ = now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(0.0, delay), next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled, not cancelled, callbacks."""
        return sum(1 for h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that falls due.

        Callbacks scheduled while advancing run too if they fall due within
        the same window. Callbacks run in due-time order, ties in scheduling
        order.

        Returns:
            Number of callbacks that ran.
        """
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0].due <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = handle.due
            handle.callback()
            ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Advance until nothing is pending."""
        ran = 0
        while self.pending:
            live = [h for h in self._queue if not h.cancelled]
            ran += self.advance(max(h.due for h in live) - self._now)
        return ran


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    __call__ = now

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)
