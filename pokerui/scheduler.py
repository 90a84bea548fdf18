"""
Delayed callbacks for dialog hides and UI resets.

``Scheduler`` runs callbacks on the asyncio event loop. ``ManualScheduler``
keeps a virtual clock that only moves when ``advance`` is called, so delayed
behaviour can be driven step by step.
"""

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple


class ScheduledTask:
    """Handle for a callback that will run once after a delay."""

    def __init__(self, callback: Callable[..., Any], args: tuple, due_ms: float):
        self.callback = callback
        self.args = args
        self.due_ms = due_ms
        self.cancelled = False
        self.done = False
        self._handle: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> bool:
        if self.done or self.cancelled:
            return False
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
        return True

    def run(self):
        if self.cancelled or self.done:
            return
        self.done = True
        try:
            self.callback(*self.args)
        except Exception:
            logging.exception(f"Scheduled callback {getattr(self.callback, '__name__', self.callback)!r} failed")

    def __repr__(self):
        state = "cancelled" if self.cancelled else "done" if self.done else "pending"
        return f"<ScheduledTask {getattr(self.callback, '__name__', self.callback)} at {self.due_ms}ms {state}>"


class Scheduler:
    """Schedules callbacks on the running asyncio loop."""

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args) -> ScheduledTask:
        loop = asyncio.get_running_loop()
        task = ScheduledTask(callback, args, loop.time() * 1000 + max(delay_ms, 0))
        task._handle = loop.call_later(max(delay_ms, 0) / 1000.0, task.run)
        return task


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit virtual clock (milliseconds)."""

    def __init__(self):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args) -> ScheduledTask:
        task = ScheduledTask(callback, args, self.now_ms + max(delay_ms, 0))
        heapq.heappush(self._queue, (task.due_ms, next(self._sequence), task))
        return task

    @property
    def pending(self) -> List[ScheduledTask]:
        return [task for _, _, task in sorted(self._queue) if not task.cancelled and not task.done]

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and run everything that fell due.

        Callbacks scheduled while advancing run too if they fall inside the
        window. Returns the number of callbacks run.
        """
        target = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, due)
            if task.cancelled:
                continue
            task.run()
            ran += 1
        self.now_ms = target
        return ran

    def run_all(self) -> int:
        """Run every pending callback regardless of its delay."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self.now_ms)
        return ran
