"""
Cancellable deferred callbacks.

The form store schedules its autosave through a Scheduler so the debounce
can run on the real event loop in production and on a virtual clock in
tests and tooling.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

AsyncCallback = Callable[[], Awaitable[None]]


@runtime_checkable
class ScheduledTask(Protocol):
    """Handle returned by Scheduler.schedule."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started yet."""
        ...

    @property
    def cancelled(self) -> bool:
        ...


@runtime_checkable
class Scheduler(Protocol):
    def schedule(self, delay: float, callback: AsyncCallback) -> ScheduledTask:
        """Run `callback` once after `delay` seconds."""
        ...


class _AsyncioTask:
    def __init__(self, scheduler: "AsyncioScheduler", callback: AsyncCallback):
        self._scheduler = scheduler
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def _fire(self) -> None:
        if self._cancelled:
            return
        task = asyncio.ensure_future(self._callback())
        self._scheduler._track(task)


class AsyncioScheduler:
    """
    Scheduler backed by the running event loop.

    Spawned callback tasks are kept referenced until they finish so the
    loop does not garbage-collect them mid-flight.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Future] = set()

    def schedule(self, delay: float, callback: AsyncCallback) -> _AsyncioTask:
        loop = asyncio.get_running_loop()
        scheduled = _AsyncioTask(self, callback)
        scheduled._handle = loop.call_later(delay, scheduled._fire)
        return scheduled

    def _track(self, task: asyncio.Future) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Scheduled callback failed: {error!r}", exc_info=error)

    @property
    def pending(self) -> int:
        """Number of callbacks currently running."""
        return len(self._tasks)


class _ManualTask:
    def __init__(self, due: float, sequence: int, callback: AsyncCallback):
        self.due = due
        self.sequence = sequence
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Nothing runs until `advance()` moves the clock past a task's due time.
    Due callbacks run in due order, awaited one after another.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._sequence = 0
        self._tasks: list[_ManualTask] = []

    def schedule(self, delay: float, callback: AsyncCallback) -> _ManualTask:
        self._sequence += 1
        task = _ManualTask(self.now + delay, self._sequence, callback)
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.cancelled)

    async def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that comes due."""
        target = self.now + seconds
        while True:
            due = [t for t in self._tasks if not t.cancelled and t.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.sequence))
            self._tasks.remove(task)
            self.now = task.due
            await task.callback()
        self._tasks = [t for t in self._tasks if not t.cancelled]
        self.now = target
