"""
Event-loop seam for timers and deferred callbacks.

The engine only needs call_soon / call_later / time. A running asyncio
event loop already provides exactly that, so hosts on asyncio pass their
loop. ManualScheduler is a virtual clock for hosts that drive their own
frame loop (and for deterministic tests).
"""
import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Subset of asyncio.AbstractEventLoop used by the engine."""

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> Cancellable:
        ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable:
        ...

    def time(self) -> float:
        ...


def get_default_scheduler() -> Scheduler:
    """
    Return the running asyncio loop.

    :raises RuntimeError: when called outside a running event loop
    """
    return asyncio.get_running_loop()


class ManualHandle:
    """Handle returned by ManualScheduler."""

    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self._callback(*self._args)


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Nothing runs until advance() or run_pending() is called. Callbacks run
    in deadline order, FIFO among equal deadlines, including callbacks
    scheduled by other callbacks while advancing.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def time(self) -> float:
        return self._now

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        return self._push(self._now, callback, args)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        return self._push(self._now + max(0.0, delay), callback, args)

    def run_pending(self) -> int:
        """Run everything due now; returns number of callbacks run."""
        return self.advance(0.0)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        :param seconds: How far to move the clock
        :return: Number of callbacks run
        """
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = max(self._now, when)
            handle._run()
            ran += 1
        self._now = target
        return ran

    def pending_count(self) -> int:
        """Number of scheduled callbacks not yet run or cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())

    def next_deadline(self) -> Optional[float]:
        live = [when for when, _, handle in self._queue if not handle.cancelled()]
        return min(live) if live else None

    def _push(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]) -> ManualHandle:
        handle = ManualHandle(when, callback, args)
        heapq.heappush(self._queue, (when, next(self._counter), handle))
        return handle
