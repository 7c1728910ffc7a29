"""
Timer primitives driven by a fixed-length repeating tick.

A session owns exactly one TimerSlot. Countdown, Stopwatch and one-shot
delays all arm that slot, so arming anything cancels whatever was there
before and a session can never have two live timer handles.
"""
import logging
from typing import Any, Callable, Optional

from .scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)


class TimerSlot:
    """
    Single outstanding timer handle.

    Every arm() bumps a generation counter; a callback whose generation is
    stale, or that fires after close(), does nothing.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handle: Optional[Cancellable] = None
        self._generation = 0
        self._closed = False

    def arm(self, delay: float, callback: Callable[[], Any]) -> int:
        """
        Cancel the current handle, then schedule callback after delay seconds.

        :return: Generation token of the new handle
        """
        self.cancel()
        if self._closed:
            logger.debug("arm() on a closed timer slot ignored")
            return self._generation

        self._generation += 1
        generation = self._generation
        self._handle = self._scheduler.call_later(delay, self._fire, generation, callback)
        return generation

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1

    def close(self) -> None:
        """Cancel and refuse any further arming."""
        self.cancel()
        self._closed = True

    def now(self) -> float:
        """Current scheduler clock reading in seconds."""
        return self._scheduler.time()

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def generation(self) -> int:
        return self._generation

    def _fire(self, generation: int, callback: Callable[[], Any]) -> None:
        if self._closed or generation != self._generation:
            logger.debug(f"Stale timer callback dropped (generation={generation})")
            return
        self._handle = None
        callback()


class Countdown:
    """
    Per-item countdown in whole units.

    Ticks once per unit; on_tick receives the remaining units, on_expire
    fires when the count reaches zero. elapsed reads the scheduler clock,
    so it also covers the part of a unit already spent.
    """

    def __init__(
        self,
        slot: TimerSlot,
        tick_seconds: float,
        duration_units: int,
        on_expire: Callable[[], Any],
        on_tick: Optional[Callable[[int], Any]] = None,
    ):
        self._slot = slot
        self._tick_seconds = tick_seconds
        self.duration_units = duration_units
        self._on_expire = on_expire
        self._on_tick = on_tick
        self.remaining_units = duration_units
        self._running = False
        self._started_at: Optional[float] = None
        self._frozen_elapsed = 0.0

    def start(self) -> None:
        """(Re)start from the full duration."""
        self.remaining_units = self.duration_units
        self._started_at = self._slot.now()
        self._frozen_elapsed = 0.0
        self._running = True
        self._slot.arm(self._tick_seconds, self._tick)

    def stop(self) -> None:
        if self._running:
            self._frozen_elapsed = self.elapsed
            self._running = False
            self._slot.cancel()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_units(self) -> int:
        """Whole units ticked off so far."""
        return self.duration_units - self.remaining_units

    @property
    def elapsed(self) -> float:
        """Units spent since start(), including the current partial unit."""
        if not self._running or self._started_at is None:
            return self._frozen_elapsed
        spent = (self._slot.now() - self._started_at) / self._tick_seconds
        # rounded to absorb clock float noise (2.7s / 0.1s -> 27.000000000000004)
        return min(float(self.duration_units), round(spent, 6))

    def _tick(self) -> None:
        if not self._running:
            return
        self.remaining_units = max(0, self.remaining_units - 1)
        if self._on_tick is not None:
            self._on_tick(self.remaining_units)
        if self.remaining_units <= 0:
            self._frozen_elapsed = float(self.duration_units)
            self._running = False
            self._on_expire()
        else:
            self._slot.arm(self._tick_seconds, self._tick)


class Stopwatch:
    """Counts elapsed whole units from start() until stop()."""

    def __init__(self, slot: TimerSlot, tick_seconds: float, on_tick: Optional[Callable[[int], Any]] = None):
        self._slot = slot
        self._tick_seconds = tick_seconds
        self._on_tick = on_tick
        self.elapsed_units = 0
        self._running = False

    def start(self) -> None:
        self.elapsed_units = 0
        self._running = True
        self._slot.arm(self._tick_seconds, self._tick)

    def stop(self) -> None:
        if self._running:
            self._running = False
            self._slot.cancel()

    @property
    def running(self) -> bool:
        return self._running

    def _tick(self) -> None:
        if not self._running:
            return
        self.elapsed_units += 1
        if self._on_tick is not None:
            self._on_tick(self.elapsed_units)
        self._slot.arm(self._tick_seconds, self._tick)
