"""
Timer subsystem: the scheduler seam plus countdown and stopwatch primitives.
"""
from .scheduler import Cancellable, ManualScheduler, Scheduler, get_default_scheduler
from .timers import Countdown, Stopwatch, TimerSlot

__all__ = [
    "Cancellable",
    "ManualScheduler",
    "Scheduler",
    "get_default_scheduler",
    "Countdown",
    "Stopwatch",
    "TimerSlot",
]
