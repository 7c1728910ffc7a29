"""
Host notification channel.

Outbound events are never delivered inline from the transition that
produced them: each one is scheduled for the next turn of the event loop,
so the host sees only settled state and can call back into the engine
without re-entering a half-applied transition.
"""
import logging
from typing import Any, Callable, Protocol, Set

from .timers.scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)


class GameHost(Protocol):
    """Presentation layer callbacks."""

    def on_score_update(self, score: int) -> None:
        ...

    def on_game_complete(self, won: bool) -> None:
        ...


class HostNotificationChannel:
    """
    Deferred, cancellable delivery of score and completion events.

    Pending events are tracked as scheduler handles; cancel_all() drops
    them as a set and close() also refuses new events.
    """

    def __init__(self, host: GameHost, scheduler: Scheduler):
        self._host = host
        self._scheduler = scheduler
        self._pending: Set[Cancellable] = set()
        self._closed = False

    def score_changed(self, score: int) -> None:
        self._post("score_changed", self._host.on_score_update, score)

    def completed(self, won: bool) -> None:
        self._post("completed", self._host.on_game_complete, won)

    def cancel_all(self) -> int:
        """
        Cancel every event not yet delivered.

        :return: Number of events dropped
        """
        dropped = 0
        for handle in list(self._pending):
            if not handle.cancelled():
                handle.cancel()
                dropped += 1
        self._pending.clear()
        if dropped:
            logger.debug(f"Dropped {dropped} pending host notification(s)")
        return dropped

    def close(self) -> None:
        self.cancel_all()
        self._closed = True

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def _post(self, name: str, callback: Callable[[Any], Any], value: Any) -> None:
        if self._closed:
            logger.debug(f"Notification {name}({value}) after close ignored")
            return

        holder = {}

        def deliver():
            self._pending.discard(holder.get("handle"))
            if self._closed:
                return
            logger.debug(f"Delivering {name}({value}) to host")
            callback(value)

        handle = self._scheduler.call_soon(deliver)
        holder["handle"] = handle
        self._pending.add(handle)
