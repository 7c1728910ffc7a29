"""
Session Controller - Manages the mini-game session lifecycle.

This controller is the only place session state changes:
- Validates host input against the active strategy's submission model
- Applies resolution outcomes to score, phase and position
- Owns the session's timer slot and notification channel
- Triggers completion evaluation after every transition

Strategies decide what an input is worth; the controller decides what
happens next. It never looks at how the input was captured.
"""
import logging
import random
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from ..config import EngineConfig
from ..exceptions import InvalidTransitionError, NoPlayableContentError
from ..models import ContentItem, GameKind
from ..notifications import GameHost, HostNotificationChannel
from ..resolution.base import AdvanceMode, ResolutionContext, ResolutionOutcome, ResolutionStrategy, TimerKind
from ..resolution.strategy_factory import create_strategy
from ..timers import Countdown, Scheduler, Stopwatch, TimerSlot
from ..validation.input_validator import InputValidator
from .completion import CompletionEvaluator
from .session import ItemResolutionState, Session, SessionResult, SessionStatus

logger = logging.getLogger(__name__)


class SessionController:
    """
    State machine for one play-through.

    READY -> ITEM_ACTIVE <-> ITEM_RESOLVED -> ... -> COMPLETE, with
    restart() back to READY from any state and dispose() to DISPOSED.
    All calls are expected on the scheduler's thread; transitions are
    applied serially.
    """

    def __init__(
        self,
        kind: Union[GameKind, str],
        sequence: Sequence[ContentItem],
        host: GameHost,
        scheduler: Scheduler,
        config: Optional[EngineConfig] = None,
        strategy: Optional[ResolutionStrategy] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a session over an already shuffled sequence.

        :param kind: Game kind being played
        :param sequence: Fixed play order (the shuffler's output)
        :param host: Receiver of score and completion events
        :param scheduler: Event-loop seam (asyncio loop or ManualScheduler)
        :param config: EngineConfig instance
        :param strategy: Resolution strategy; built from kind if omitted
        :param rng: Random source for sub-element layouts
        :raises NoPlayableContentError: If the sequence, or every sub-element list in it, is empty
        """
        sequence = tuple(sequence)
        if not sequence:
            raise NoPlayableContentError("A session needs at least one content item")

        self._config = config or EngineConfig()
        self._strategy = strategy or create_strategy(kind, self._config, rng)
        item_states = self._strategy.initial_states(sequence)
        if not item_states:
            raise NoPlayableContentError(
                f"No playable {GameKind(kind).value} elements in {len(sequence)} content item(s)"
            )
        self._session = Session(
            kind=GameKind(kind),
            sequence=sequence,
            score=self._strategy.initial_score,
            phase=self._strategy.initial_phase(),
            item_states=item_states,
        )
        self._evaluator = CompletionEvaluator(self._strategy)
        self._channel = HostNotificationChannel(host, scheduler)
        self._slot = TimerSlot(scheduler)
        self._settling = False

        tick = self._config.tick_seconds
        self._countdown: Optional[Countdown] = None
        self._stopwatch: Optional[Stopwatch] = None
        if self._strategy.timer_kind == TimerKind.COUNTDOWN:
            self._countdown = Countdown(
                self._slot, tick, self._config.math_race_duration_units, on_expire=self._on_countdown_expired
            )
        elif self._strategy.timer_kind == TimerKind.STOPWATCH:
            self._stopwatch = Stopwatch(self._slot, tick)

        logger.debug(f"Session created: kind={self._session.kind.value}, items={len(sequence)}")

    # ------------------------------------------------------------------
    # Host-facing operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Activate the first item and arm the strategy's timer."""
        if self._session.status != SessionStatus.READY:
            logger.warning(f"start() called in state {self._session.status.value}, ignored")
            return
        self._session.status = SessionStatus.ITEM_ACTIVE
        self._start_timer()
        logger.info(f"{self._session.kind.value} session started")

    def submit_resolution(self, raw: Any) -> Optional[ResolutionOutcome]:
        """
        Handle one player input.

        The input is parsed against the strategy's model before anything
        else, so malformed input never counts as an attempt.

        :param raw: Submission model instance or mapping of its fields
        :return: The outcome, or None if the input was ignored
        :raises InputValidationError: If the input does not parse
        """
        if self._disposed:
            logger.debug("submit_resolution() after dispose ignored")
            return None

        submission = InputValidator.parse(self._strategy.input_model, raw)

        if self._session.status != SessionStatus.ITEM_ACTIVE:
            logger.debug(f"Input ignored in state {self._session.status.value}")
            return None
        if self._settling:
            logger.debug("Input ignored while the previous turn settles")
            return None

        outcome = self._strategy.resolve(self._session, submission, self._context())
        if outcome is None:
            logger.debug(f"Inapplicable input ignored: {submission!r}")
            return None

        if outcome.terminal and self._countdown is not None and self._countdown.running:
            self._countdown.stop()

        if outcome.settle_delay > 0:
            self._settling = True
            self._slot.arm(self._config.units_to_seconds(outcome.settle_delay), lambda: self._settle(outcome))
        else:
            self._apply(outcome)
        return outcome

    def advance(self) -> bool:
        """
        Continue to the next item after the host has shown the outcome.

        :return: True if the session moved on
        :raises InvalidTransitionError: If the strategy advances on its own
        """
        if self._disposed:
            return False
        if self._strategy.advance_mode != AdvanceMode.HOST:
            raise InvalidTransitionError(
                f"{self._session.kind.value} advances automatically; advance() is not supported"
            )
        if self._session.status != SessionStatus.ITEM_RESOLVED:
            logger.warning(f"advance() called in state {self._session.status.value}, ignored")
            return False
        self._next_item()
        return True

    def restart(self) -> None:
        """
        Start the same sequence over.

        Position, score, item records, phase and completion flags are reset
        and the timer re-armed. The item order is kept. Events from the
        previous play-through that were not delivered yet are dropped, and
        the host is sent scoreChanged(0) as the reset signal, also for games
        whose running score starts above zero.
        """
        if self._disposed:
            logger.debug("restart() after dispose ignored")
            return
        self._stop_timers()
        dropped = self._channel.cancel_all()
        self._settling = False
        self._strategy.reset()
        self._session.reset(
            self._strategy.initial_score,
            self._strategy.initial_states(self._session.sequence),
            self._strategy.initial_phase(),
        )
        self._channel.score_changed(0)
        logger.info(f"{self._session.kind.value} session restarted ({dropped} pending event(s) dropped)")
        self.start()

    def check_completion(self) -> Optional[SessionResult]:
        """
        Re-run completion detection.

        Safe to call any number of times; the completion event is only
        ever sent once per play-through.

        :return: The result if this call completed the session
        """
        if self._disposed:
            return None
        return self._complete_if_terminal()

    def dispose(self) -> None:
        """Cancel timers, drop undelivered events and ignore everything after."""
        if self._disposed:
            return
        self._stop_timers()
        self._slot.close()
        dropped = self._channel.cancel_all()
        self._channel.close()
        self._settling = False
        self._session.status = SessionStatus.DISPOSED
        logger.info(f"{self._session.kind.value} session disposed ({dropped} pending event(s) dropped)")

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def kind(self) -> GameKind:
        return self._session.kind

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def position(self) -> int:
        return self._session.position

    @property
    def phase(self) -> Optional[str]:
        return self._session.phase

    @property
    def sequence(self) -> Tuple[ContentItem, ...]:
        return self._session.sequence

    @property
    def current_item(self) -> Optional[ContentItem]:
        return self._session.current_item()

    @property
    def current_state(self) -> Optional[ItemResolutionState]:
        return self._session.current_state()

    @property
    def item_states(self) -> Mapping[str, ItemResolutionState]:
        return dict(self._session.item_states)

    @property
    def result(self) -> Optional[SessionResult]:
        return self._session.result

    @property
    def strategy(self) -> ResolutionStrategy:
        return self._strategy

    @property
    def settling(self) -> bool:
        return self._settling

    @property
    def elapsed_units(self) -> int:
        if self._countdown is not None:
            return self._countdown.elapsed_units
        if self._stopwatch is not None:
            return self._stopwatch.elapsed_units
        return 0

    @property
    def remaining_units(self) -> Optional[int]:
        """Countdown units left, or None for untimed games."""
        if self._countdown is None:
            return None
        return self._countdown.remaining_units

    @property
    def _disposed(self) -> bool:
        return self._session.status == SessionStatus.DISPOSED

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _context(self) -> ResolutionContext:
        if self._countdown is not None:
            elapsed, duration = self._countdown.elapsed, self._countdown.duration_units
        else:
            elapsed, duration = float(self.elapsed_units), 0
        return ResolutionContext(
            elapsed_units=elapsed,
            duration_units=duration,
            phase=self._session.phase,
        )

    def _settle(self, outcome: ResolutionOutcome) -> None:
        if self._disposed or not self._settling:
            return
        self._settling = False
        self._strategy.settle(self._session, outcome)
        self._apply(outcome)

    def _apply(self, outcome: ResolutionOutcome) -> None:
        self._add_points(outcome.points_awarded)
        if outcome.phase is not None:
            self._session.phase = outcome.phase

        if self._strategy.set_based:
            self._complete_if_terminal()
            return
        if not outcome.terminal:
            return

        self._session.status = SessionStatus.ITEM_RESOLVED
        logger.debug(
            f"Item {self._session.position + 1}/{self._session.total_items} resolved: "
            f"correct={outcome.correct}, points={outcome.points_awarded}, score={self._session.score}"
        )

        mode = self._strategy.advance_mode
        if mode == AdvanceMode.IMMEDIATE:
            self._next_item()
        elif mode == AdvanceMode.AUTO:
            self._slot.arm(self._config.units_to_seconds(self._config.math_race_result_units), self._next_item)

    def _add_points(self, delta: int) -> None:
        if delta == 0:
            return
        score = self._session.score + delta
        if self._strategy.floors_score:
            score = max(0, score)
        if score != self._session.score:
            self._session.score = score
            self._channel.score_changed(score)

    def _next_item(self) -> None:
        if self._session.status != SessionStatus.ITEM_RESOLVED:
            return
        self._session.advance_position()
        if self._complete_if_terminal():
            return
        self._session.status = SessionStatus.ITEM_ACTIVE
        self._session.phase = self._strategy.initial_phase()
        self._start_timer()

    def _on_countdown_expired(self) -> None:
        if self._session.status != SessionStatus.ITEM_ACTIVE:
            return
        outcome = self._strategy.timeout_outcome(self._session)
        if outcome is None:
            return
        logger.debug(f"Countdown expired on item {self._session.position + 1}")
        self._apply(outcome)

    def _complete_if_terminal(self) -> Optional[SessionResult]:
        context = self._context()
        previous_score = self._session.score
        result = self._evaluator.evaluate(self._session, context)
        if result is None:
            return None

        self._stop_timers()
        self._session.status = SessionStatus.COMPLETE
        if self._session.score != previous_score:
            self._channel.score_changed(self._session.score)
        self._channel.completed(result.won)
        return result

    def _start_timer(self) -> None:
        if self._countdown is not None:
            self._countdown.start()
        elif self._stopwatch is not None:
            self._stopwatch.start()

    def _stop_timers(self) -> None:
        if self._countdown is not None:
            self._countdown.stop()
        if self._stopwatch is not None:
            self._stopwatch.stop()
        self._slot.cancel()
