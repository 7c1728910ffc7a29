"""
Core abstractions for item resolution.

Defines the strategy base classes and the result types every game kind
produces when the player answers, classifies or matches something.
"""
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Type

from ..config import EngineConfig
from ..models import ContentItem, GameKind
from ..session.session import ItemResolutionState, Session
from ..validation.submissions import Submission


class AdvanceMode(str, Enum):
    IMMEDIATE = "immediate"  # next item as soon as the current one resolves
    HOST = "host"  # host calls advance() after showing the outcome
    AUTO = "auto"  # engine advances after a result-display delay
    NONE = "none"  # set-based games have no item sequence to walk


class TimerKind(str, Enum):
    NONE = "none"
    COUNTDOWN = "countdown"
    STOPWATCH = "stopwatch"


@dataclass(frozen=True)
class ResolutionOutcome:
    """
    Immutable result of one resolution.

    Attributes:
        correct: Whether the input was right; None where it does not apply
        points_awarded: Signed score delta (penalties are negative)
        terminal: Whether the item is now closed to further input
        settle_delay: Units the outcome stays visible before it is applied
        phase: Phase to enter after applying, for multi-phase games
    """
    correct: Optional[bool]
    points_awarded: int
    terminal: bool
    settle_delay: float = 0.0
    phase: Optional[str] = None

    def __post_init__(self):
        if self.settle_delay < 0:
            raise ValueError(f"settle_delay cannot be negative, got {self.settle_delay}")


@dataclass(frozen=True)
class ResolutionContext:
    """Timing and session facts a strategy may score against."""
    elapsed_units: float = 0.0
    duration_units: int = 0
    phase: Optional[str] = None


class ResolutionStrategy(ABC):
    """
    Protocol for per-game interaction and scoring policies.

    The session controller stays interaction-agnostic: it validates input
    against input_model, hands it to resolve(), and applies the outcome
    according to advance_mode and timer_kind.
    """

    kind: GameKind
    input_model: Type[Submission]
    advance_mode: AdvanceMode = AdvanceMode.HOST
    timer_kind: TimerKind = TimerKind.NONE
    initial_score: int = 0
    floors_score: bool = False
    set_based: bool = False

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()

    def initial_phase(self) -> Optional[str]:
        return None

    def initial_states(self, sequence: Sequence[ContentItem]) -> Dict[str, ItemResolutionState]:
        """Fresh resolution records, keyed by content item id."""
        return {item.id: ItemResolutionState(id=item.id) for item in sequence}

    def reset(self) -> None:
        """Drop transient per-play state (pending flips etc.) on restart."""

    @abstractmethod
    def resolve(
        self,
        session: Session,
        submission: Submission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        """
        Resolve a validated submission.

        :param session: Session being played
        :param submission: Parsed input of type input_model
        :param context: Timing and phase information
        :return: Outcome, or None when the input does not apply (ignored)
        """
        pass

    def settle(self, session: Session, outcome: ResolutionOutcome) -> None:
        """Called when a delayed outcome (settle_delay > 0) is applied."""

    def timeout_outcome(self, session: Session) -> Optional[ResolutionOutcome]:
        """Outcome synthesized when a countdown expires."""
        return None

    def is_exhausted(self, session: Session) -> bool:
        """Set-based completion: every sub-element resolved."""
        return False

    def final_score(self, session: Session, context: ResolutionContext) -> int:
        return session.score

    def credited_count(self, session: Session) -> int:
        return sum(1 for state in session.states() if state.correct)

    def is_win(self, session: Session, credited: int, total: int) -> bool:
        return True


class IndexedStrategy(ResolutionStrategy):
    """
    Strategy for games that walk the sequence one item at a time.

    Subclasses implement resolve_item() against the current item and its
    record; this class routes submissions there.
    """

    def resolve(
        self,
        session: Session,
        submission: Submission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        item = session.current_item()
        state = session.current_state()
        if item is None or state is None or state.resolved:
            return None
        return self.resolve_item(item, state, submission, context)

    @abstractmethod
    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: Submission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        pass

    def timeout_outcome(self, session: Session) -> Optional[ResolutionOutcome]:
        state = session.current_state()
        if state is None or state.resolved:
            return None
        state.resolved = True
        state.correct = False
        state.points_awarded = 0
        return ResolutionOutcome(correct=False, points_awarded=0, terminal=True)


def attempt_points(attempt: int, schedule: Sequence[int]) -> int:
    """Points for a correct answer on the given 1-based attempt."""
    if 1 <= attempt <= len(schedule):
        return schedule[attempt - 1]
    return 0
