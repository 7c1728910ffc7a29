"""
Completion detection and the one-shot session result.
"""
import logging
from typing import TYPE_CHECKING, Optional

from ..utils.rounding import round_half_up
from .session import Session, SessionResult

if TYPE_CHECKING:
    from ..resolution.base import ResolutionContext, ResolutionStrategy

logger = logging.getLogger(__name__)


def required_count(total: int, win_percentage: int) -> int:
    """Smallest credited count reaching win_percentage of total (ceil, integer math)."""
    return -(-total * win_percentage // 100)


def meets_win_threshold(credited: int, total: int, win_percentage: int) -> bool:
    return credited >= required_count(total, win_percentage)


class CompletionEvaluator:
    """
    Detects terminal sessions and builds their result exactly once.

    Safe to call after every transition: the session's notified flag is
    checked and set here, so re-evaluation after the terminal state has
    been reached returns None instead of a second result.
    """

    def __init__(self, strategy: "ResolutionStrategy"):
        self._strategy = strategy

    def is_terminal(self, session: Session) -> bool:
        """
        Index exhaustion for sequential games, set exhaustion for
        classification and matching games.
        """
        if self._strategy.set_based:
            return self._strategy.is_exhausted(session)
        return session.position >= len(session.sequence)

    def evaluate(self, session: Session, context: "ResolutionContext") -> Optional[SessionResult]:
        """
        Complete the session if it is terminal and not yet notified.

        Applies the strategy's final score to the session.

        :param session: Session to evaluate
        :param context: Timing facts for final scoring (stopwatch reading)
        :return: SessionResult on the first terminal evaluation, else None
        """
        if session.notified or not self.is_terminal(session):
            return None
        session.notified = True
        session.completed = True

        session.score = self._strategy.final_score(session, context)

        states = session.states()
        total = len(states)
        resolved = sum(1 for state in states if state.resolved)
        credited = self._strategy.credited_count(session)
        percentage = round_half_up(credited * 100 / total) if total else 0
        won = self._strategy.is_win(session, credited, total)

        result = SessionResult(
            score=session.score,
            resolved_count=resolved,
            correct_count=credited,
            total=total,
            percentage=percentage,
            won=won,
        )
        session.result = result
        logger.info(
            f"{session.kind.value} session complete: score={result.score}, "
            f"{credited}/{total} credited, won={won}"
        )
        return result
