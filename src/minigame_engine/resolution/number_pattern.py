"""
Attempt-limited numeric guess for the missing element of a sequence.
"""
from typing import Optional

from ..models import ContentItem, GameKind
from ..session.completion import meets_win_threshold
from ..session.session import ItemResolutionState, Session
from ..validation.submissions import NumericGuessSubmission
from .base import AdvanceMode, IndexedStrategy, ResolutionContext, ResolutionOutcome, attempt_points

# Points for a correct guess on attempt 1, 2, 3
POINTS_BY_ATTEMPT = (10, 5, 2)
MAX_ATTEMPTS = 3


class NumberPatternStrategy(IndexedStrategy):
    kind = GameKind.NUMBER_PATTERN
    input_model = NumericGuessSubmission
    advance_mode = AdvanceMode.HOST

    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: NumericGuessSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        state.attempts += 1
        correct = submission.value == item.get("answer")
        points = attempt_points(state.attempts, POINTS_BY_ATTEMPT) if correct else 0
        terminal = correct or state.attempts >= MAX_ATTEMPTS

        state.correct = correct
        if terminal:
            state.resolved = True
            state.points_awarded = points
        return ResolutionOutcome(correct=correct, points_awarded=points, terminal=terminal)

    def credited_count(self, session: Session) -> int:
        return sum(1 for state in session.states() if state.points_awarded > 0)

    def is_win(self, session: Session, credited: int, total: int) -> bool:
        return meets_win_threshold(credited, total, self.config.win_percentage)
