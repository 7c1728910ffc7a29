"""
Two-attempt visual pattern choice. A second wrong answer reveals the
correct option and closes the item.
"""
from typing import Optional

from ..models import ContentItem, GameKind
from ..session.session import ItemResolutionState
from ..validation.submissions import ChoiceSubmission
from .base import AdvanceMode, IndexedStrategy, ResolutionContext, ResolutionOutcome, attempt_points

POINTS_BY_ATTEMPT = (10, 5)
MAX_ATTEMPTS = 2


class PatternStrategy(IndexedStrategy):
    kind = GameKind.PATTERN
    input_model = ChoiceSubmission
    advance_mode = AdvanceMode.HOST

    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: ChoiceSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        options = item.get("options") or []
        if submission.option_index >= len(options):
            return None

        state.attempts += 1
        correct = submission.option_index == item.get("correctIndex")
        points = attempt_points(state.attempts, POINTS_BY_ATTEMPT) if correct else 0
        terminal = correct or state.attempts >= MAX_ATTEMPTS

        state.correct = correct
        if terminal:
            state.resolved = True
            state.points_awarded = points
        return ResolutionOutcome(correct=correct, points_awarded=points, terminal=terminal)

    @staticmethod
    def is_revealed(state: ItemResolutionState) -> bool:
        """Whether the host should show the correct option."""
        return state.resolved and not state.correct
