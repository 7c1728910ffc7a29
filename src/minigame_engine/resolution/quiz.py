"""
Single-shot multiple-choice resolution.
"""
import logging
from typing import Optional

from ..models import ContentItem, GameKind
from ..session.completion import meets_win_threshold
from ..session.session import ItemResolutionState, Session
from ..validation.submissions import ChoiceSubmission
from .base import AdvanceMode, IndexedStrategy, ResolutionContext, ResolutionOutcome

logger = logging.getLogger(__name__)

CORRECT_POINTS = 10


class QuizStrategy(IndexedStrategy):
    """
    One answer per question. +10 when correct, nothing otherwise, and the
    next question follows immediately.
    """

    kind = GameKind.QUIZ
    input_model = ChoiceSubmission
    advance_mode = AdvanceMode.IMMEDIATE

    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: ChoiceSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        options = item.get("options") or []
        if submission.option_index >= len(options):
            logger.debug(f"Option {submission.option_index} out of range for {item.id}")
            return None

        correct = submission.option_index == item.get("correctIndex")
        points = CORRECT_POINTS if correct else 0

        state.attempts += 1
        state.resolved = True
        state.correct = correct
        state.points_awarded = points
        return ResolutionOutcome(correct=correct, points_awarded=points, terminal=True)

    def is_win(self, session: Session, credited: int, total: int) -> bool:
        return meets_win_threshold(credited, total, self.config.win_percentage)
