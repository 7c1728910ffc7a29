"""
Multi-phase guided experiment.

Each experiment walks hypothesis -> steps -> conclusion. The hypothesis is
scored once by word count; every forward step earns 10 points. Stepping
back only moves the pointer, credit already earned stays.
"""
import logging
from typing import Dict, Optional, Sequence

from ..models import ContentItem, GameKind
from ..session.session import ItemResolutionState, Session
from ..validation.submissions import ExperimentSubmission
from .base import AdvanceMode, IndexedStrategy, ResolutionContext, ResolutionOutcome

logger = logging.getLogger(__name__)

HYPOTHESIS = "hypothesis"
STEPS = "steps"
CONCLUSION = "conclusion"

STEP_POINTS = 10


def hypothesis_points(text: str) -> int:
    """Word-count tiers: 10+ words 30, 5+ words 20, anything 10, empty 0."""
    words = text.split()
    if len(words) >= 10:
        return 30
    if len(words) >= 5:
        return 20
    if words:
        return 10
    return 0


class ExperimentStrategy(IndexedStrategy):
    kind = GameKind.EXPERIMENT
    input_model = ExperimentSubmission
    advance_mode = AdvanceMode.HOST

    def initial_phase(self) -> Optional[str]:
        return HYPOTHESIS

    def initial_states(self, sequence: Sequence[ContentItem]) -> Dict[str, ItemResolutionState]:
        return {item.id: ItemResolutionState(id=item.id, correct=None) for item in sequence}

    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: ExperimentSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        step_count = len(item.get("steps") or ())
        phase = context.phase or HYPOTHESIS

        if submission.action == "hypothesis":
            if phase != HYPOTHESIS:
                return None
            points = hypothesis_points(submission.text)
            state.attempts += 1
            state.points_awarded += points
            if step_count == 0:
                return self._conclude(state, points)
            return ResolutionOutcome(correct=None, points_awarded=points, terminal=False, phase=STEPS)

        if phase != STEPS:
            logger.debug(f"Step navigation ignored in phase {phase!r}")
            return None

        if submission.action == "backward":
            if state.progress == 0:
                return None
            state.progress -= 1
            return ResolutionOutcome(correct=None, points_awarded=0, terminal=False)

        state.points_awarded += STEP_POINTS
        if state.progress + 1 < step_count:
            state.progress += 1
            return ResolutionOutcome(correct=None, points_awarded=STEP_POINTS, terminal=False)
        state.progress = step_count
        return self._conclude(state, STEP_POINTS)

    @staticmethod
    def _conclude(state: ItemResolutionState, points: int) -> ResolutionOutcome:
        state.resolved = True
        state.correct = None
        return ResolutionOutcome(correct=None, points_awarded=points, terminal=True, phase=CONCLUSION)

    def credited_count(self, session: Session) -> int:
        return sum(1 for state in session.states() if state.resolved)
