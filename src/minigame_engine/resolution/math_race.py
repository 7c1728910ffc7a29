"""
Timed speed-math resolution.

Each problem runs against a countdown. A correct answer earns 10 points plus
a speed bonus of up to 5 for the unused fraction of the countdown; a wrong
answer costs 5. Running score never drops below zero.
"""
import math
from typing import Optional

from ..models import ContentItem, GameKind
from ..session.completion import meets_win_threshold
from ..session.session import ItemResolutionState, Session
from ..utils.rounding import round_half_up
from ..validation.submissions import OptionValueSubmission
from .base import AdvanceMode, IndexedStrategy, ResolutionContext, ResolutionOutcome, TimerKind

CORRECT_POINTS = 10
MAX_TIME_BONUS = 5
WRONG_PENALTY = 5


def time_bonus(elapsed_units: float, duration_units: float) -> int:
    """
    Speed bonus for answering after elapsed_units of a countdown.

    :param elapsed_units: Units spent on the problem
    :param duration_units: Full countdown length
    :return: 0..MAX_TIME_BONUS, rounded half up
    """
    if duration_units <= 0:
        return 0
    remaining = max(0, duration_units - elapsed_units)
    # Single division keeps exact halves exact (27 of 30 units -> 0.5 -> 1)
    return round_half_up(MAX_TIME_BONUS * remaining / duration_units)


class MathRaceStrategy(IndexedStrategy):
    kind = GameKind.MATH_RACE
    input_model = OptionValueSubmission
    advance_mode = AdvanceMode.AUTO
    timer_kind = TimerKind.COUNTDOWN
    floors_score = True

    def resolve_item(
        self,
        item: ContentItem,
        state: ItemResolutionState,
        submission: OptionValueSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        answer = item.get("answer")
        correct = answer is not None and math.isclose(submission.value, float(answer))
        if correct:
            points = CORRECT_POINTS + time_bonus(context.elapsed_units, context.duration_units)
        else:
            points = -WRONG_PENALTY

        state.attempts += 1
        state.resolved = True
        state.correct = correct
        state.points_awarded = points
        return ResolutionOutcome(correct=correct, points_awarded=points, terminal=True)

    def is_win(self, session: Session, credited: int, total: int) -> bool:
        return meets_win_threshold(credited, total, self.config.win_percentage)
