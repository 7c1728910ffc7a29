"""
Drag-to-classify resolution across the whole pool.

Every sortable item of every content item becomes its own sub-element with
id "<content id>:<index>". A wrong drop costs 5 points and sends the item
back to the pool; the game completes once every sub-element sits in its
correct bucket.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from ..models import ContentItem, GameKind
from ..session.session import ItemResolutionState, Session
from ..shuffler import fisher_yates
from ..validation.submissions import PlacementSubmission
from .base import AdvanceMode, ResolutionContext, ResolutionOutcome, ResolutionStrategy, TimerKind

logger = logging.getLogger(__name__)

STARTING_SCORE = 100
WRONG_DROP_PENALTY = 5


@dataclass(frozen=True)
class SortableItem:
    id: str
    content_id: str
    text: str
    correct_bucket: str
    buckets: Tuple[str, ...]


def sortable_id(content_id: str, index: int) -> str:
    return f"{content_id}:{index}"


class SortStrategy(ResolutionStrategy):
    kind = GameKind.SORT
    input_model = PlacementSubmission
    advance_mode = AdvanceMode.NONE
    timer_kind = TimerKind.STOPWATCH
    initial_score = STARTING_SCORE
    floors_score = True
    set_based = True

    def __init__(self, config=None, rng=None):
        super().__init__(config, rng)
        self._layout: Tuple[SortableItem, ...] = ()
        self._by_id: Dict[str, SortableItem] = {}
        self._source: Optional[Tuple[ContentItem, ...]] = None

    @property
    def layout(self) -> Tuple[SortableItem, ...]:
        """Pool order the host lays the sortable items out in."""
        return self._layout

    def sortable(self, item_id: str) -> Optional[SortableItem]:
        return self._by_id.get(item_id)

    def initial_states(self, sequence: Sequence[ContentItem]) -> Dict[str, ItemResolutionState]:
        sequence = tuple(sequence)
        if self._source != sequence:
            self._build_layout(sequence)
        return {entry.id: ItemResolutionState(id=entry.id) for entry in self._layout}

    def _build_layout(self, sequence: Tuple[ContentItem, ...]) -> None:
        entries = []
        for content in sequence:
            buckets = tuple(content.get("buckets") or ())
            for index, raw in enumerate(content.get("items") or ()):
                entries.append(
                    SortableItem(
                        id=sortable_id(content.id, index),
                        content_id=content.id,
                        text=str(raw.get("text", "")),
                        correct_bucket=raw.get("correctBucket"),
                        buckets=buckets,
                    )
                )
        self._layout = tuple(fisher_yates(entries, self.rng))
        self._by_id = {entry.id: entry for entry in self._layout}
        self._source = sequence
        logger.debug(f"Laid out {len(self._layout)} sortable items from {len(sequence)} content items")

    def resolve(
        self,
        session: Session,
        submission: PlacementSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        entry = self._by_id.get(submission.item_id)
        state = session.item_states.get(submission.item_id)
        if entry is None or state is None:
            logger.debug(f"Unknown sortable item: {submission.item_id}")
            return None
        if state.resolved:
            # Correctly placed items are locked in their bucket
            return None
        if submission.bucket_id not in entry.buckets:
            logger.debug(f"Bucket {submission.bucket_id!r} is not offered for {entry.id}")
            return None

        state.attempts += 1
        if submission.bucket_id == entry.correct_bucket:
            state.resolved = True
            state.correct = True
            return ResolutionOutcome(correct=True, points_awarded=0, terminal=True)

        state.correct = False
        state.points_awarded -= WRONG_DROP_PENALTY
        return ResolutionOutcome(correct=False, points_awarded=-WRONG_DROP_PENALTY, terminal=False)

    def is_exhausted(self, session: Session) -> bool:
        return all(state.resolved for state in session.states())

    def final_score(self, session: Session, context: ResolutionContext) -> int:
        score = session.score
        if context.elapsed_units < self.config.sort_bonus_threshold_units:
            score += self.config.sort_speed_bonus
        return max(0, score)
