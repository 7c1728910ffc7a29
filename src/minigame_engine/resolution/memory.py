"""
Paired-card matching across the whole pool.

Each term/match pair yields two cards with ids "<role>:<content id>:<pair
index>". Two flipped cards match only when they come from the same pair and
show complementary roles. A turn stays visible for a settle delay before it
is applied, and no other turn is accepted meanwhile.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from ..models import ContentItem, GameKind
from ..session.session import ItemResolutionState, Session
from ..shuffler import fisher_yates
from ..validation.submissions import CardPairSubmission
from .base import AdvanceMode, ResolutionContext, ResolutionOutcome, ResolutionStrategy

logger = logging.getLogger(__name__)

TERM = "term"
MATCH = "match"

PAIR_POINTS = 10
MOVE_PENALTY = 10
BASE_SCORE = 1000
MIN_SCORE = 100
COMPLETION_BONUS = 50


@dataclass(frozen=True)
class MemoryCard:
    id: str
    role: str
    pair_id: str
    text: str


def pair_id(content_id: str, index: int) -> str:
    return f"{content_id}:{index}"


def card_id(role: str, content_id: str, index: int) -> str:
    return f"{role}:{content_id}:{index}"


def memory_final_score(moves: int) -> int:
    return max(MIN_SCORE, BASE_SCORE - MOVE_PENALTY * moves) + COMPLETION_BONUS


@dataclass(frozen=True)
class _PendingTurn:
    first: MemoryCard
    second: MemoryCard
    matched: bool


class MemoryStrategy(ResolutionStrategy):
    kind = GameKind.MEMORY
    input_model = CardPairSubmission
    advance_mode = AdvanceMode.NONE
    set_based = True

    def __init__(self, config=None, rng=None):
        super().__init__(config, rng)
        self._layout: Tuple[MemoryCard, ...] = ()
        self._cards: Dict[str, MemoryCard] = {}
        self._source: Optional[Tuple[ContentItem, ...]] = None
        self._pending: Optional[_PendingTurn] = None
        self.moves = 0

    @property
    def layout(self) -> Tuple[MemoryCard, ...]:
        return self._layout

    @property
    def flipped(self) -> Tuple[str, ...]:
        """Card ids face up while a turn is settling."""
        if self._pending is None:
            return ()
        return (self._pending.first.id, self._pending.second.id)

    def card(self, card_id: str) -> Optional[MemoryCard]:
        return self._cards.get(card_id)

    def initial_states(self, sequence: Sequence[ContentItem]) -> Dict[str, ItemResolutionState]:
        sequence = tuple(sequence)
        if self._source != sequence:
            self._build_layout(sequence)
        pair_ids = dict.fromkeys(card.pair_id for card in self._layout)
        return {pid: ItemResolutionState(id=pid) for pid in pair_ids}

    def _build_layout(self, sequence: Tuple[ContentItem, ...]) -> None:
        cards = []
        for content in sequence:
            for index, pair in enumerate(content.get("pairs") or ()):
                pid = pair_id(content.id, index)
                cards.append(MemoryCard(card_id(TERM, content.id, index), TERM, pid, str(pair.get("term", ""))))
                cards.append(MemoryCard(card_id(MATCH, content.id, index), MATCH, pid, str(pair.get("match", ""))))
        self._layout = tuple(fisher_yates(cards, self.rng))
        self._cards = {card.id: card for card in self._layout}
        self._source = sequence

    def reset(self) -> None:
        self._pending = None
        self.moves = 0

    def resolve(
        self,
        session: Session,
        submission: CardPairSubmission,
        context: ResolutionContext,
    ) -> Optional[ResolutionOutcome]:
        if self._pending is not None:
            return None

        first = self._cards.get(submission.first_card_id)
        second = self._cards.get(submission.second_card_id)
        if first is None or second is None:
            logger.debug(f"Unknown card in turn: {submission.first_card_id}, {submission.second_card_id}")
            return None

        first_state = session.item_states[first.pair_id]
        second_state = session.item_states[second.pair_id]
        if first_state.resolved or second_state.resolved:
            return None

        self.moves += 1
        first_state.attempts += 1
        if second_state is not first_state:
            second_state.attempts += 1

        matched = first.pair_id == second.pair_id and first.role != second.role
        self._pending = _PendingTurn(first, second, matched)
        if matched:
            return ResolutionOutcome(
                correct=True,
                points_awarded=PAIR_POINTS,
                terminal=True,
                settle_delay=self.config.memory_match_delay_units,
            )
        return ResolutionOutcome(
            correct=False,
            points_awarded=0,
            terminal=False,
            settle_delay=self.config.memory_mismatch_delay_units,
        )

    def settle(self, session: Session, outcome: ResolutionOutcome) -> None:
        pending, self._pending = self._pending, None
        if pending is None or not pending.matched:
            return
        state = session.item_states[pending.first.pair_id]
        state.resolved = True
        state.correct = True
        state.points_awarded = PAIR_POINTS

    def is_exhausted(self, session: Session) -> bool:
        return all(state.resolved for state in session.states())

    def final_score(self, session: Session, context: ResolutionContext) -> int:
        return memory_final_score(self.moves)
