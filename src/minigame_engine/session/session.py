"""
Session state management.

Tracks one play-through explicitly: the fixed item order, position, score,
phase and per-item resolution records.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from ..models import ContentItem, GameKind


class SessionStatus(str, Enum):
    READY = "ready"
    ITEM_ACTIVE = "item_active"
    ITEM_RESOLVED = "item_resolved"
    COMPLETE = "complete"
    DISPOSED = "disposed"


@dataclass
class ItemResolutionState:
    """
    Resolution record for one content item, or for one sub-element
    (sortable item, memory pair) in classification/matching games.
    """
    id: str
    attempts: int = 0
    resolved: bool = False
    correct: Optional[bool] = False  # None where correctness does not apply
    points_awarded: int = 0
    progress: int = 0  # step pointer for multi-phase items


@dataclass(frozen=True)
class SessionResult:
    """Produced once per play-through, when the session completes."""
    score: int
    resolved_count: int
    correct_count: int
    total: int
    percentage: int
    won: bool


@dataclass
class Session:
    """
    Session aggregate.

    The sequence is fixed at construction and survives restart. completed
    and notified only ever go false -> true within one play-through.
    """
    kind: GameKind
    sequence: Tuple[ContentItem, ...]
    position: int = 0
    score: int = 0
    phase: Optional[str] = None
    completed: bool = False
    notified: bool = False  # one-shot completion guard
    status: SessionStatus = SessionStatus.READY
    item_states: Dict[str, ItemResolutionState] = field(default_factory=dict)
    result: Optional[SessionResult] = None

    @property
    def total_items(self) -> int:
        return len(self.sequence)

    def current_item(self) -> Optional[ContentItem]:
        """Get the item at position, or None once the sequence is exhausted."""
        if self.position >= len(self.sequence):
            return None
        return self.sequence[self.position]

    def current_state(self) -> Optional[ItemResolutionState]:
        item = self.current_item()
        if item is None:
            return None
        return self.item_states.get(item.id)

    def advance_position(self) -> bool:
        """
        Move to the next item.

        :return: True if an item remains at the new position
        """
        if self.position < len(self.sequence):
            self.position += 1
        return self.position < len(self.sequence)

    def is_last_item(self) -> bool:
        return self.position + 1 >= len(self.sequence)

    def reset(
        self,
        initial_score: int,
        item_states: Dict[str, ItemResolutionState],
        phase: Optional[str] = None,
    ) -> None:
        """
        Back to the first item with fresh records. The sequence is kept.
        """
        self.position = 0
        self.score = initial_score
        self.phase = phase
        self.completed = False
        self.notified = False
        self.status = SessionStatus.READY
        self.item_states = item_states
        self.result = None

    def states(self):
        return list(self.item_states.values())
