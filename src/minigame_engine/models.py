from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class GameKind(str, Enum):
    QUIZ = "quiz"
    NUMBER_PATTERN = "numberPattern"
    PATTERN = "pattern"
    SORT = "sort"
    MEMORY = "memory"
    MATH_RACE = "mathRace"
    EXPERIMENT = "experiment"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class ContentItem:
    """
    One puzzle unit for a (grade, difficulty, kind) key.

    The payload is whatever the content service stored for this game kind
    (options + correctIndex, a sequence with a gap, buckets + items, ...).
    It is wrapped read-only and never validated.
    """
    id: str
    kind: GameKind
    grade: str
    difficulty: Difficulty
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)
