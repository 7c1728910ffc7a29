"""
Resolution layer: per-game interaction and scoring policies.

Key components:
- ResolutionStrategy: base class every game kind implements
- ResolutionOutcome: immutable result of one resolution
- create_strategy: builds the strategy for a game kind
"""
from .base import (
    AdvanceMode,
    IndexedStrategy,
    ResolutionContext,
    ResolutionOutcome,
    ResolutionStrategy,
    TimerKind,
)
from .experiment import ExperimentStrategy
from .math_race import MathRaceStrategy
from .memory import MemoryCard, MemoryStrategy
from .number_pattern import NumberPatternStrategy
from .pattern import PatternStrategy
from .quiz import QuizStrategy
from .sort import SortableItem, SortStrategy
from .strategy_factory import create_strategy

__all__ = [
    "AdvanceMode",
    "IndexedStrategy",
    "ResolutionContext",
    "ResolutionOutcome",
    "ResolutionStrategy",
    "TimerKind",
    "ExperimentStrategy",
    "MathRaceStrategy",
    "MemoryCard",
    "MemoryStrategy",
    "NumberPatternStrategy",
    "PatternStrategy",
    "QuizStrategy",
    "SortableItem",
    "SortStrategy",
    "create_strategy",
]
