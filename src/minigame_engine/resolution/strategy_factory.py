"""
Factory for creating resolution strategies.

Maps a game kind to its strategy class and builds a fresh, session-owned
instance.
"""
import random
from typing import Dict, Optional, Type, Union

from ..config import EngineConfig
from ..exceptions import UnsupportedGameKindError
from ..models import GameKind
from .base import ResolutionStrategy
from .experiment import ExperimentStrategy
from .math_race import MathRaceStrategy
from .memory import MemoryStrategy
from .number_pattern import NumberPatternStrategy
from .pattern import PatternStrategy
from .quiz import QuizStrategy
from .sort import SortStrategy

STRATEGIES: Dict[GameKind, Type[ResolutionStrategy]] = {
    GameKind.QUIZ: QuizStrategy,
    GameKind.NUMBER_PATTERN: NumberPatternStrategy,
    GameKind.PATTERN: PatternStrategy,
    GameKind.SORT: SortStrategy,
    GameKind.MEMORY: MemoryStrategy,
    GameKind.MATH_RACE: MathRaceStrategy,
    GameKind.EXPERIMENT: ExperimentStrategy,
}


def create_strategy(
    kind: Union[GameKind, str],
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> ResolutionStrategy:
    """
    Factory function to create a ResolutionStrategy.

    Strategies hold per-session state (layouts, pending turns), so every
    session gets its own instance.

    :param kind: GameKind or its string value (e.g. "mathRace")
    :param config: EngineConfig instance
    :param rng: Random source for sub-element layouts
    :return: New strategy instance
    :raises UnsupportedGameKindError: If kind has no strategy
    """
    try:
        kind = GameKind(kind)
    except ValueError:
        raise UnsupportedGameKindError(f"Unsupported game kind: {kind!r}") from None

    strategy_cls = STRATEGIES.get(kind)
    if strategy_cls is None:
        raise UnsupportedGameKindError(f"No resolution strategy for {kind.value}")
    return strategy_cls(config=config, rng=rng)
