import logging
import random
import uuid
from typing import Dict, Optional, Tuple, Union

from .config import EngineConfig
from .config_loader import load_config_from_env
from .content import ContentProvider, GameLoader, LoadStatus
from .exceptions import GameNotFoundError
from .models import Difficulty, GameKind
from .notifications import GameHost
from .timers import Scheduler
from .utils import setup_logging

logger = logging.getLogger(__name__)


class MiniGameService:
    """
    Facade over the mini-game engine.
    The ONLY entry point hosts need: open a game, look it up, close it.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        provider: Optional[ContentProvider] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        """
        Composition root.
        Every game shares the config and provider; each gets its own
        loader, shuffle, session and timers.
        """
        self.config = config or EngineConfig()
        self._provider = provider
        self._scheduler = scheduler
        self._games: Dict[str, GameLoader] = {}

    @classmethod
    def from_env(
        cls,
        provider: Optional[ContentProvider] = None,
        scheduler: Optional[Scheduler] = None,
        configure_logging: bool = True,
    ) -> "MiniGameService":
        """
        Build a service from MINIGAME_* environment variables (and .env).

        :param provider: Content provider to inject
        :param scheduler: Event-loop seam shared by every game
        :param configure_logging: Apply the configured log level via setup_logging()
        :raises ConfigurationError: If a variable is malformed or out of range
        """
        config = load_config_from_env()
        if configure_logging:
            setup_logging(config.log_level)
        logger.info(f"Service configured from environment (log level {config.log_level})")
        return cls(config=config, provider=provider, scheduler=scheduler)

    # ----------------------------
    # Dependency injection setters
    # ----------------------------
    def set_provider(self, provider: ContentProvider) -> None:
        """Inject the content provider."""
        self._provider = provider

    # ----------------------------
    # Game lifecycle
    # ----------------------------
    async def open_game(
        self,
        kind: Union[GameKind, str],
        grade: str,
        difficulty: Union[Difficulty, str],
        host: GameHost,
        rng: Optional[random.Random] = None,
    ) -> Tuple[str, GameLoader]:
        """
        Fetch content and start a session for one game view.

        The loader is tracked even when it ends in ERROR or EMPTY so the
        host can retry or close it.

        :return: (game_id, loader)
        :raises ValueError: If no content provider is configured
        """
        if self._provider is None:
            raise ValueError("No content provider configured")

        loader = GameLoader(
            kind,
            grade,
            difficulty,
            self._provider,
            host,
            scheduler=self._scheduler,
            config=self.config,
            rng=rng,
        )
        game_id = uuid.uuid4().hex
        self._games[game_id] = loader

        status = await loader.load()
        logger.info(f"Opened game {game_id}: {loader.kind.value} -> {status.value}")
        return game_id, loader

    def get_game(self, game_id: str) -> GameLoader:
        loader = self._games.get(game_id)
        if loader is None:
            raise GameNotFoundError(f"Unknown game id: {game_id}")
        return loader

    def close_game(self, game_id: str) -> None:
        """Dispose the game's session and forget it."""
        loader = self._games.pop(game_id, None)
        if loader is None:
            raise GameNotFoundError(f"Unknown game id: {game_id}")
        loader.dispose()
        logger.debug(f"Closed game {game_id}")

    def close_all(self) -> int:
        """
        Dispose every open game.

        :return: Number of games closed
        """
        count = len(self._games)
        for loader in self._games.values():
            loader.dispose()
        self._games.clear()
        return count

    def active_games(self) -> Dict[str, LoadStatus]:
        return {game_id: loader.status for game_id, loader in self._games.items()}
