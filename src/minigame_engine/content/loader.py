"""
Content-load state machine.

Turns the single async fetch signal into distinguishable Loading, Error,
Empty and Ready states, and builds the session once content is there.
"""
import logging
import random
from enum import Enum
from typing import List, Optional, Union

from ..config import EngineConfig
from ..exceptions import ContentFetchError, InvalidTransitionError, NoPlayableContentError
from ..models import ContentItem, Difficulty, GameKind
from ..notifications import GameHost
from ..session.controller import SessionController
from ..shuffler import ContentShuffler
from ..timers import Scheduler, get_default_scheduler
from .provider import ContentProvider

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"
    DISPOSED = "disposed"


class GameLoader:
    """
    Fetches a pool, shuffles it and starts a session over it.

    A failed fetch lands in ERROR and stays there until the host calls
    retry(); nothing is retried automatically. An empty pool lands in EMPTY
    without building a session or arming any timer, as does a pool whose
    items carry nothing to sort or match.
    """

    def __init__(
        self,
        kind: Union[GameKind, str],
        grade: str,
        difficulty: Union[Difficulty, str],
        provider: ContentProvider,
        host: GameHost,
        scheduler: Optional[Scheduler] = None,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.kind = GameKind(kind)
        self.grade = grade
        self.difficulty = Difficulty(difficulty)
        self._provider = provider
        self._host = host
        self._scheduler = scheduler
        self._config = config or EngineConfig()
        self._shuffler = ContentShuffler(rng)
        self._status = LoadStatus.IDLE
        self._error: Optional[ContentFetchError] = None
        self._controller: Optional[SessionController] = None

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def error(self) -> Optional[ContentFetchError]:
        return self._error

    @property
    def retryable(self) -> bool:
        return self._status == LoadStatus.ERROR

    @property
    def controller(self) -> Optional[SessionController]:
        """The running session, only once READY."""
        return self._controller

    async def load(self) -> LoadStatus:
        """
        Fetch content and start the session.

        :return: READY, EMPTY or ERROR (DISPOSED if disposed mid-fetch)
        :raises InvalidTransitionError: If a load was already issued
        """
        if self._status != LoadStatus.IDLE:
            raise InvalidTransitionError(f"load() is only valid once, loader is {self._status.value}")
        return await self._fetch()

    async def retry(self) -> LoadStatus:
        """
        Reissue the fetch after a failure. Nothing from the failed attempt
        survives.

        :raises InvalidTransitionError: If the loader is not in ERROR
        """
        if self._status != LoadStatus.ERROR:
            raise InvalidTransitionError(f"retry() is only valid after an error, loader is {self._status.value}")
        logger.info(f"Retrying content fetch for {self.kind.value} ({self.grade}/{self.difficulty.value})")
        self._error = None
        self._shuffler.invalidate()
        return await self._fetch()

    def dispose(self) -> None:
        if self._controller is not None:
            self._controller.dispose()
            self._controller = None
        self._status = LoadStatus.DISPOSED

    async def _fetch(self) -> LoadStatus:
        self._status = LoadStatus.LOADING
        try:
            pool = await self._provider.fetch(self.kind, self.grade, self.difficulty)
        except Exception as e:
            if self._status == LoadStatus.DISPOSED:
                return self._status
            self._error = e if isinstance(e, ContentFetchError) else ContentFetchError(f"Content fetch failed: {e}")
            self._status = LoadStatus.ERROR
            logger.error(f"Failed to fetch {self.kind.value} content: {e}", exc_info=True)
            return self._status

        if self._status == LoadStatus.DISPOSED:
            logger.debug("Loader disposed while fetching, content discarded")
            return self._status

        try:
            self._controller = self._build_session(pool)
        except NoPlayableContentError as e:
            self._status = LoadStatus.EMPTY
            logger.info(f"No {self.kind.value} content for grade {self.grade}, {self.difficulty.value}: {e}")
            return self._status

        self._status = LoadStatus.READY
        return self._status

    def _build_session(self, pool: List[ContentItem]) -> SessionController:
        sequence = self._shuffler.order(pool)
        scheduler = self._scheduler or get_default_scheduler()
        controller = SessionController(
            self.kind,
            sequence,
            self._host,
            scheduler,
            config=self._config,
            rng=self._shuffler.rng,
        )
        controller.start()
        logger.info(f"{self.kind.value} ready with {len(sequence)} items")
        return controller
