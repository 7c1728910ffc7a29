"""
Content providers.

A provider answers fetch(kind, grade, difficulty) with the pool of content
items for that key. The real content service lives outside this package;
the providers here cover in-process pools and JSON seed files.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ContentFetchError
from ..models import ContentItem, Difficulty, GameKind

logger = logging.getLogger(__name__)

PoolKey = Tuple[GameKind, str, Difficulty]

# Bookkeeping fields stored next to the payload that no strategy reads
_NON_PAYLOAD_FIELDS = {"createdAt", "updatedAt"}


class ContentProvider(Protocol):
    async def fetch(self, kind: GameKind, grade: str, difficulty: Difficulty) -> List[ContentItem]:
        ...


class ContentRecord(BaseModel):
    """
    Envelope of one stored content document.

    Only the envelope is checked; game-specific fields are carried as
    extras and passed through untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(min_length=1)
    game_type: GameKind = Field(alias="gameType")
    grade: str
    difficulty: Difficulty

    def to_item(self) -> ContentItem:
        payload = {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in _NON_PAYLOAD_FIELDS
        }
        return ContentItem(
            id=self.id,
            kind=self.game_type,
            grade=self.grade,
            difficulty=self.difficulty,
            payload=payload,
        )


def _pool_key(kind: Union[GameKind, str], grade: str, difficulty: Union[Difficulty, str]) -> PoolKey:
    return GameKind(kind), str(grade), Difficulty(difficulty)


class InMemoryContentProvider:
    """Serves pools from a dict; useful for hosts that bundle content and for tests."""

    def __init__(self, items: Iterable[ContentItem] = ()):
        self._pools: Dict[PoolKey, List[ContentItem]] = {}
        for item in items:
            self.add(item)

    def add(self, item: ContentItem) -> None:
        key = _pool_key(item.kind, item.grade, item.difficulty)
        self._pools.setdefault(key, []).append(item)

    async def fetch(self, kind: GameKind, grade: str, difficulty: Difficulty) -> List[ContentItem]:
        await asyncio.sleep(0)
        return list(self._pools.get(_pool_key(kind, grade, difficulty), []))


class JsonContentProvider(InMemoryContentProvider):
    """
    Reads a JSON seed file: a list of records shaped like
    {"id", "gameType", "grade", "difficulty", ...payload}.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def load(self) -> int:
        """
        Parse the seed file.

        :return: Number of content items loaded
        :raises ContentFetchError: If the file is missing, not JSON, or a record envelope is invalid
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ContentFetchError(f"Cannot read content file {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise ContentFetchError(f"Content file {self.path} must hold a list of records")

        self._pools.clear()
        for index, record in enumerate(raw):
            try:
                item = ContentRecord.model_validate(record).to_item()
            except PydanticValidationError as e:
                raise ContentFetchError(f"Invalid content record #{index} in {self.path}: {e}") from e
            self.add(item)

        self._loaded = True
        count = sum(len(pool) for pool in self._pools.values())
        logger.info(f"Loaded {count} content items from {self.path}")
        return count

    async def fetch(self, kind: GameKind, grade: str, difficulty: Difficulty) -> List[ContentItem]:
        """Read the seed file on first use in a worker thread, then serve from memory."""
        if not self._loaded:
            await asyncio.to_thread(self.load)
        return await super().fetch(kind, grade, difficulty)


def records_to_items(records: Iterable[Dict[str, Any]]) -> List[ContentItem]:
    """Convert raw content documents to ContentItems (envelope-checked only)."""
    return [ContentRecord.model_validate(record).to_item() for record in records]
