"""
Content shuffling.

Turns a fetched content pool into a fixed play order. The order is
computed once per pool and served from cache afterwards, so re-reading it
(re-render, restart) never reshuffles.
"""
import logging
import random
from typing import Any, Hashable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def fisher_yates(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a shuffled copy of items.

    For each index i from the end down to 1, swap with a uniform j in [0, i].

    :param items: Items to shuffle (left untouched)
    :param rng: Random source; module-level random when omitted
    :return: New list holding a permutation of items
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class ContentShuffler:
    """
    Memoized play-order derivation.

    The cache is keyed by the pool's identity (the list object the provider
    returned) or by an explicit version key when the caller has one. Holding
    a reference to the pool keeps its identity from being reused.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._pool: Any = None
        self._version: Optional[Hashable] = None
        self._order: Optional[Tuple[T, ...]] = None

    def order(self, pool: Sequence[T], version: Optional[Hashable] = None) -> Tuple[T, ...]:
        """
        Get the shuffled order for a pool.

        :param pool: Content pool as fetched
        :param version: Optional identity key; when given it replaces object identity
        :return: Tuple permutation of the pool
        """
        if self._order is not None and self._is_same_pool(pool, version):
            return self._order

        self._pool = pool
        self._version = version
        self._order = tuple(fisher_yates(pool, self._rng)) if pool else ()
        logger.debug(f"Shuffled pool of {len(self._order)} items (version={version})")
        return self._order

    def invalidate(self) -> None:
        """Drop the cached order."""
        self._pool = None
        self._version = None
        self._order = None

    @property
    def rng(self) -> random.Random:
        return self._rng

    def _is_same_pool(self, pool: Sequence[Any], version: Optional[Hashable]) -> bool:
        if version is not None or self._version is not None:
            return version == self._version
        return pool is self._pool
