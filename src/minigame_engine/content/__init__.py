"""
Content layer: providers and the load-state machine.
"""
from .loader import GameLoader, LoadStatus
from .provider import (
    ContentProvider,
    ContentRecord,
    InMemoryContentProvider,
    JsonContentProvider,
    records_to_items,
)

__all__ = [
    "GameLoader",
    "LoadStatus",
    "ContentProvider",
    "ContentRecord",
    "InMemoryContentProvider",
    "JsonContentProvider",
    "records_to_items",
]
