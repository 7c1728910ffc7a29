class MiniGameError(Exception):
    """Base exception for the mini-game engine."""


class ConfigurationError(MiniGameError):
    """Raised when engine configuration is missing or invalid."""


class ContentFetchError(MiniGameError):
    """Raised when the content provider fails to deliver a pool."""


class InvalidTransitionError(MiniGameError):
    """Raised when a host call is not legal in the current state."""


class UnsupportedGameKindError(MiniGameError):
    """Raised when no resolution strategy exists for a game kind."""


class GameNotFoundError(MiniGameError):
    """Raised when a game id is not tracked by the service."""


class NoPlayableContentError(MiniGameError, ValueError):
    """Raised when a pool yields nothing to play (no items, sortables or pairs)."""
