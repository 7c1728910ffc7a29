"""
Logging setup for hosts embedding the engine.

Engine modules only create module-level loggers; configuring handlers is
left to the host, which can call setup_logging() once at startup.
"""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = "INFO") -> None:
    """
    Configure root logging for the engine.

    :param level: Level name (e.g. "DEBUG", "INFO"); unknown names fall back to INFO
    """
    resolved = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("minigame_engine").setLevel(resolved)
