"""
Configuration validation utilities.

Environment lookups with placeholder detection, plus range checks for
the timing and scoring knobs of EngineConfig.
"""
import os
import warnings
from typing import Optional

from .config import EngineConfig
from .exceptions import ConfigurationError


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def get_float_env(key: str, default: float) -> float:
    """
    Read a numeric environment variable.

    :raises: ConfigurationError if the value is not a number
    """
    raw = get_optional_env(key, str(default))
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


def get_int_env(key: str, default: int) -> int:
    """
    Read an integer environment variable.

    :raises: ConfigurationError if the value is not an integer
    """
    raw = get_optional_env(key, str(default))
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")


def validate_config(config: EngineConfig) -> EngineConfig:
    """
    Check timing and scoring values are usable.

    :param config: Config to check
    :return: The same config
    :raises: ConfigurationError on the first invalid value
    """
    if config.tick_seconds <= 0:
        raise ConfigurationError(
            f"tick_seconds must be positive, got {config.tick_seconds}"
        )

    if config.math_race_duration_units <= 0:
        raise ConfigurationError(
            f"math_race_duration_units must be positive, got {config.math_race_duration_units}"
        )

    for name in (
        "math_race_result_units",
        "memory_match_delay_units",
        "memory_mismatch_delay_units",
        "sort_bonus_threshold_units",
    ):
        if getattr(config, name) < 0:
            raise ConfigurationError(f"{name} cannot be negative")

    if not 0 <= config.win_percentage <= 100:
        raise ConfigurationError(
            f"win_percentage must be between 0 and 100, got {config.win_percentage}"
        )

    return config


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "changeme",
        "replace",
        "todo",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)
