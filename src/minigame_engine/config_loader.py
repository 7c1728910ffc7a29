"""
Configuration loader with validation.
"""
from dotenv import load_dotenv

from .config import EngineConfig
from .config_validator import get_float_env, get_int_env, get_optional_env, validate_config


def load_config_from_env() -> EngineConfig:
    """
    Load engine configuration from environment variables with validation.

    Every value has a default, so an empty environment yields the stock
    timings (1s tick, 30-unit math race countdown, 60% win threshold).

    Usage:
        config = load_config_from_env()
        setup_logging(config.log_level)
        service = MiniGameService(config, provider)

    MiniGameService.from_env() does both steps.

    :return: Validated EngineConfig instance
    :raises: ConfigurationError if a value is malformed or out of range
    """
    # Load .env file if it exists (for local development)
    load_dotenv()

    defaults = EngineConfig()
    config = EngineConfig(
        tick_seconds=get_float_env("MINIGAME_TICK_SECONDS", defaults.tick_seconds),
        math_race_duration_units=get_int_env(
            "MINIGAME_MATH_RACE_DURATION", defaults.math_race_duration_units
        ),
        math_race_result_units=get_float_env(
            "MINIGAME_MATH_RACE_RESULT_DELAY", defaults.math_race_result_units
        ),
        memory_match_delay_units=get_float_env(
            "MINIGAME_MEMORY_MATCH_DELAY", defaults.memory_match_delay_units
        ),
        memory_mismatch_delay_units=get_float_env(
            "MINIGAME_MEMORY_MISMATCH_DELAY", defaults.memory_mismatch_delay_units
        ),
        sort_bonus_threshold_units=get_int_env(
            "MINIGAME_SORT_BONUS_THRESHOLD", defaults.sort_bonus_threshold_units
        ),
        sort_speed_bonus=get_int_env("MINIGAME_SORT_SPEED_BONUS", defaults.sort_speed_bonus),
        win_percentage=get_int_env("MINIGAME_WIN_PERCENTAGE", defaults.win_percentage),
        log_level=get_optional_env("MINIGAME_LOG_LEVEL", default=defaults.log_level).upper(),
    )

    return validate_config(config)
