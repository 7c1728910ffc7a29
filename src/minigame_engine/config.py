from dataclasses import dataclass


@dataclass
class EngineConfig:
    # Timer tick length in seconds (one "unit")
    tick_seconds: float = 1.0

    # Math race
    math_race_duration_units: int = 30
    math_race_result_units: float = 1.5

    # Memory: how long a flipped pair stays visible before it settles
    memory_match_delay_units: float = 0.5
    memory_mismatch_delay_units: float = 1.0

    # Sort speed bonus
    sort_bonus_threshold_units: int = 60
    sort_speed_bonus: int = 20

    # Quiz / number pattern / math race win threshold
    win_percentage: int = 60

    log_level: str = "INFO"

    def units_to_seconds(self, units: float) -> float:
        return units * self.tick_seconds
