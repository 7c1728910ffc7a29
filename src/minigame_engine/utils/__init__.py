from .logging_setup import setup_logging
from .rounding import round_half_up

__all__ = ["setup_logging", "round_half_up"]
