"""
Session aggregate and completion detection.

SessionController lives in session.controller; it depends on the
resolution layer, which in turn builds on the types exported here.
"""
from .completion import CompletionEvaluator, meets_win_threshold, required_count
from .session import ItemResolutionState, Session, SessionResult, SessionStatus

__all__ = [
    "CompletionEvaluator",
    "meets_win_threshold",
    "required_count",
    "ItemResolutionState",
    "Session",
    "SessionResult",
    "SessionStatus",
]
