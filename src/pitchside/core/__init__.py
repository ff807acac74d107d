from .errors import LineupStateError, blocking_issue
from .ids import make_id

__all__ = [
    "LineupStateError",
    "blocking_issue",
    "make_id",
]
