"""Data models for navproto."""

from navproto.models.outcome import ElementOutcome, Failed, Located, NotFetched, VisibilityFilter
from navproto.models.results import NavigationResult
from navproto.models.screenshot import FileName, Screenshot

__all__ = [
    "ElementOutcome",
    "Failed",
    "FileName",
    "Located",
    "NavigationResult",
    "NotFetched",
    "Screenshot",
    "VisibilityFilter",
]
