"""Repository synchronization store and its building blocks."""

from .pager import CommitHistoryPager, PageRequest
from .repository import RepositoryStore
from .selection import SelectionState
from .staging import validate_address

__all__ = [
    "CommitHistoryPager",
    "PageRequest",
    "RepositoryStore",
    "SelectionState",
    "validate_address",
]
