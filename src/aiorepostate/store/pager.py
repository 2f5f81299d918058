"""Incremental, append-only pagination over the commit history."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..models import GraphCommit
from .requests import RequestSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    ticket: int
    offset: int
    limit: int


class CommitHistoryPager:
    """Holds the loaded prefix of the history and hands out page requests.

    A page shorter than ``page_size`` is the only end-of-history signal.
    Pages are appended in fetch order; the pager never re-sorts.
    """

    def __init__(self, page_size: int = 100) -> None:
        self.page_size = page_size
        self._commits: tuple[GraphCommit, ...] = ()
        self._positions: dict[str, int] = {}
        self._has_more = True
        self._slot = RequestSlot()

    @property
    def commits(self) -> tuple[GraphCommit, ...]:
        return self._commits

    @property
    def loading(self) -> bool:
        return self._slot.loading

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def offset(self) -> int:
        return len(self._commits)

    def begin(self) -> PageRequest | None:
        """Return the next page request, or ``None`` if one must not be issued."""
        if self._slot.loading:
            logger.debug("Commit page already loading")
            return None
        if not self._has_more:
            logger.debug("Commit history exhausted at %d commits", len(self._commits))
            return None
        return PageRequest(ticket=self._slot.begin(), offset=self.offset, limit=self.page_size)

    def complete(self, request: PageRequest, page: Sequence[GraphCommit]) -> bool:
        """Append *page*; returns ``False`` if the request was superseded."""
        if not self._slot.settle(request.ticket):
            logger.debug("Dropping stale commit page at offset %d", request.offset)
            return False

        start = len(self._commits)
        self._commits = (*self._commits, *page)
        self._positions.update({commit.hash: start + i for i, commit in enumerate(page)})
        self._has_more = len(page) == self.page_size
        return True

    def fail(self, request: PageRequest) -> bool:
        """Release the loading guard; returns ``False`` if superseded."""
        return self._slot.settle(request.ticket)

    def reset(self) -> None:
        """Forget the loaded history and drop any in-flight page."""
        self._slot.cancel()
        self._commits = ()
        self._positions = {}
        self._has_more = True

    def index_of(self, commit_hash: str) -> int | None:
        return self._positions.get(commit_hash)
