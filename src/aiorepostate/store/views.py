"""State holders for the diff view and the commit/stash detail panels."""

from __future__ import annotations

from typing import Generic, TypeVar

from ..models import FileDiff
from .requests import RequestSlot

T = TypeVar("T")


class DiffView:
    """The working-tree diff currently open, if any."""

    def __init__(self) -> None:
        self.diff: FileDiff | None = None
        self.path: str | None = None
        self.staged = False
        self.is_untracked = False
        self.slot = RequestSlot()

    def target(self, path: str, staged: bool, is_untracked: bool) -> int:
        self.path = path
        self.staged = staged
        self.is_untracked = is_untracked
        return self.slot.begin()

    def displayed(self, path: str, staged: bool) -> FileDiff | None:
        """Return the loaded diff if it shows *path* in the given staged state."""
        if self.slot.loading or self.path != path or self.staged != staged:
            return None
        if self.diff is None or self.diff.path != path:
            return None
        return self.diff

    def clear(self) -> None:
        self.slot.cancel()
        self.diff = None
        self.path = None


class DetailPanel(Generic[T]):
    """One selected commit or stash with its per-file side state.

    The expanded-file set and the per-file diff cache belong to the selected
    item and are emptied whenever a new item starts loading.
    """

    def __init__(self) -> None:
        self.selected: T | None = None
        self.expanded: frozenset[str] = frozenset()
        self.file_diffs: dict[str, FileDiff] = {}
        self.slot = RequestSlot()

    @property
    def loading(self) -> bool:
        return self.slot.loading

    def begin(self) -> int:
        self.expanded = frozenset()
        self.file_diffs = {}
        return self.slot.begin()

    def finish(self, ticket: int, item: T) -> bool:
        if not self.slot.settle(ticket):
            return False
        self.selected = item
        return True

    def toggle(self, file_path: str) -> None:
        if file_path in self.expanded:
            self.expanded = self.expanded - {file_path}
        else:
            self.expanded = self.expanded | {file_path}

    def put_diff(self, file_path: str, diff: FileDiff) -> None:
        self.file_diffs = {**self.file_diffs, file_path: diff}

    def clear(self) -> None:
        self.slot.cancel()
        self.selected = None
        self.expanded = frozenset()
        self.file_diffs = {}
