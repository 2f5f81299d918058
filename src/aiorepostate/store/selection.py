"""UI selection state: selected commit/file, active view, multi-file selection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

ViewType = Literal["history", "status"]

# (staged, path)
SelectionKey = tuple[bool, str]


class SelectionState:
    """What the user has selected.

    Multi-file selection is keyed by ``(staged, path)`` so the same path can
    be selected independently in the staged and unstaged lists.
    """

    def __init__(self) -> None:
        self.selected_commit_hash: str | None = None
        self.selected_file_path: str | None = None
        self.selected_file_staged = False
        self.active_view: ViewType = "status"
        self.scroll_target: str | None = None
        self._selected_files: frozenset[SelectionKey] = frozenset()
        self._anchor: SelectionKey | None = None

    @property
    def selected_files(self) -> frozenset[SelectionKey]:
        return self._selected_files

    def select_commit(self, commit_hash: str | None) -> None:
        self.selected_commit_hash = commit_hash

    def select_file(self, path: str | None, staged: bool) -> None:
        self.selected_file_path = path
        self.selected_file_staged = staged

    def set_active_view(self, view: ViewType) -> None:
        self.active_view = view

    def select_and_scroll_to_commit(self, commit_hash: str) -> None:
        self.selected_commit_hash = commit_hash
        self.scroll_target = commit_hash
        self.active_view = "history"

    def clear_scroll_target(self) -> None:
        self.scroll_target = None

    def toggle_file_selection(
        self,
        path: str,
        staged: bool,
        *,
        ctrl: bool = False,
        shift: bool = False,
        all_paths: Sequence[str] = (),
    ) -> None:
        """Apply a click on *path* to the multi-file selection.

        Shift extends from the previous click within the same list, ctrl
        toggles a single entry, a plain click selects only *path*.
        """
        key = (staged, path)
        selection = set(self._selected_files)

        if shift and self._anchor is not None and self._anchor[0] == staged:
            anchor_path = self._anchor[1]
            if anchor_path in all_paths and path in all_paths:
                first = list(all_paths).index(anchor_path)
                last = list(all_paths).index(path)
                start, end = min(first, last), max(first, last)
                selection.update((staged, p) for p in all_paths[start : end + 1])
        elif ctrl:
            selection ^= {key}
        else:
            selection = {key}

        self._selected_files = frozenset(selection)
        self._anchor = key

    def clear_file_selection(self) -> None:
        self._selected_files = frozenset()
        self._anchor = None

    def is_file_selected(self, path: str, staged: bool) -> bool:
        return (staged, path) in self._selected_files

    def selected_paths(self, staged: bool) -> list[str]:
        return sorted(p for s, p in self._selected_files if s == staged)

    def reset(self) -> None:
        self.selected_commit_hash = None
        self.select_file(None, False)
        self.active_view = "status"
        self.scroll_target = None
        self.clear_file_selection()
