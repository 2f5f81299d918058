"""Repository synchronization store.

:class:`RepositoryStore` is the single owner of everything derived from the
engine.  Every public coroutine is a catch boundary: it calls the engine,
re-reads whatever the call may have invalidated, and routes failures to the
notifier.  None of them raise.

State is replaced wholesale, never patched in place, and is only readable
from outside through properties and :meth:`RepositoryStore.snapshot`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ..config import StoreSettings
from ..engine import EngineClient
from ..exceptions import InvalidRequestError
from ..messages import describe_error
from ..models import (
    BranchInfo,
    CommitDetails,
    ConfirmRequest,
    FileDiff,
    FileStatuses,
    GraphCommit,
    HunkAddress,
    RepositoryInfo,
    RepositorySnapshot,
    StashDetails,
    StashInfo,
    TagInfo,
)
from ..notifications import ConfirmDialog, Confirmer, NotificationCenter, Notifier
from .pager import CommitHistoryPager
from .requests import RequestSlot
from .selection import SelectionState
from .staging import validate_address
from .views import DetailPanel, DiffView

logger = logging.getLogger(__name__)


class RepositoryStore:
    """Client-side projection of one repository."""

    def __init__(
        self,
        client: EngineClient,
        *,
        notifier: Notifier | None = None,
        confirmer: Confirmer | None = None,
        settings: StoreSettings | None = None,
    ) -> None:
        self.settings = settings or StoreSettings()
        self.client = client
        self.notifier: Notifier = notifier or NotificationCenter(
            error_seconds=self.settings.error_toast_seconds,
            success_seconds=self.settings.success_toast_seconds,
        )
        self.confirmer: Confirmer = confirmer or ConfirmDialog()
        self.selection = SelectionState()

        self._epoch = 0
        self._repository_info: RepositoryInfo | None = None
        self._open_slot = RequestSlot()

        self._pager = CommitHistoryPager(self.settings.commits_per_page)

        self._file_statuses: FileStatuses | None = None
        self._status_slot = RequestSlot()

        self._diff = DiffView()
        self._commit_details: DetailPanel[CommitDetails] = DetailPanel()
        self._stash_details: DetailPanel[StashDetails] = DetailPanel()

        self._branches: tuple[BranchInfo, ...] = ()
        self._tags: tuple[TagInfo, ...] = ()
        self._stashes: tuple[StashInfo, ...] = ()
        self._refs_slot = RequestSlot()
        self._stash_list_slot = RequestSlot()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def repository_info(self) -> RepositoryInfo | None:
        return self._repository_info

    @property
    def is_loading(self) -> bool:
        return self._open_slot.loading

    @property
    def commits(self) -> tuple[GraphCommit, ...]:
        return self._pager.commits

    @property
    def commits_loading(self) -> bool:
        return self._pager.loading

    @property
    def has_more_commits(self) -> bool:
        return self._pager.has_more

    @property
    def file_statuses(self) -> FileStatuses | None:
        return self._file_statuses

    @property
    def file_statuses_loading(self) -> bool:
        return self._status_slot.loading

    @property
    def current_diff(self) -> FileDiff | None:
        return self._diff.diff

    @property
    def current_diff_path(self) -> str | None:
        return self._diff.path

    @property
    def current_diff_staged(self) -> bool:
        return self._diff.staged

    @property
    def diff_loading(self) -> bool:
        return self._diff.slot.loading

    @property
    def selected_commit_details(self) -> CommitDetails | None:
        return self._commit_details.selected

    @property
    def commit_details_loading(self) -> bool:
        return self._commit_details.loading

    @property
    def expanded_commit_files(self) -> frozenset[str]:
        return self._commit_details.expanded

    @property
    def commit_file_diffs(self) -> dict[str, FileDiff]:
        return dict(self._commit_details.file_diffs)

    @property
    def branches(self) -> tuple[BranchInfo, ...]:
        return self._branches

    @property
    def tags(self) -> tuple[TagInfo, ...]:
        return self._tags

    @property
    def stashes(self) -> tuple[StashInfo, ...]:
        return self._stashes

    @property
    def selected_stash_details(self) -> StashDetails | None:
        return self._stash_details.selected

    @property
    def stash_details_loading(self) -> bool:
        return self._stash_details.loading

    @property
    def expanded_stash_files(self) -> frozenset[str]:
        return self._stash_details.expanded

    @property
    def stash_file_diffs(self) -> dict[str, FileDiff]:
        return dict(self._stash_details.file_diffs)

    def snapshot(self) -> RepositorySnapshot:
        """Return a frozen copy of the current state."""
        return RepositorySnapshot(
            repository_info=self._repository_info,
            is_loading=self.is_loading,
            commits=self._pager.commits,
            commits_loading=self._pager.loading,
            has_more_commits=self._pager.has_more,
            file_statuses=self._file_statuses,
            file_statuses_loading=self.file_statuses_loading,
            current_diff=self._diff.diff,
            current_diff_path=self._diff.path,
            current_diff_staged=self._diff.staged,
            diff_loading=self.diff_loading,
            selected_commit_details=self._commit_details.selected,
            commit_details_loading=self._commit_details.loading,
            expanded_commit_files=self._commit_details.expanded,
            commit_file_diffs=dict(self._commit_details.file_diffs),
            branches=self._branches,
            tags=self._tags,
            stashes=self._stashes,
            selected_stash_details=self._stash_details.selected,
            stash_details_loading=self._stash_details.loading,
            expanded_stash_files=self._stash_details.expanded,
            stash_file_diffs=dict(self._stash_details.file_diffs),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _report(self, exc: Exception) -> None:
        message = describe_error(exc)
        logger.warning("%s: %s", type(exc).__name__, message)
        self.notifier.show_error(message)

    def _short(self, commit_hash: str) -> str:
        return commit_hash[: self.settings.short_hash_length]

    async def _confirm(self, request: ConfirmRequest) -> bool:
        try:
            confirmed = await self.confirmer.show_confirm(request)
        except Exception as exc:
            self._report(exc)
            return False
        if not confirmed:
            logger.debug("Cancelled: %s", request.title)
        return confirmed

    async def _mutate(self, action: str, call: Callable[[], Awaitable[object]]) -> bool:
        """Run one engine mutation; ``True`` if it succeeded and follow-ups should run."""
        epoch = self._epoch
        try:
            await call()
        except Exception as exc:
            self._report(exc)
            return False
        if epoch != self._epoch:
            logger.debug("Repository changed during %s, skipping reloads", action)
            return False
        logger.info("%s succeeded", action)
        return True

    def _reset_repository_state(self) -> None:
        """Drop every derived collection and invalidate in-flight requests."""
        self._epoch += 1
        self._pager.reset()
        self._file_statuses = None
        self._status_slot.cancel()
        self._diff.clear()
        self._commit_details.clear()
        self._stash_details.clear()
        self._branches = ()
        self._tags = ()
        self._stashes = ()
        self._refs_slot.cancel()
        self._stash_list_slot.cancel()
        self.selection.reset()

    # ------------------------------------------------------------------
    # Repository lifecycle
    # ------------------------------------------------------------------

    async def open(self, path: str) -> None:
        """Open *path*, then load the first history page and the file statuses."""
        ticket = self._open_slot.begin()
        try:
            info = await self.client.open_repository(path)
        except Exception as exc:
            if self._open_slot.settle(ticket):
                self._report(exc)
            else:
                logger.debug("Dropping failure of superseded open of %s", path)
            return

        if not self._open_slot.settle(ticket):
            logger.debug("Open of %s superseded", path)
            return

        self._reset_repository_state()
        self._repository_info = info
        logger.info("Opened repository %s (HEAD %s)", info.path, info.head_hash)

        await asyncio.gather(self.load_more_commits(), self.load_file_statuses())

    async def close(self) -> None:
        """Forget the open repository; responses still in flight are dropped."""
        self._open_slot.cancel()
        self._reset_repository_state()
        self._repository_info = None

    async def refresh(self) -> None:
        """Re-read HEAD, the first history page, the statuses and the open diff."""
        if self._repository_info is None:
            return

        epoch = self._epoch
        self._pager.reset()
        try:
            info = await self.client.get_repository_info()
        except Exception as exc:
            self._report(exc)
            return
        if epoch != self._epoch:
            return
        self._repository_info = info

        await asyncio.gather(self.load_more_commits(), self.load_file_statuses())

        if self._diff.path is not None:
            await self.load_file_diff(self._diff.path, self._diff.staged, self._diff.is_untracked)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def load_more_commits(self) -> None:
        """Append the next page of history.

        No-op while a page is loading, once history is exhausted, or when no
        repository is open.
        """
        if self._repository_info is None:
            return
        request = self._pager.begin()
        if request is None:
            return

        try:
            page = await self.client.get_commit_graph(request.offset, request.limit)
        except Exception as exc:
            if self._pager.fail(request):
                self._report(exc)
            return

        if self._pager.complete(request, page):
            logger.debug("Loaded %d commits at offset %d", len(page), request.offset)

    async def scroll_to_commit(self, commit_hash: str) -> bool:
        """Select and scroll to a loaded commit and load its details.

        Returns ``False`` without fetching anything if the commit is not in
        the loaded part of the history.
        """
        if self._pager.index_of(commit_hash) is None:
            logger.debug("Commit %s is not loaded, cannot scroll to it", commit_hash)
            return False

        self.selection.select_and_scroll_to_commit(commit_hash)
        await self.load_commit_details(commit_hash)
        return True

    async def create_commit(self, message: str) -> None:
        if not message.strip():
            self._report(InvalidRequestError("Commit message is empty"))
            return
        if not await self._mutate("create_commit", lambda: self.client.create_commit(message)):
            return
        self.clear_diff()
        await self.refresh()

    async def checkout_commit(self, commit_hash: str) -> None:
        if not await self._mutate(
            f"checkout {self._short(commit_hash)}",
            lambda: self.client.checkout_commit(commit_hash),
        ):
            return
        await self.refresh()

    async def revert_commit(self, commit_hash: str) -> None:
        short = self._short(commit_hash)
        request = ConfirmRequest(
            title="Revert commit",
            message=f"Revert the changes of commit {short} in the working tree?",
            confirm_label="Revert",
        )
        if not await self._confirm(request):
            return
        if not await self._mutate(
            f"revert {short}", lambda: self.client.revert_commit(commit_hash)
        ):
            return
        await self.load_file_statuses()
        self.notifier.show_success(f"Reverted commit {short}")

    async def revert_commit_file(self, commit_hash: str, path: str) -> None:
        request = ConfirmRequest(
            title="Revert file",
            message=f"Revert the changes to {path} made in commit {self._short(commit_hash)}?",
            confirm_label="Revert",
        )
        if not await self._confirm(request):
            return
        if not await self._mutate(
            f"revert {path} from {self._short(commit_hash)}",
            lambda: self.client.revert_commit_file(commit_hash, path),
        ):
            return
        await self.load_file_statuses()
        self.notifier.show_success(f"Reverted {path}")

    async def revert_commit_file_lines(
        self,
        commit_hash: str,
        path: str,
        hunk_index: int,
        line_indices: Sequence[int],
        *,
        fingerprint: str | None = None,
    ) -> None:
        address = HunkAddress(
            path=path,
            hunk_index=hunk_index,
            line_indices=list(line_indices),
            fingerprint=fingerprint,
        )
        displayed = None
        selected = self._commit_details.selected
        if selected is not None and selected.hash == commit_hash:
            displayed = self._commit_details.file_diffs.get(path)
        try:
            validate_address(address, displayed)
        except InvalidRequestError as exc:
            self._report(exc)
            return

        if not await self._mutate(
            f"revert lines in {path}",
            lambda: self.client.revert_commit_file_lines(
                commit_hash, path, hunk_index, list(line_indices)
            ),
        ):
            return
        await self.load_file_statuses()
        await self.load_commit_file_diff(commit_hash, path)
        self.notifier.show_success(f"Reverted lines in {path}")

    # ------------------------------------------------------------------
    # Commit details
    # ------------------------------------------------------------------

    async def load_commit_details(self, commit_hash: str) -> None:
        ticket = self._commit_details.begin()
        try:
            details = await self.client.get_commit_details(commit_hash)
        except Exception as exc:
            if self._commit_details.slot.settle(ticket):
                self._report(exc)
            return
        self._commit_details.finish(ticket, details)

    def clear_commit_details(self) -> None:
        self._commit_details.clear()

    def toggle_commit_file_expanded(self, file_path: str) -> None:
        self._commit_details.toggle(file_path)

    async def load_commit_file_diff(self, commit_hash: str, file_path: str) -> None:
        panel = self._commit_details
        sequence = panel.slot.sequence
        try:
            diff = await self.client.get_commit_file_diff(commit_hash, file_path)
        except Exception as exc:
            if panel.slot.is_current(sequence):
                self._report(exc)
            return
        if not panel.slot.is_current(sequence):
            logger.debug("Dropping diff of %s for a commit no longer selected", file_path)
            return
        panel.put_diff(file_path, diff)

    # ------------------------------------------------------------------
    # Working tree
    # ------------------------------------------------------------------

    async def load_file_statuses(self) -> None:
        ticket = self._status_slot.begin()
        try:
            statuses = await self.client.get_file_statuses()
        except Exception as exc:
            if self._status_slot.settle(ticket):
                self._report(exc)
            return
        if self._status_slot.settle(ticket):
            self._file_statuses = statuses

    async def load_file_diff(self, path: str, staged: bool, is_untracked: bool = False) -> None:
        """Open the diff of *path*; closes any stash detail view."""
        self._stash_details.clear()
        ticket = self._diff.target(path, staged, is_untracked)
        try:
            diff = await self.client.get_file_diff(path, staged, is_untracked)
        except Exception as exc:
            if self._diff.slot.settle(ticket):
                # The old diff would otherwise be shown under the new path.
                self._diff.diff = None
                self._report(exc)
            return
        if self._diff.slot.settle(ticket):
            self._diff.diff = diff

    def clear_diff(self) -> None:
        self._diff.clear()

    async def stage_file(self, path: str) -> None:
        if not await self._mutate(f"stage {path}", lambda: self.client.stage_file(path)):
            return
        await self.load_file_statuses()
        if self._diff.path == path:
            await self.load_file_diff(path, True)

    async def unstage_file(self, path: str) -> None:
        if not await self._mutate(f"unstage {path}", lambda: self.client.unstage_file(path)):
            return
        await self.load_file_statuses()
        if self._diff.path == path:
            await self.load_file_diff(path, False)

    async def _apply_each(self, action: str, paths: Sequence[str], staged: bool) -> None:
        async def run() -> None:
            # One call per path, in order; statuses are reloaded once afterwards.
            for path in paths:
                if staged:
                    await self.client.stage_file(path)
                else:
                    await self.client.unstage_file(path)

        if not paths:
            return
        if not await self._mutate(f"{action} {len(paths)} files", run):
            return
        await self.load_file_statuses()
        if self._diff.path in paths:
            await self.load_file_diff(self._diff.path, staged)

    async def stage_files(self, paths: Sequence[str]) -> None:
        await self._apply_each("stage", list(paths), True)

    async def unstage_files(self, paths: Sequence[str]) -> None:
        await self._apply_each("unstage", list(paths), False)

    async def _apply_partial(
        self,
        action: str,
        address: HunkAddress,
        staged: bool,
        call: Callable[[], Awaitable[object]],
    ) -> None:
        try:
            validate_address(address, self._diff.displayed(address.path, staged))
        except InvalidRequestError as exc:
            self._report(exc)
            return
        if not await self._mutate(f"{action} {address.path}#{address.hunk_index}", call):
            return
        await self.load_file_statuses()
        if self._diff.path == address.path:
            await self.load_file_diff(address.path, staged)

    async def stage_hunk(
        self, path: str, hunk_index: int, *, fingerprint: str | None = None
    ) -> None:
        address = HunkAddress(path=path, hunk_index=hunk_index, fingerprint=fingerprint)
        await self._apply_partial(
            "stage hunk", address, False, lambda: self.client.stage_hunk(path, hunk_index)
        )

    async def unstage_hunk(
        self, path: str, hunk_index: int, *, fingerprint: str | None = None
    ) -> None:
        address = HunkAddress(path=path, hunk_index=hunk_index, fingerprint=fingerprint)
        await self._apply_partial(
            "unstage hunk", address, True, lambda: self.client.unstage_hunk(path, hunk_index)
        )

    async def stage_lines(
        self,
        path: str,
        hunk_index: int,
        line_indices: Sequence[int],
        *,
        fingerprint: str | None = None,
    ) -> None:
        lines = list(line_indices)
        address = HunkAddress(
            path=path, hunk_index=hunk_index, line_indices=lines, fingerprint=fingerprint
        )
        await self._apply_partial(
            "stage lines", address, False, lambda: self.client.stage_lines(path, hunk_index, lines)
        )

    async def discard_hunk(
        self, path: str, hunk_index: int, *, fingerprint: str | None = None
    ) -> None:
        """Discard a whole unstaged hunk.  Confirmation is the caller's job."""
        address = HunkAddress(path=path, hunk_index=hunk_index, fingerprint=fingerprint)
        await self._apply_partial(
            "discard hunk", address, False, lambda: self.client.discard_hunk(path, hunk_index)
        )

    async def discard_lines(
        self,
        path: str,
        hunk_index: int,
        line_indices: Sequence[int],
        *,
        fingerprint: str | None = None,
    ) -> None:
        lines = list(line_indices)
        address = HunkAddress(
            path=path, hunk_index=hunk_index, line_indices=lines, fingerprint=fingerprint
        )
        await self._apply_partial(
            "discard lines",
            address,
            False,
            lambda: self.client.discard_hunk(path, hunk_index, lines),
        )

    async def revert_file(self, path: str) -> None:
        request = ConfirmRequest(
            title="Revert file",
            message=f"Discard all changes to {path}? This cannot be undone.",
            confirm_label="Revert",
        )
        if not await self._confirm(request):
            return
        if not await self._mutate(f"revert {path}", lambda: self.client.revert_file(path)):
            return
        await self.load_file_statuses()
        if self._diff.path == path:
            self.clear_diff()
        self.notifier.show_success(f"Reverted {path}")

    async def delete_file(self, path: str) -> None:
        request = ConfirmRequest(
            title="Delete file",
            message=f"Delete {path}? This cannot be undone.",
            confirm_label="Delete",
        )
        if not await self._confirm(request):
            return
        if not await self._mutate(f"delete {path}", lambda: self.client.delete_file(path)):
            return
        await self.load_file_statuses()
        if self._diff.path == path:
            self.clear_diff()

    # ------------------------------------------------------------------
    # Branches, tags and stashes
    # ------------------------------------------------------------------

    async def load_branches_and_tags(self) -> None:
        """Reload branches, tags and stashes together."""
        ticket = self._refs_slot.begin()
        try:
            branches, tags, stashes = await asyncio.gather(
                self.client.list_branches(),
                self.client.list_tags(),
                self.client.list_stashes(),
            )
        except Exception as exc:
            if self._refs_slot.settle(ticket):
                self._report(exc)
            return
        if self._refs_slot.settle(ticket):
            self._branches = tuple(branches)
            self._tags = tuple(tags)
            self._stashes = tuple(stashes)

    async def load_stashes(self) -> None:
        ticket = self._stash_list_slot.begin()
        try:
            stashes = await self.client.list_stashes()
        except Exception as exc:
            if self._stash_list_slot.settle(ticket):
                self._report(exc)
            return
        if self._stash_list_slot.settle(ticket):
            self._stashes = tuple(stashes)

    async def checkout_branch(self, branch_name: str) -> None:
        if not await self._mutate(
            f"checkout {branch_name}", lambda: self.client.checkout_branch(branch_name)
        ):
            return
        await self.refresh()
        await self.load_branches_and_tags()

    async def delete_branch(
        self, branch_name: str, is_remote: bool, *, confirm: bool = False
    ) -> None:
        if confirm:
            kind = "remote branch" if is_remote else "branch"
            request = ConfirmRequest(
                title="Delete branch",
                message=f"Delete {kind} {branch_name}?",
                confirm_label="Delete",
            )
            if not await self._confirm(request):
                return
        if not await self._mutate(
            f"delete branch {branch_name}",
            lambda: self.client.delete_branch(branch_name, is_remote),
        ):
            return
        await self.refresh()
        await self.load_branches_and_tags()

    async def delete_tag(self, tag_name: str, *, confirm: bool = False) -> None:
        if confirm:
            request = ConfirmRequest(
                title="Delete tag", message=f"Delete tag {tag_name}?", confirm_label="Delete"
            )
            if not await self._confirm(request):
                return
        if not await self._mutate(
            f"delete tag {tag_name}", lambda: self.client.delete_tag(tag_name)
        ):
            return
        await self.refresh()
        await self.load_branches_and_tags()

    async def apply_stash(self, index: int) -> None:
        if not await self._mutate(
            f"apply stash@{{{index}}}", lambda: self.client.apply_stash(index)
        ):
            return
        await self.refresh()
        await self.load_branches_and_tags()

    async def drop_stash(self, index: int, *, confirm: bool = False) -> None:
        if confirm:
            request = ConfirmRequest(
                title="Drop stash",
                message=f"Drop stash@{{{index}}}? This cannot be undone.",
                confirm_label="Drop",
            )
            if not await self._confirm(request):
                return
        if not await self._mutate(
            f"drop stash@{{{index}}}", lambda: self.client.drop_stash(index)
        ):
            return
        await self.load_branches_and_tags()

        selected = self._stash_details.selected
        if selected is not None and selected.index == index:
            self._stash_details.clear()

    # ------------------------------------------------------------------
    # Stash details
    # ------------------------------------------------------------------

    async def load_stash_details(self, index: int) -> None:
        ticket = self._stash_details.begin()
        try:
            details = await self.client.get_stash_details(index)
        except Exception as exc:
            if self._stash_details.slot.settle(ticket):
                self._report(exc)
            return
        self._stash_details.finish(ticket, details)

    def clear_stash_details(self) -> None:
        self._stash_details.clear()

    def toggle_stash_file_expanded(self, file_path: str) -> None:
        self._stash_details.toggle(file_path)

    async def load_stash_file_diff(self, index: int, file_path: str) -> None:
        panel = self._stash_details
        sequence = panel.slot.sequence
        try:
            diff = await self.client.get_stash_file_diff(index, file_path)
        except Exception as exc:
            if panel.slot.is_current(sequence):
                self._report(exc)
            return
        if not panel.slot.is_current(sequence):
            logger.debug("Dropping diff of %s for a stash no longer selected", file_path)
            return
        panel.put_diff(file_path, diff)
