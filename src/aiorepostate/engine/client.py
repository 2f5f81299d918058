"""Typed request/response façade over the external repository engine.

The engine itself (repository I/O, diffing, graph layout) lives behind an
:class:`EngineTransport`.  :class:`EngineClient` adds one coroutine per
engine command, validates responses into models, and converts every failure
into an :class:`~aiorepostate.exceptions.EngineError`.  It keeps no state
between calls, caches nothing and never retries.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..exceptions import EngineError, OpenRepositoryError, OperationError
from ..messages import classify_open_failure
from ..models import (
    BranchInfo,
    CommitDetails,
    DiffHunk,
    FileDiff,
    FileStatuses,
    GraphCommit,
    RepositoryInfo,
    StashDetails,
    StashInfo,
    TagInfo,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_COMMIT_PAGE = TypeAdapter(list[GraphCommit])
_BRANCHES = TypeAdapter(list[BranchInfo])
_TAGS = TypeAdapter(list[TagInfo])
_STASHES = TypeAdapter(list[StashInfo])
_REPOSITORY_INFO = TypeAdapter(RepositoryInfo)
_COMMIT_DETAILS = TypeAdapter(CommitDetails)
_COMMIT_ID = TypeAdapter(str)
_FILE_STATUSES = TypeAdapter(FileStatuses)
_FILE_DIFF = TypeAdapter(FileDiff)
_DIFF_HUNK = TypeAdapter(DiffHunk)
_STASH_DETAILS = TypeAdapter(StashDetails)


class EngineTransport(Protocol):
    """RPC surface of the engine: one named command, keyword arguments in."""

    async def invoke(self, command: str, args: dict[str, Any]) -> Any: ...


class EngineClient:
    """One coroutine per engine command."""

    def __init__(self, transport: EngineTransport) -> None:
        self.transport = transport

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _call(self, command: str, **args: Any) -> Any:
        logger.debug("engine call %s %s", command, args)
        try:
            return await self.transport.invoke(command, args)
        except EngineError:
            raise
        except Exception as exc:
            raise OperationError(command, str(exc), exc) from exc

    async def _call_typed(self, adapter: TypeAdapter[T], command: str, **args: Any) -> T:
        raw = await self._call(command, **args)
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            raise OperationError(command, f"Malformed response from {command}: {exc}", exc) from exc

    # ------------------------------------------------------------------
    # Repository
    # ------------------------------------------------------------------

    async def open_repository(self, path: str) -> RepositoryInfo:
        try:
            raw = await self.transport.invoke("open_repository", {"path": path})
        except Exception as exc:
            message = str(exc)
            raise OpenRepositoryError(message, classify_open_failure(message), exc) from exc
        try:
            return RepositoryInfo.model_validate(raw)
        except ValidationError as exc:
            raise OpenRepositoryError(
                f"Malformed response from open_repository: {exc}", cause=exc
            ) from exc

    async def get_repository_info(self) -> RepositoryInfo:
        return await self._call_typed(_REPOSITORY_INFO, "get_repository_info")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def get_commit_graph(self, skip: int, limit: int) -> list[GraphCommit]:
        return await self._call_typed(_COMMIT_PAGE, "get_commit_graph", skip=skip, limit=limit)

    async def get_commit_details(self, commit_hash: str) -> CommitDetails:
        return await self._call_typed(_COMMIT_DETAILS, "get_commit_details", hash=commit_hash)

    async def get_commit_file_diff(self, commit_hash: str, file_path: str) -> FileDiff:
        return await self._call_typed(
            _FILE_DIFF, "get_commit_file_diff", hash=commit_hash, file_path=file_path
        )

    async def create_commit(self, message: str) -> str:
        return await self._call_typed(_COMMIT_ID, "create_commit", message=message)

    async def checkout_commit(self, commit_hash: str) -> None:
        await self._call("checkout_commit", hash=commit_hash)

    async def revert_commit(self, commit_hash: str) -> None:
        await self._call("revert_commit", hash=commit_hash)

    async def revert_commit_file(self, commit_hash: str, path: str) -> None:
        await self._call("revert_commit_file", hash=commit_hash, path=path)

    async def revert_commit_file_lines(
        self,
        commit_hash: str,
        path: str,
        hunk_index: int,
        line_indices: list[int],
    ) -> None:
        await self._call(
            "revert_commit_file_lines",
            hash=commit_hash,
            path=path,
            hunk_index=hunk_index,
            line_indices=list(line_indices),
        )

    # ------------------------------------------------------------------
    # Branches and tags
    # ------------------------------------------------------------------

    async def list_branches(self) -> list[BranchInfo]:
        return await self._call_typed(_BRANCHES, "list_branches")

    async def list_tags(self) -> list[TagInfo]:
        return await self._call_typed(_TAGS, "list_tags")

    async def checkout_branch(self, branch_name: str) -> None:
        await self._call("checkout_branch", branch_name=branch_name)

    async def delete_branch(self, branch_name: str, is_remote: bool) -> None:
        await self._call("delete_branch", branch_name=branch_name, is_remote=is_remote)

    async def delete_tag(self, tag_name: str) -> None:
        await self._call("delete_tag", tag_name=tag_name)

    # ------------------------------------------------------------------
    # Working tree
    # ------------------------------------------------------------------

    async def get_file_statuses(self) -> FileStatuses:
        return await self._call_typed(_FILE_STATUSES, "get_file_statuses")

    async def get_file_diff(self, path: str, staged: bool, is_untracked: bool = False) -> FileDiff:
        return await self._call_typed(
            _FILE_DIFF,
            "get_file_diff",
            path=path,
            staged=staged,
            is_untracked=is_untracked,
        )

    async def get_diff_hunk(
        self,
        path: str,
        staged: bool,
        hunk_index: int,
        is_untracked: bool = False,
    ) -> DiffHunk:
        return await self._call_typed(
            _DIFF_HUNK,
            "get_diff_hunk",
            path=path,
            staged=staged,
            hunk_index=hunk_index,
            is_untracked=is_untracked,
        )

    async def stage_file(self, path: str) -> None:
        await self._call("stage_file", path=path)

    async def unstage_file(self, path: str) -> None:
        await self._call("unstage_file", path=path)

    async def stage_hunk(self, path: str, hunk_index: int) -> None:
        await self._call("stage_hunk", path=path, hunk_index=hunk_index)

    async def unstage_hunk(self, path: str, hunk_index: int) -> None:
        await self._call("unstage_hunk", path=path, hunk_index=hunk_index)

    async def stage_lines(self, path: str, hunk_index: int, line_indices: list[int]) -> None:
        await self._call(
            "stage_lines", path=path, hunk_index=hunk_index, line_indices=list(line_indices)
        )

    async def discard_hunk(
        self,
        path: str,
        hunk_index: int,
        line_indices: list[int] | None = None,
    ) -> None:
        """Discard a whole hunk, or only *line_indices* within it."""
        await self._call(
            "discard_hunk",
            path=path,
            hunk_index=hunk_index,
            line_indices=list(line_indices) if line_indices is not None else None,
        )

    async def revert_file(self, path: str) -> None:
        await self._call("revert_file", path=path)

    async def delete_file(self, path: str) -> None:
        await self._call("delete_file", path=path)

    # ------------------------------------------------------------------
    # Stashes
    # ------------------------------------------------------------------

    async def list_stashes(self) -> list[StashInfo]:
        return await self._call_typed(_STASHES, "list_stashes")

    async def get_stash_details(self, index: int) -> StashDetails:
        return await self._call_typed(_STASH_DETAILS, "get_stash_details", index=index)

    async def get_stash_file_diff(self, index: int, file_path: str) -> FileDiff:
        return await self._call_typed(
            _FILE_DIFF, "get_stash_file_diff", index=index, file_path=file_path
        )

    async def apply_stash(self, index: int) -> None:
        await self._call("apply_stash", index=index)

    async def drop_stash(self, index: int) -> None:
        await self._call("drop_stash", index=index)
