"""Read-only view of the store state handed to the rendering layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .commits import CommitDetails, GraphCommit
from .diff import FileDiff
from .refs import BranchInfo, StashDetails, StashInfo, TagInfo
from .repository import RepositoryInfo
from .status import FileStatuses


class RepositorySnapshot(BaseModel):
    """Point-in-time copy of everything the store derives from the engine."""

    model_config = ConfigDict(frozen=True)

    repository_info: RepositoryInfo | None = None
    is_loading: bool = False

    commits: tuple[GraphCommit, ...] = ()
    commits_loading: bool = False
    has_more_commits: bool = True

    file_statuses: FileStatuses | None = None
    file_statuses_loading: bool = False

    current_diff: FileDiff | None = None
    current_diff_path: str | None = None
    current_diff_staged: bool = False
    diff_loading: bool = False

    selected_commit_details: CommitDetails | None = None
    commit_details_loading: bool = False
    expanded_commit_files: frozenset[str] = frozenset()
    commit_file_diffs: dict[str, FileDiff] = Field(default_factory=dict)

    branches: tuple[BranchInfo, ...] = ()
    tags: tuple[TagInfo, ...] = ()
    stashes: tuple[StashInfo, ...] = ()

    selected_stash_details: StashDetails | None = None
    stash_details_loading: bool = False
    expanded_stash_files: frozenset[str] = frozenset()
    stash_file_diffs: dict[str, FileDiff] = Field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return self.repository_info is not None
