"""Working-tree status models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FileStatusType(StrEnum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNTRACKED = "untracked"
    CONFLICTED = "conflicted"


class FileStatus(BaseModel):
    """Status of a single working-tree path."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatusType
    is_staged: bool = False


class FileStatuses(BaseModel):
    """Working-tree status split into three disjoint groups."""

    model_config = ConfigDict(frozen=True)

    staged: list[FileStatus] = Field(default_factory=list)
    unstaged: list[FileStatus] = Field(default_factory=list)
    untracked: list[FileStatus] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked)

    @property
    def total(self) -> int:
        return len(self.staged) + len(self.unstaged) + len(self.untracked)

    def paths(self, group: str) -> list[str]:
        """Return the paths of *group* (``staged``, ``unstaged`` or ``untracked``)."""
        return [entry.path for entry in getattr(self, group)]
