"""Branch, tag and stash models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .commits import CommitFileChange


class BranchInfo(BaseModel):
    """A local or remote branch."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_remote: bool = False
    is_head: bool = False
    target_hash: str


class TagInfo(BaseModel):
    """A lightweight or annotated tag."""

    model_config = ConfigDict(frozen=True)

    name: str
    target_hash: str
    is_annotated: bool = False
    message: str | None = None


class StashInfo(BaseModel):
    """A stash entry."""

    model_config = ConfigDict(frozen=True)

    index: int
    message: str
    commit_hash: str
    timestamp: int
    branch_name: str


class StashDetails(StashInfo):
    """A stash entry plus the files it changes."""

    files_changed: list[CommitFileChange] = Field(default_factory=list)
