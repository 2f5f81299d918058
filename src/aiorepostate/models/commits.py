"""History models: graph commits and commit details."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class GraphLine(BaseModel):
    """Line segment connecting a commit's lane to a parent lane."""

    model_config = ConfigDict(frozen=True)

    from_column: int
    to_column: int
    is_merge: bool = False
    line_type: Literal["to_parent", "from_above", "pass_through"]


class RefInfo(BaseModel):
    """A branch or tag pointing at a commit."""

    model_config = ConfigDict(frozen=True)

    name: str
    ref_type: Literal["branch", "remotebranch", "tag"]
    is_head: bool = False


class CommitInfo(BaseModel):
    """A single commit in the history."""

    model_config = ConfigDict(frozen=True)

    hash: str
    short_hash: str
    message: str
    author_name: str
    author_email: str
    timestamp: int
    parent_hashes: list[str] = Field(default_factory=list)

    @property
    def summary(self) -> str:
        return self.message.split("\n", 1)[0]


class GraphCommit(CommitInfo):
    """A commit plus the lane geometry pre-computed by the engine."""

    column: int = 0
    lines: list[GraphLine] = Field(default_factory=list)
    refs: list[RefInfo] = Field(default_factory=list)
    is_tip: bool = False


class CommitFileChange(BaseModel):
    """A file touched by a commit or stash."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: Literal["added", "modified", "deleted", "renamed", "copied"]
    old_path: str | None = None


class CommitDetails(BaseModel):
    """Full metadata and changed files of one commit."""

    model_config = ConfigDict(frozen=True)

    hash: str
    message: str
    author_name: str
    author_email: str
    committer_name: str
    committer_email: str
    timestamp: int
    parent_hashes: list[str] = Field(default_factory=list)
    files_changed: list[CommitFileChange] = Field(default_factory=list)
