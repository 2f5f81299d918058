"""Pydantic models for aiorepostate."""

from .commits import (
    CommitDetails,
    CommitFileChange,
    CommitInfo,
    GraphCommit,
    GraphLine,
    RefInfo,
)
from .diff import DiffHunk, DiffLine, FileDiff, HunkAddress
from .notifications import ConfirmRequest, Notification
from .refs import BranchInfo, StashDetails, StashInfo, TagInfo
from .repository import RepositoryInfo
from .snapshot import RepositorySnapshot
from .status import FileStatus, FileStatuses, FileStatusType

__all__ = [
    "BranchInfo",
    "CommitDetails",
    "CommitFileChange",
    "CommitInfo",
    "ConfirmRequest",
    "DiffHunk",
    "DiffLine",
    "FileDiff",
    "FileStatus",
    "FileStatusType",
    "FileStatuses",
    "GraphCommit",
    "GraphLine",
    "HunkAddress",
    "Notification",
    "RefInfo",
    "RepositoryInfo",
    "RepositorySnapshot",
    "StashDetails",
    "StashInfo",
    "TagInfo",
]
