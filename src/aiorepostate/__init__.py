"""aiorepostate — Async state synchronization core for a graphical git client."""

from ._version import __version__
from .config import StoreSettings, load_settings
from .engine import EngineClient, EngineTransport
from .exceptions import (
    ConfigError,
    EngineError,
    InvalidRequestError,
    OpenFailureReason,
    OpenRepositoryError,
    OperationError,
    RepoStateError,
    StaleHunkError,
)
from .messages import clean_error_message, describe_error
from .models import (
    BranchInfo,
    CommitDetails,
    CommitFileChange,
    ConfirmRequest,
    DiffHunk,
    DiffLine,
    FileDiff,
    FileStatus,
    FileStatuses,
    FileStatusType,
    GraphCommit,
    HunkAddress,
    Notification,
    RepositoryInfo,
    RepositorySnapshot,
    StashDetails,
    StashInfo,
    TagInfo,
)
from .notifications import ConfirmDialog, Confirmer, NotificationCenter, Notifier
from .store import CommitHistoryPager, RepositoryStore, SelectionState

__all__ = [
    "BranchInfo",
    "CommitDetails",
    "CommitFileChange",
    "CommitHistoryPager",
    "ConfigError",
    "ConfirmDialog",
    "ConfirmRequest",
    "Confirmer",
    "DiffHunk",
    "DiffLine",
    "EngineClient",
    "EngineError",
    "EngineTransport",
    "FileDiff",
    "FileStatus",
    "FileStatusType",
    "FileStatuses",
    "GraphCommit",
    "HunkAddress",
    "InvalidRequestError",
    "Notification",
    "NotificationCenter",
    "Notifier",
    "OpenFailureReason",
    "OpenRepositoryError",
    "OperationError",
    "RepoStateError",
    "RepositoryInfo",
    "RepositorySnapshot",
    "RepositoryStore",
    "SelectionState",
    "StaleHunkError",
    "StashDetails",
    "StashInfo",
    "StoreSettings",
    "TagInfo",
    "__version__",
    "clean_error_message",
    "describe_error",
    "load_settings",
]
