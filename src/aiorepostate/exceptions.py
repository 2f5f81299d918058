"""Exception hierarchy for aiorepostate."""

from __future__ import annotations

from enum import StrEnum


class RepoStateError(Exception):
    """Base exception for all aiorepostate errors."""


class EngineError(RepoStateError):
    """An engine call failed."""

    def __init__(self, command: str, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.command = command
        self.message = message
        self.cause = cause


class OpenFailureReason(StrEnum):
    NOT_FOUND = "not_found"
    NOT_A_REPOSITORY = "not_a_repository"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


class OpenRepositoryError(EngineError):
    """The engine could not open the requested repository."""

    def __init__(
        self,
        message: str,
        reason: OpenFailureReason = OpenFailureReason.UNKNOWN,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__("open_repository", message, cause)
        self.reason = reason


class OperationError(EngineError):
    """An engine call failed after a repository was opened."""


class InvalidRequestError(RepoStateError):
    """A request was rejected before reaching the engine."""


class StaleHunkError(InvalidRequestError):
    """A hunk address no longer matches the displayed diff."""


class ConfigError(RepoStateError):
    """Failed to read or validate store settings."""
