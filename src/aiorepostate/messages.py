"""Turn engine failures into short messages for the notification surface."""

from __future__ import annotations

import re

from .exceptions import EngineError, OpenFailureReason, RepoStateError

_ENVELOPE_PREFIX = "Git error: "
_ENVELOPE_SUFFIX = re.compile(r";\s*class=.*$", re.IGNORECASE | re.DOTALL)
_MISSING_REPO = re.compile(r"could not find repository (?:from|at) '([^']+)'", re.IGNORECASE)
_INVALID_PATH = re.compile(r"^Invalid path: (.+)$")


def clean_error_message(raw: str) -> str:
    """Strip backend envelope noise from *raw*.

    Removes the ``Git error: `` prefix and the ``; class=...; code=...``
    suffix, and rewrites "could not find repository at '<path>'" into a
    message that leads with the path.
    """
    msg = raw
    if msg.startswith(_ENVELOPE_PREFIX):
        msg = msg[len(_ENVELOPE_PREFIX) :]

    msg = _ENVELOPE_SUFFIX.sub("", msg)

    match = _MISSING_REPO.search(msg)
    if match:
        return f"No git repository found at\n{match.group(1)}"

    return msg.strip()


def classify_open_failure(raw: str) -> OpenFailureReason:
    """Best-effort classification of an open failure from its message."""
    lowered = raw.lower()
    if "permission denied" in lowered or "access denied" in lowered:
        return OpenFailureReason.PERMISSION_DENIED
    if _MISSING_REPO.search(raw) or "not a git repository" in lowered:
        return OpenFailureReason.NOT_A_REPOSITORY
    if _INVALID_PATH.match(raw) or "no such file" in lowered or "not found" in lowered:
        return OpenFailureReason.NOT_FOUND
    return OpenFailureReason.UNKNOWN


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for *exc*."""
    if isinstance(exc, EngineError):
        return clean_error_message(exc.message)
    if isinstance(exc, RepoStateError):
        return str(exc)
    return clean_error_message(str(exc))
