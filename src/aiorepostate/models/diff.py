"""Diff models and the hunk/line addressing unit used for partial staging."""

from __future__ import annotations

import hashlib
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DiffLine(BaseModel):
    """One line of a hunk."""

    model_config = ConfigDict(frozen=True)

    content: str
    line_type: Literal["context", "addition", "deletion", "header"]
    old_lineno: int | None = None
    new_lineno: int | None = None

    @property
    def is_change(self) -> bool:
        return self.line_type in ("addition", "deletion")


class DiffHunk(BaseModel):
    """A contiguous block of changed lines.

    Line indices are positions in ``lines`` and are the addressing unit for
    partial staging and discarding.
    """

    model_config = ConfigDict(frozen=True)

    header: str = ""
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: list[DiffLine] = Field(default_factory=list)

    @property
    def fingerprint(self) -> str:
        """Content hash of the hunk, stable for identical header and lines."""
        digest = hashlib.sha1(self.header.encode("utf-8"))
        for line in self.lines:
            digest.update(b"\0")
            digest.update(line.line_type.encode("ascii"))
            digest.update(b"\0")
            digest.update(line.content.encode("utf-8"))
        return digest.hexdigest()

    def changed_line_indices(self) -> list[int]:
        return [i for i, line in enumerate(self.lines) if line.is_change]


class FileDiff(BaseModel):
    """Diff of a single file."""

    model_config = ConfigDict(frozen=True)

    path: str
    hunks: list[DiffHunk] = Field(default_factory=list)
    is_binary: bool = False

    def hunk(self, index: int) -> DiffHunk | None:
        if 0 <= index < len(self.hunks):
            return self.hunks[index]
        return None


class HunkAddress(BaseModel):
    """Address of a sub-file change: a hunk, or selected lines within it.

    ``line_indices`` of ``None`` means the whole hunk.  Indices are positional
    within the most recently fetched diff of ``path``; ``fingerprint``
    optionally pins the hunk content the caller saw.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    hunk_index: int
    line_indices: list[int] | None = None
    fingerprint: str | None = None
