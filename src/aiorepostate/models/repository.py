"""Repository handle model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RepositoryInfo(BaseModel):
    """The currently opened repository, as reported by the engine."""

    model_config = ConfigDict(frozen=True)

    path: str
    current_branch: str | None = None
    is_detached: bool = False
    remotes: list[str] = Field(default_factory=list)
    head_hash: str | None = None
