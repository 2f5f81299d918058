"""Models exchanged with the notification and confirmation surfaces."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    """A toast message."""

    model_config = ConfigDict(frozen=True)

    id: int
    message: str
    kind: Literal["error", "success"]


class ConfirmRequest(BaseModel):
    """Parameters of a confirmation prompt."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    confirm_label: str = "OK"
    cancel_label: str = "Cancel"
