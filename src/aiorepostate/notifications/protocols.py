"""Interfaces the store uses to reach the user."""

from __future__ import annotations

from typing import Protocol

from ..models import ConfirmRequest


class Notifier(Protocol):
    """Toast surface: errors and successes that expire on their own."""

    def show_error(self, message: str) -> int: ...

    def show_success(self, message: str) -> int: ...

    def dismiss(self, notification_id: int) -> None: ...


class Confirmer(Protocol):
    """Gate for destructive operations."""

    async def show_confirm(self, request: ConfirmRequest) -> bool: ...
