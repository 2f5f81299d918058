"""In-process notification list with timed auto-dismissal."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Literal

from ..models import Notification

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Holds the live toasts for the rendering layer to display.

    Each notification is removed automatically after its kind's duration
    unless :meth:`dismiss` removes it first.  Must be used from a running
    event loop.
    """

    def __init__(self, *, error_seconds: float = 10.0, success_seconds: float = 3.0) -> None:
        self.error_seconds = error_seconds
        self.success_seconds = success_seconds
        self._notifications: list[Notification] = []
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._ids = itertools.count()

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    def _push(self, message: str, kind: Literal["error", "success"], seconds: float) -> int:
        notification = Notification(id=next(self._ids), message=message, kind=kind)
        self._notifications = [*self._notifications, notification]
        loop = asyncio.get_running_loop()
        self._timers[notification.id] = loop.call_later(seconds, self._expire, notification.id)
        return notification.id

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        self._remove(notification_id)

    def _remove(self, notification_id: int) -> None:
        self._notifications = [n for n in self._notifications if n.id != notification_id]

    def show_error(self, message: str) -> int:
        logger.debug("error notification: %s", message)
        return self._push(message, "error", self.error_seconds)

    def show_success(self, message: str) -> int:
        return self._push(message, "success", self.success_seconds)

    def dismiss(self, notification_id: int) -> None:
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        self._remove(notification_id)

    def clear(self) -> None:
        """Dismiss every live notification."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._notifications = []
