"""Notification and confirmation surfaces."""

from .center import NotificationCenter
from .dialog import ConfirmDialog
from .protocols import Confirmer, Notifier

__all__ = [
    "ConfirmDialog",
    "Confirmer",
    "NotificationCenter",
    "Notifier",
]
