"""Public helpers for emitting monitor notifications."""

from .batch import NotificationBatch
from . import messages

__all__ = ["NotificationBatch", "messages"]
