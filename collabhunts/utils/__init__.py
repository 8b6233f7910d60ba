"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    ensure_utc,
    get_app_timezone,
    hours_between,
    now_in_app_timezone,
)

__all__ = [
    "ensure_app_timezone",
    "ensure_utc",
    "get_app_timezone",
    "hours_between",
    "now_in_app_timezone",
]
