"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from collabhunts.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_SECONDS_PER_HOUR: Final[float] = 3600.0
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` model). If the provided value cannot be resolved, UTC is
    used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone.

    Naive values are the way SQLite hands back ``timestamptz`` columns; they are
    interpreted as UTC, which is how the database stores them.
    """

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc).astimezone(tz)
    return value.astimezone(tz)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime ready to be stored.

    SQLite drops ``tzinfo`` on write, so everything persisted is kept in UTC.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.astimezone(timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    """Return the fractional number of hours from ``start`` to ``end``.

    The result is negative when ``end`` is earlier than ``start``.
    """

    start_aware = ensure_app_timezone(start)
    end_aware = ensure_app_timezone(end)
    if start_aware is None or end_aware is None:  # pragma: no cover - defensive guard
        msg = "Both datetimes are required to compute elapsed hours"
        raise ValueError(msg)
    return (end_aware - start_aware).total_seconds() / _SECONDS_PER_HOUR


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
