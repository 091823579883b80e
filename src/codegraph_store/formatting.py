"""Timestamp helpers: canonical instants, record ids and display strings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DEFAULT_DISPLAY_TIMEZONE = "Asia/Kolkata"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_instant(dt: datetime) -> str:
    """``2026-10-18T09:15:42.120Z`` — millisecond precision, UTC, ``Z`` suffix."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def parse_instant(text: object) -> Optional[datetime]:
    """Parse an ISO-8601 instant. Returns None for anything unparseable.

    Naive values are taken as UTC.
    """
    if not isinstance(text, str) or not text:
        return None
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        dt = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class TimestampFormatter:
    """Renders instants as ``18 Oct 2026, 2:45 pm`` in a fixed timezone.

    The shape matches a medium date with a short 12-hour time.
    """

    def __init__(self, tz: str = DEFAULT_DISPLAY_TIMEZONE) -> None:
        self._zone = ZoneInfo(tz)
        self.timezone = tz

    def format(self, dt: datetime) -> str:
        local = dt.astimezone(self._zone)
        hour = local.hour % 12 or 12
        meridiem = "am" if local.hour < 12 else "pm"
        return (
            f"{local.day} {_MONTHS[local.month - 1]} {local.year}, "
            f"{hour}:{local.minute:02d} {meridiem}"
        )
