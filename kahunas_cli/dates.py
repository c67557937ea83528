"""Date and timezone helpers for the CLI."""

import os
from datetime import datetime, timezone
from typing import Optional

from tzlocal import get_localzone_name

DEFAULT_TIMEZONE = "Europe/London"


def parse_iso(value: str) -> Optional[datetime]:
    """Parse an ISO timestamp (or "YYYY-MM-DD HH:MM:SS"), None when invalid."""
    try:
        text = value.strip().replace(" ", "T")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
    except (AttributeError, ValueError, OverflowError, OSError):
        return None
    return parsed


def format_relative(then: datetime, now: Optional[datetime] = None) -> str:
    """Human distance such as "3 days ago" or "in 2 hours"."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - then).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)

    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            label = f"{count} {unit}{'s' if count != 1 else ''}"
            return f"in {label}" if future else f"{label} ago"
    return "just now"


def format_human_timestamp(value: str, now: Optional[datetime] = None) -> str:
    """Format as "YYYY-MM-DD HH:MM:SS (3 days ago)", or return the input if unparseable."""
    parsed = parse_iso(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%Y-%m-%d %H:%M:%S')} ({format_relative(parsed, now)})"


def is_iso_after_now(value: str, now: Optional[datetime] = None) -> bool:
    parsed = parse_iso(value)
    return parsed is not None and parsed > (now or datetime.now(timezone.utc))


def resolve_timezone(time_zone: Optional[str] = None) -> str:
    """Return the timezone name used for calendar requests."""
    if time_zone:
        return time_zone
    env_zone = os.getenv("KAHUNAS_TIMEZONE") or os.getenv("TZ")
    if env_zone:
        return env_zone
    return get_localzone_name() or DEFAULT_TIMEZONE
