"""Time helpers.

All instants are handled as timezone-aware UTC. SQLite hands DateTime values
back without tzinfo, so a naive value is always read as UTC wall-clock time,
never as local time.
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Accepts datetime objects and ISO-8601 strings, including the
    "YYYY-MM-DD HH:MM:SS" form SQLite produces. Returns None when the value
    is empty or unparseable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def isoformat_utc(value) -> Optional[str]:
    """Render a stored timestamp as ISO-8601 with an explicit UTC offset."""
    parsed = parse_timestamp(value)
    return parsed.isoformat() if parsed else None


def seconds_since(value: datetime, now: Optional[datetime] = None) -> float:
    """Elapsed seconds between value and now (both compared in UTC)."""
    current = to_utc(now) if now is not None else utc_now()
    return (current - to_utc(value)).total_seconds()
