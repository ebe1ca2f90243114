"""
Timestamp helpers.

Timestamps are persisted as fixed‑width UTC ISO‑8601 strings with nine
fractional digits, e.g. ``2025-09-01T09:00:00.123456000Z``.  Because
every value has the same width, ``ORDER BY updated_at`` on the text
column matches chronological order.  Python datetimes carry
microseconds, so the last three digits are always zero when written
by this service.
"""

from datetime import datetime, timezone

_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as a sortable UTC string with nanosecond precision.

    Naive datetimes are assumed to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value.strftime(_SECONDS_FORMAT)}.{value.microsecond:06d}000Z"


def parse_timestamp(text: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime.

    Accepts any number of fractional digits (digits beyond microseconds
    are truncated) and an optional ``Z`` suffix.

    Raises
    ------
    ValueError
        If ``text`` is not a timestamp in the stored format.
    """
    raw = text.strip()
    if raw.endswith("Z"):
        raw = raw[:-1]
    seconds, _, fraction = raw.partition(".")
    parsed = datetime.strptime(seconds, _SECONDS_FORMAT)
    if fraction:
        if not fraction.isdigit():
            raise ValueError(f"Invalid fractional seconds in timestamp {text!r}")
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return parsed.replace(tzinfo=timezone.utc)
