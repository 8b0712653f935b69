"""Date normalization for ledger sorting and range filters."""

from __future__ import annotations

from datetime import UTC, date, datetime, time
import re
from typing import Any

# Leading day/month/year numbers, then an optional HH:MM[:SS]; anything after
# that is ignored.
_PARTS = re.compile(
    r"(\d+)[/-](\d+)[/-](\d+)"
    r"(?:(?:\s+|T)(\d{1,2}):(\d{2})(?::(\d{2}))?)?"
)


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _from_parts(text: str) -> datetime | None:
    match = _PARTS.match(text)
    if match is None:
        return None
    numbers = [int(part) for part in match.group(1, 2, 3)]
    hour, minute, second = (int(part or 0) for part in match.group(4, 5, 6))

    if numbers[0] > 31:
        year, month, day = numbers
    elif numbers[2] > 31:
        day, month, year = numbers
    else:
        year, month, day = numbers

    try:
        return datetime(year, month or 1, day or 1, hour, minute, second)
    except (ValueError, OverflowError):
        return None


def normalize_record_date(value: Any) -> datetime | None:
    """Turn a record date into a naive datetime, or None if unusable.

    Strings are tried as ISO first (``"2024-01-10 08:30"`` is accepted), then
    as three numeric parts split on ``/`` or ``-``, optionally followed by a
    ``HH:MM[:SS]`` time. A first part above 31 reads as ``yyyy/mm/dd``, a
    third part above 31 as ``dd/mm/yyyy``.

    Args:
        value: datetime, date or string from an upstream record

    Returns:
        Naive datetime (aware values are converted to UTC) or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return _naive(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    return _from_parts(text)


def parse_filter_date(value: Any, *, end_of_day: bool = False) -> datetime | None:
    """Normalize a filter boundary.

    Plain dates and date-only strings are widened to the start of the day,
    or to its last microsecond when ``end_of_day`` is set, so both bounds of
    a range stay inclusive.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive(value)

    day: date | None = None
    if isinstance(value, date):
        day = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if "T" in text or ":" in text:
            return normalize_record_date(text)
        parsed = normalize_record_date(text)
        day = parsed.date() if parsed else None

    if day is None:
        return None
    return datetime.combine(day, time.max if end_of_day else time.min)


def is_absent(value: Any) -> bool:
    """True when a record carries no date at all (as opposed to a bad one)."""
    return value is None or (isinstance(value, str) and not value.strip())
