"""
Wall-clock time arithmetic for work entries.

Times are plain "HH:MM" strings and dates plain "YYYY-MM-DD" strings; nothing
here knows about time zones.
"""

import datetime
import random
import re
import string
import time
from typing import Optional, Tuple

MINUTES_PER_DAY = 24 * 60

_BASE36 = string.digits + string.ascii_lowercase

_CLOCK_TIME = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def parse_time(value: Optional[str]) -> Optional[int]:
    """Return minutes since midnight for "HH:MM", or None if unparseable."""
    if not value or not isinstance(value, str) or ':' not in value:
        return None
    hours, _, minutes = value.partition(':')
    try:
        return int(hours) * 60 + int(minutes[:2])
    except ValueError:
        return None


def calc_duration(time_from: Optional[str], time_to: Optional[str]) -> float:
    """
    Elapsed hours between two wall-clock times.

    An end time at or before the start time means the shift crossed midnight,
    so "22:00" -> "06:00" is 8.0 and "08:00" -> "08:00" is 24.0.
    Missing or malformed input counts as zero hours.
    """
    start = parse_time(time_from)
    end = parse_time(time_to)
    if start is None or end is None:
        return 0.0
    if end <= start:
        end += MINUTES_PER_DAY
    return (end - start) / 60


def time_to_fraction(value: Optional[str]) -> float:
    """Convert "HH:MM" to a fraction of a day (spreadsheet time value)."""
    minutes = parse_time(value)
    if minutes is None:
        return 0.0
    return minutes / MINUTES_PER_DAY


def normalize_date(value: str) -> str:
    """Strip a time-of-day/offset suffix: "2024-03-01T00:00:00Z" -> "2024-03-01"."""
    if 'T' in value:
        return value.split('T')[0]
    return value


def normalize_time(value: str) -> str:
    """Keep only the clock part of a date-time: "1899-12-30T08:15:00.000Z" -> "08:15"."""
    if 'T' in value:
        return value.split('T')[1][:5]
    return value


def split_date(value: str) -> Optional[Tuple[int, int, int]]:
    """Return (year, month, day) for a "YYYY-MM-DD" string, or None."""
    parts = normalize_date(value or "").split('-')
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        return None
    return year, month, day


def is_clock_time(value: Optional[str]) -> bool:
    """True only for a complete 24-hour "HH:MM" value."""
    return isinstance(value, str) and _CLOCK_TIME.match(value) is not None


def is_calendar_date(value: Optional[str]) -> bool:
    """True for a "YYYY-MM-DD" value naming a real day."""
    parts = split_date(value or "")
    if parts is None:
        return False
    try:
        datetime.date(*parts)
    except ValueError:
        return False
    return True


def _to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def new_entry_id() -> str:
    """Millisecond timestamp plus a random tail, both base-36."""
    stamp = _to_base36(int(time.time() * 1000))
    tail = ''.join(random.choices(_BASE36, k=11))
    return stamp + tail
