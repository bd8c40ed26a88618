# Date arithmetic for the displayed view
# The zone is always passed explicitly; nothing reads or sets a process-wide timezone

import calendar
import logging
import re
from datetime import date, datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"\s*([+-]?)(\d+)\s*")

# CPython refuses str -> int conversion of very long digit strings in one step
_CHUNK_DIGITS = 4000


def parse_int(value: Any) -> Optional[int]:
    """
    Parse a request value as an integer.

    Returns None for anything that is not an integer literal, which callers
    treat the same as an absent parameter. Literals of any length parse
    exactly, so range checks see the real value.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _INT_RE.fullmatch(value)
    if match is None:
        return None
    sign, digits = match.groups()
    number = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start:start + _CHUNK_DIGITS]
        number = number * 10 ** len(chunk) + int(chunk)
    return -number if sign == "-" else number


def load_zone(name: Optional[str], fallback: str) -> ZoneInfo:
    """Resolve an IANA name, falling back when it is empty or unknown."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, using %s", name, fallback)
    return ZoneInfo(fallback)


def today_in(zone: ZoneInfo, now: datetime) -> date:
    """Calendar date of an aware instant as seen in the given zone."""
    return now.astimezone(zone).date()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_of_month_timestamp(year: int, month: int, zone: ZoneInfo) -> Optional[float]:
    """
    Unix timestamp of local midnight on the first of the month.

    None when the year cannot be represented at all.
    """
    try:
        return datetime(year, month, 1, tzinfo=zone).timestamp()
    except (ValueError, OverflowError):
        return None


def wrap_day(day: int, year: int, month: int) -> int:
    """Fold any integer day into 1..days_in_month, wrapping both ways."""
    return (day - 1) % days_in_month(year, month) + 1
