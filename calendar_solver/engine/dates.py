from __future__ import annotations

import datetime as dt
import re
from typing import Tuple


DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class InvalidDateError(ValueError):
    """Raised when a date string can't be turned into a calendar date."""


def parse_date(text: str) -> dt.date:
    """Parse a ``YYYY-MM-DD`` date.

    Args:
        text (str): Date such as ``"2020-03-13"``. Month and day must be
            zero-padded and no surrounding whitespace is allowed.

    Returns:
        date: The parsed date. Leap years and month lengths are checked, so
            ``"2023-02-29"`` is rejected.

    Raises:
        InvalidDateError: If ``text`` is empty, malformed, or not a real
            date in the proleptic Gregorian calendar.
    """
    if not text or not isinstance(text, str):
        raise InvalidDateError("date must be a non-empty string")
    if not _DATE_RE.fullmatch(text):
        raise InvalidDateError(f"cannot parse {text!r} as a date: expected YYYY-MM-DD")
    try:
        return dt.datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(f"cannot parse {text!r} as a date: {e}") from e


def date_indices(day: dt.date) -> Tuple[int, int]:
    """Zero-based ``(month, day)`` for a calendar date."""
    return day.month - 1, day.day - 1


def today() -> dt.date:
    return dt.date.today()
