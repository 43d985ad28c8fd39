"""Lenient parsing of grant date strings."""

from __future__ import annotations

import re
from datetime import date, datetime

_LONG_FORMATS = (
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %Y",
    "%Y/%m/%d",
)

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR_ONLY = re.compile(r"^(\d{4})$")


def parse_year(text: str | None) -> int | None:
    """Return the calendar year of a date string, or None if it cannot be read.

    Accepts ISO dates and datetimes, ``YYYY-MM``, bare ``YYYY`` and a few
    long forms such as ``2 April 1657``. Never raises.
    """
    if text is None:
        return None
    value = text.strip()
    if not value:
        return None

    try:
        return date.fromisoformat(value).year
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).year
    except ValueError:
        pass

    match = _YEAR_MONTH.match(value)
    if match and 1 <= int(match.group(2)) <= 12:
        return int(match.group(1))
    match = _YEAR_ONLY.match(value)
    if match:
        return int(match.group(1))

    for fmt in _LONG_FORMATS:
        try:
            return datetime.strptime(value, fmt).year
        except ValueError:
            continue
    return None
