"""Date/time parsing and formatting for Taskbot.

One parser serves both user input and the data file, so anything written by
``to_storage_string`` must be accepted by ``parse_datetime``.
"""

import re
from datetime import datetime
from typing import Optional

import parsedatetime

from ..exceptions import DateTimeParseError


INPUT_FORMAT = "%Y-%m-%d %H%M"
INPUT_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2} \d{4}$")

# Fallback numeric formats, tried after the ISO form
FALLBACK_FORMATS = [
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"), "%Y-%m-%d"),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4} \d{4}$"), "%d/%m/%Y %H%M"),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%d/%m/%Y"),
]

_calendar: Optional[parsedatetime.Calendar] = None


def _get_calendar() -> parsedatetime.Calendar:
    global _calendar
    if _calendar is None:
        _calendar = parsedatetime.Calendar()
    return _calendar


def now() -> datetime:
    """Return the current local time without timezone information."""
    return datetime.now()


def _strptime(text: str, original: str, fmt: str) -> datetime:
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        raise DateTimeParseError(original) from None


def parse_datetime(text: str, source_time: Optional[datetime] = None) -> datetime:
    """Parse a date/time string into a naive datetime.

    Accepted forms, in order of precedence:
        ``2024-01-01 1800``   the documented input form
        ``2024-01-01T18:00``  ISO 8601, as written to the data file
        ``2024-01-01``        a date at midnight
        ``01/01/2024 1800``   day/month/year with time
        ``01/01/2024``        day/month/year
        anything parsedatetime understands (``tomorrow 6pm``, ``next friday``)

    ISO strings with a UTC offset are rejected. parsedatetime accepts
    partial matches, so ``qwerty 5pm`` still yields 5pm on the source day.

    Args:
        text: The string to parse.
        source_time: Reference point for relative phrases (defaults to now).

    Returns:
        The parsed datetime.

    Raises:
        DateTimeParseError: If the text is blank or matches none of the forms.
    """
    if text is None or not text.strip():
        raise DateTimeParseError(text or "")

    cleaned = " ".join(text.split())

    if INPUT_PATTERN.match(cleaned):
        return _strptime(cleaned, text, INPUT_FORMAT)

    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        pass
    else:
        # Only naive local times are stored
        if parsed.tzinfo is not None:
            raise DateTimeParseError(text)
        return parsed

    for pattern, fmt in FALLBACK_FORMATS:
        if pattern.match(cleaned):
            return _strptime(cleaned, text, fmt)

    time_struct, parse_status = _get_calendar().parse(cleaned, sourceTime=source_time or now())
    if parse_status > 0:
        return datetime(*time_struct[:6])

    raise DateTimeParseError(text)


def to_storage_string(dt: datetime) -> str:
    """Canonical text form used in the data file."""
    return dt.isoformat()


def format_datetime(dt: datetime) -> str:
    """Human readable form, e.g. ``Jan 01 2024, 6:00 PM``."""
    return f"{dt.strftime('%b %d %Y')}, {dt.hour % 12 or 12}:{dt.strftime('%M %p')}"
