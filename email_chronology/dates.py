# ============================================================================
# email_chronology/dates.py - Tolerant date parsing and display
# ============================================================================

import logging
import re
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional

from dateutil import parser as dateutil_parser
from dateutil import tz

from .config import config

LEADING_WEEKDAY = re.compile(r'^[A-Za-z]+,\s*')

# Fields missing from a date string are taken from here, never from "today".
REFERENCE_DATE = datetime(1970, 1, 1)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """Look up a timezone by name, falling back to UTC for unknown names."""
    return tz.gettz(name or config.DEFAULT_TIMEZONE) or timezone.utc


class FlexibleDateParser:
    """Parses the human-readable dates mail clients write into quoted headers.

    Attempts, first success wins:
      1. the whole string
      2. the string without a leading "Weekday," token
      3. Outlook-style pass, which repeats 1 and 2

    Nothing is validated beyond what dateutil accepts: the weekday is never
    checked against the date and ambiguous numeric dates (01/02/2025) resolve
    month-first. Naive results are pinned to the default timezone.
    """

    def __init__(self, logger: logging.Logger, default_timezone: Optional[str] = None):
        self.logger = logger
        self.default_tz = resolve_timezone(default_timezone)

    def parse(self, text: Optional[str]) -> Optional[datetime]:
        if not text:
            return None

        parsed = self._parse_direct(text)
        if parsed is None:
            parsed = self._parse_direct(LEADING_WEEKDAY.sub('', text))
        if parsed is None:
            parsed = self._parse_outlook(text)

        if parsed is None:
            self.logger.debug(f"Unparseable date: {text[:60]!r}")
        return parsed

    def _parse_outlook(self, text: str) -> Optional[datetime]:
        # "Thursday, January 9, 2025 7:06 PM"
        parsed = self._parse_direct(text)
        if parsed is not None:
            return parsed
        return self._parse_direct(LEADING_WEEKDAY.sub('', text))

    def _parse_direct(self, text: str) -> Optional[datetime]:
        if not text or not text.strip():
            return None
        try:
            parsed = dateutil_parser.parse(text, default=REFERENCE_DATE)
            # dateutil accepts offsets such as +9999 that datetime cannot use
            parsed.utcoffset()
        except (ValueError, OverflowError, TypeError):
            return None
        return self._localize(parsed)

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self.default_tz)
        return value


def coerce_date(value: Any, date_parser: Optional[FlexibleDateParser] = None) -> Optional[datetime]:
    """Turn whatever a message file reports as its timestamp into an aware datetime.

    Accepts datetimes, strings and epoch milliseconds.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=resolve_timezone())
        return value

    if isinstance(value, str):
        parser = date_parser or FlexibleDateParser(logging.getLogger(__name__))
        return parser.parse(value)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    return None


def format_display_date(value: Optional[datetime]) -> str:
    """Format like "Mon, Jan 15, 2024 at 3:45 PM"."""
    if not isinstance(value, datetime):
        return "Unknown Date"

    hour = value.hour % 12 or 12
    return f"{value:%a, %b} {value.day}, {value.year} at {hour}:{value:%M} {value:%p}"
