"""Parsing of time spent entered as "Xh Ym"."""

import re

from clickup_tasks.errors import InvalidTimeFormatError

MILLIS_PER_HOUR = 3_600_000
MILLIS_PER_MINUTE = 60_000

_NUMBER = re.compile(r"[0-9]+")


def _parse_number(segment: str, text: str) -> int:
    segment = segment.strip()
    if not _NUMBER.fullmatch(segment):
        raise InvalidTimeFormatError(text)
    return int(segment)


def parse_time_spent(text: str) -> int:
    """Convert time spent (e.g. "3h 15m") to milliseconds.

    The minute part is optional ("2h" is two hours). Values are not bounded.

    Args:
        text: Time spent in the format "Xh Ym".

    Returns:
        Duration in milliseconds.

    Raises:
        InvalidTimeFormatError: If the text does not match "Xh Ym".
    """
    parts = text.split("h")
    hours = _parse_number(parts[0], text)
    if len(parts) != 2:
        # no "h" separator, or more than one
        raise InvalidTimeFormatError(text)

    minutes = 0
    minute_part = parts[1].replace("m", "").strip()
    if minute_part:
        minutes = _parse_number(minute_part, text)

    return hours * MILLIS_PER_HOUR + minutes * MILLIS_PER_MINUTE
