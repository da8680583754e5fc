"""
Time-of-day parsing for bets and final answers.
"""

import re
from datetime import time

from betting.errors import TimeParseError

# 24-hour clock, one or two hour digits, always two minute digits
TIME_PATTERN = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])", re.ASCII)


def parse_time(token: str) -> time:
    """Parse a single ``HH:MM`` token."""
    match = TIME_PATTERN.fullmatch(token)
    if match is None:
        raise TimeParseError(token)
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def parse_times(tokens: list[str]) -> list[time]:
    """
    Parse every token as a time of day.

    Args:
        tokens: Raw time tokens, e.g. ["10:00", "10:15"]

    Returns:
        Times in the same order as the tokens

    Raises:
        TimeParseError: On the first token that is not a valid time.
            Nothing is returned for the tokens before it.
    """
    return [parse_time(token) for token in tokens]


def format_time(value: time) -> str:
    return value.strftime("%H:%M")
