"""Duration parsing and formatting helpers."""

import re
from datetime import timedelta

_DURATION_PATTERN = re.compile(r'^(\d{1,2}):([0-5]\d)$')


def parse_duration(value: str) -> timedelta:
    """Parse a ``MM:SS`` string into a timedelta.

    Args:
        value: Duration string such as ``"03:45"``

    Returns:
        Parsed duration

    Raises:
        ValueError: If the string is not in ``MM:SS`` form
    """
    match = _DURATION_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid duration '{value}', expected MM:SS")

    minutes, seconds = int(match.group(1)), int(match.group(2))
    return timedelta(minutes=minutes, seconds=seconds)


def format_duration(duration: timedelta) -> str:
    """Format a timedelta as zero-padded ``MM:SS``.

    Durations are assumed to stay below 100 minutes.
    """
    total_seconds = int(duration.total_seconds())
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
