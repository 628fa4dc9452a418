"""Duration parsing utilities."""

import re

_DURATION_RE = re.compile(r"^(?:(?P<hours>\d+(?:\.\d+)?)\s*h)?\s*(?:(?P<minutes>\d+)\s*m(?:in)?)?$")


def parse_duration(duration_str: str) -> int:
    """Parse a duration string into whole minutes.

    Handles various formats:
    - "45" (plain minutes)
    - "45m", "45min"
    - "1h", "1.5h"
    - "1h30m", "1h 30m"
    - "1:30" (hours:minutes)

    Raises:
        ValueError: If duration string cannot be parsed or is not positive
    """
    if not duration_str or not duration_str.strip():
        raise ValueError("Empty duration string")

    value = duration_str.strip().lower()

    if value.isdigit():
        minutes = int(value)
    elif ":" in value:
        hours_part, _, minutes_part = value.partition(":")
        if not (hours_part.isdigit() and minutes_part.isdigit()) or int(minutes_part) >= 60:
            raise ValueError(f"Could not parse duration '{duration_str}'")
        minutes = int(hours_part) * 60 + int(minutes_part)
    else:
        match = _DURATION_RE.match(value)
        if match is None or not (match.group("hours") or match.group("minutes")):
            raise ValueError(f"Could not parse duration '{duration_str}'")
        hours = float(match.group("hours") or 0)
        minutes = round(hours * 60) + int(match.group("minutes") or 0)

    if minutes <= 0:
        raise ValueError(f"Duration must be positive, got '{duration_str}'")
    return minutes
