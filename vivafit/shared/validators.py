"""Shared validation utilities"""

import re
from typing import Optional

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def validate_time_of_day(value: str) -> str:
    """
    Validate a time of day and normalize it to zero-padded 24h HH:MM.

    Zero padding keeps string ordering identical to chronological ordering.

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if not isinstance(value, str):
        raise ValueError("Time must be a string in HH:MM format")

    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Time must be in HH:MM format")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be between 00:00 and 23:59")

    return f"{hours:02d}:{minutes:02d}"


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Strip free text and collapse blank values to None"""
    if value is None:
        return None
    value = value.strip()
    return value or None
