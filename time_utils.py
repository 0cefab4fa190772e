# time_utils.py
# Helpers for the 24-hour HHMM clock strings used throughout the catalog.

import re
from typing import Optional

TBA = "TBA"
HHMM_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3])[0-5][0-9]$")


def is_valid_hhmm(value: str) -> bool:
    return bool(HHMM_PATTERN.match(value or ""))


def hhmm_to_minutes(value: str) -> int:
    # "0930" -> 570. Raises ValueError on anything that is not a clock time.
    if not is_valid_hhmm(value):
        raise ValueError(f"Invalid HHMM time: {value!r}")
    return int(value[:2]) * 60 + int(value[2:])


def minutes_to_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}{minutes % 60:02d}"


def format_time(value: str) -> str:
    # Display form, "1430" -> "14:30". Anything else is returned untouched.
    if len(value) != 4:
        return value
    return f"{value[:2]}:{value[2:]}"


def times_overlap(begin_a: int, end_a: int, begin_b: int, end_b: int) -> bool:
    # Half-open ranges: touching endpoints do not overlap.
    return begin_a < end_b and begin_b < end_a


def gap_minutes(end_first: int, begin_next: int) -> int:
    return begin_next - end_first


def convert_date_format(date_str: Optional[str]) -> str:
    # DD/MM/YYYY -> YYYY-MM-DD; other shapes pass through.
    if not date_str:
        return ""
    parts = date_str.split("/")
    if len(parts) != 3:
        return date_str
    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
