"""Text formatting for rendered documents"""

from datetime import datetime
from typing import Optional

DASH = "—"


def format_date_long(value: Optional[datetime]) -> str:
    """March 6, 2025"""
    if value is None:
        return DASH
    return f"{value:%B} {value.day}, {value.year}"


def format_date_short(value: Optional[datetime]) -> str:
    """Mar 6, 2025"""
    if value is None:
        return DASH
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime_long(value: Optional[datetime]) -> str:
    """Mar 6, 2025 at 9:45 AM"""
    if value is None:
        return DASH
    hour = value.strftime("%I").lstrip("0") or "12"
    return f"{value:%b} {value.day}, {value.year} at {hour}:{value:%M %p}"


def format_record_stamp(value: Optional[datetime]) -> str:
    """03-06-25 0945"""
    if value is None:
        return DASH
    return value.strftime("%m-%d-%y %H%M")
