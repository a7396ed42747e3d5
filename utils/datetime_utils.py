# -*- coding: utf-8 -*-
"""
DateTime Utilities

Datetime handling shared by the validation rules and the submission record.
"""

from datetime import datetime, date, timezone
from typing import Optional, Union


def parse_date(value: Union[str, datetime, date, None]) -> Optional[date]:
    """
    Parse a date field value.

    Accepts date-only (YYYY-MM-DD) and full datetime ISO strings. Returns None
    for empty or unparseable input; callers decide whether that is an error.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            if 'T' in value:
                return datetime.fromisoformat(value).date()
            return date.fromisoformat(value)
        except ValueError:
            return None

    return None


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with offset."""
    return datetime.now(timezone.utc).isoformat()


def current_year() -> int:
    return datetime.now().year
