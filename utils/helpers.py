# -*- coding: utf-8 -*-
"""
Utility helper functions.
"""

import math
import re
from typing import Any, Optional, Union

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize_field_name(name: str) -> str:
    """
    Turn a camelCase field name into a sentence-case label.

    Examples:
        >>> humanize_field_name("numberOfClaims")
        'Number of claims'
        >>> humanize_field_name("idNumber")
        'ID number'
    """
    words = _CAMEL_BOUNDARY.sub(" ", name).split()
    if not words:
        return ""
    words = [w.lower() for w in words]
    words = ["ID" if w == "id" else "VAT" if w == "vat" else w for w in words]
    first = words[0]
    words[0] = first if first.isupper() else first.capitalize()
    return " ".join(words)


def is_blank(value: Any) -> bool:
    """
    True for values that count as "not filled in".

    None, whitespace-only strings and empty collections are blank. False and 0
    are answers, not blanks.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def to_number(value: Any) -> Optional[Union[int, float]]:
    """
    Convert a numeric field value to a number.

    Accepts ints, floats and numeric strings (spaces and thousands separators
    are ignored). Returns None for anything else, including booleans.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else value
    if isinstance(value, str):
        cleaned = re.sub(r"[\s,]", "", value)
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return int(number) if number.is_integer() and "." not in cleaned else number
    return None


def format_number(value: Union[int, float]) -> str:
    """Format a limit for messages, dropping a trailing .0"""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}".replace(",", " ")
