# -*- coding: utf-8 -*-
"""
Intake Wizard Utility Module
"""

from .logger import get_logger, setup_logger
from .datetime_utils import parse_date, utc_now_iso

__all__ = [
    "get_logger",
    "setup_logger",
    "parse_date",
    "utc_now_iso",
]
