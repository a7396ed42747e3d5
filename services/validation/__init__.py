# -*- coding: utf-8 -*-
"""Validation services package."""

from .validation_strategy import (
    ChoiceRule,
    ConditionalRequiredRule,
    CrossFieldThresholdRule,
    DateOrderRule,
    FormatRule,
    RangeRule,
    RequiredRule,
    ValidationStrategy,
    WhenRule,
)
from .validation_factory import ValidationFactory

__all__ = [
    'ValidationStrategy',
    'RequiredRule',
    'FormatRule',
    'RangeRule',
    'ChoiceRule',
    'DateOrderRule',
    'WhenRule',
    'ConditionalRequiredRule',
    'CrossFieldThresholdRule',
    'ValidationFactory',
]
