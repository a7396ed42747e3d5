# -*- coding: utf-8 -*-
"""
Intake Wizard Data Models
"""

from .category import Category
from .step import Step
from .field_path import FieldPath
from .field_error import ErrorKind, ErrorMap, FieldError
from .wizard_session import WizardSession

__all__ = [
    "Category",
    "Step",
    "FieldPath",
    "ErrorKind",
    "ErrorMap",
    "FieldError",
    "WizardSession",
]
