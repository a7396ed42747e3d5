# -*- coding: utf-8 -*-
"""
Intake Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "ValidationService",
    "ValidationFactory",
    "ErrorStateManager",
    "FormStateStore",
    "build_submission_record",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "ValidationService":
        from .validation_service import ValidationService
        return ValidationService
    elif name == "ValidationFactory":
        from .validation.validation_factory import ValidationFactory
        return ValidationFactory
    elif name == "ErrorStateManager":
        from .wizard.error_state import ErrorStateManager
        return ErrorStateManager
    elif name == "FormStateStore":
        from .wizard.form_state_store import FormStateStore
        return FormStateStore
    elif name == "build_submission_record":
        from .wizard.submission import build_submission_record
        return build_submission_record
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
