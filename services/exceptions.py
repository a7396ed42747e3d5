# -*- coding: utf-8 -*-
"""Custom exceptions for the intake wizard."""


class InvalidCategoryException(Exception):
    """Exception raised when an unknown product category is requested."""

    def __init__(self, category, context: str = None):
        message = f"Unknown insurance category: {category!r}"
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context


class InvalidFieldPathException(Exception):
    """Exception raised for malformed or unknown field paths."""

    def __init__(self, message: str, path: str = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.context = context

    def __str__(self):
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class ValidationException(Exception):
    """Exception raised when a value cannot be stored in the form state."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors or []
        self.context = context


class WizardStateException(Exception):
    """Exception raised for operations the session's state does not allow."""

    def __init__(self, message: str, status: str = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.context = context
