# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from services.exceptions import (
    InvalidCategoryException,
    InvalidFieldPathException,
    ValidationException,
    WizardStateException,
)
from utils.logger import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-friendly message.

    Technical details (paths, statuses, nested errors) are logged only.
    """
    if context and getattr(error, "context", None) is None and hasattr(error, "context"):
        error.context = context

    if isinstance(error, InvalidCategoryException):
        logger.warning(f"Invalid category {error.category!r} ({error.context})")
        return "This insurance product is not available."

    if isinstance(error, InvalidFieldPathException):
        logger.warning(f"Rejected field path {error.path!r}: {error.message} ({error.context})")
        return "This field cannot be changed for the selected product."

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"Validation error on {error.field}: {error.errors}")
        else:
            logger.warning(f"Validation error on {error.field}: {error.message}")
        return error.message

    if isinstance(error, WizardStateException):
        logger.warning(f"Wizard state error (status={error.status}): {error.message}")
        return "This application has already been submitted."

    # Log unexpected errors
    logger.warning(f"Unexpected error: {error}")
    return GENERIC_ERROR
