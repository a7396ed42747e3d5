# -*- coding: utf-8 -*-
"""
Base Controller
===============
Base class for the intake controllers.

Provides common signals, error state and logging.
"""

from PyQt5.QtCore import QObject, pyqtSignal

from services.error_mapper import map_exception
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseController(QObject):
    """
    Base controller class.

    Provides:
    - Common signal patterns
    - Last-error tracking
    - Logging
    """

    # Common signals
    operation_error = pyqtSignal(str, str)  # operation name, user message
    data_changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._last_error = ""

    @property
    def last_error(self) -> str:
        """Get last error message."""
        return self._last_error

    def _set_error(self, error: str):
        """Set error message."""
        self._last_error = error
        if error:
            logger.error(f"{self.__class__.__name__}: {error}")

    def _log_operation(self, operation: str, **kwargs):
        """Log an operation."""
        logger.info(f"{self.__class__.__name__}.{operation}: {kwargs}")

    def _emit_error(self, operation: str, error: Exception) -> str:
        """Map an exception to a user message, record it and emit operation_error."""
        message = map_exception(error, context=f"{self.__class__.__name__}.{operation}")
        self._set_error(message)
        self.operation_error.emit(operation, message)
        return message
