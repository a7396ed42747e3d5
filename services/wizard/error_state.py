# -*- coding: utf-8 -*-
"""
Error State Manager - user-visible field errors across steps.

Errors from every step live in one map keyed by field path. Operations are
pure: each returns a new map and leaves its input untouched.
"""

from typing import Dict, List, Optional

from models.field_error import ErrorMap
from services.wizard import step_catalog as catalog


class ErrorStateManager:
    """Merge, scope and query the session's ErrorMap."""

    @staticmethod
    def merge(existing: ErrorMap, new: ErrorMap) -> ErrorMap:
        """
        Union of two error maps.

        Args:
            existing: Errors currently shown
            new: Freshly computed errors

        Returns:
            New map; entries of ``new`` overwrite those of ``existing``
        """
        merged = dict(existing)
        merged.update(new)
        return merged

    @staticmethod
    def clear_for_step(existing: ErrorMap, step_id: str) -> ErrorMap:
        """
        Drop the errors of fields owned by a step.

        Ownership is a prefix match on path segment boundaries, so clearing
        ``personal-info`` removes ``personalInfo.firstName`` but never
        ``personalInfoExtra.x``. Errors of other steps are kept.
        """
        return {
            path: error for path, error in existing.items()
            if not catalog.step_owns_path(step_id, path)
        }

    @staticmethod
    def field_error(errors: ErrorMap, path: str) -> Optional[str]:
        """Message for a field, or None when it has no error."""
        error = errors.get(path)
        return error.message if error is not None else None

    @staticmethod
    def has_error(errors: ErrorMap, path: str) -> bool:
        return path in errors

    @staticmethod
    def errors_for_step(errors: ErrorMap, step_id: str) -> ErrorMap:
        """Subset of errors owned by a step."""
        return {
            path: error for path, error in errors.items()
            if catalog.step_owns_path(step_id, path)
        }

    @staticmethod
    def to_messages(errors: ErrorMap) -> Dict[str, str]:
        """Plain path -> message mapping, as emitted to the UI."""
        return {path: error.message for path, error in errors.items()}

    @staticmethod
    def missing_fields(errors: ErrorMap) -> List[str]:
        """Paths whose error is an absent value rather than a bad one."""
        return [path for path, error in errors.items() if error.is_missing]


merge = ErrorStateManager.merge
clear_for_step = ErrorStateManager.clear_for_step
field_error = ErrorStateManager.field_error
has_error = ErrorStateManager.has_error
