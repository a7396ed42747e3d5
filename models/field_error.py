# -*- coding: utf-8 -*-
"""
Field-level validation errors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ErrorKind(Enum):
    """Why a field failed validation."""

    MISSING_REQUIRED = "missing_required"
    FORMAT_INVALID = "format_invalid"
    RANGE_INVALID = "range_invalid"
    CONDITIONAL_REQUIRED = "conditional_required"
    CROSS_FIELD_THRESHOLD = "cross_field_threshold"


_MISSING_KINDS = frozenset({
    ErrorKind.MISSING_REQUIRED,
    ErrorKind.CONDITIONAL_REQUIRED,
    ErrorKind.CROSS_FIELD_THRESHOLD,
})


@dataclass(frozen=True)
class FieldError:
    """A message for one failing field, tagged with its error kind."""

    kind: ErrorKind
    message: str

    def __str__(self):
        return self.message

    @property
    def is_missing(self) -> bool:
        """True when the field has no value and one is required."""
        return self.kind in _MISSING_KINDS

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict) -> "FieldError":
        return cls(kind=ErrorKind(data["kind"]), message=data["message"])


# Dotted field path -> error
ErrorMap = Dict[str, FieldError]
