# -*- coding: utf-8 -*-
"""
Typed dotted field paths.

A FieldPath identifies one leaf value inside the nested form state, for
example ``personalInfo.email`` or
``needsAnalysis.currentSituation.claimsHistory.numberOfClaims``. The same
string keys the error map.
"""

import re
from typing import Tuple

from services.exceptions import InvalidFieldPathException

_SEGMENT_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


class FieldPath(str):
    """Validated dotted path string."""

    __slots__ = ()

    def __new__(cls, value):
        if isinstance(value, FieldPath):
            return value
        if not isinstance(value, str) or not value:
            raise InvalidFieldPathException("Field path must be a non-empty string", path=str(value))
        for segment in value.split("."):
            if not _SEGMENT_PATTERN.match(segment):
                raise InvalidFieldPathException("Malformed field path segment", path=value)
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, value) -> "FieldPath":
        """Alias of the constructor, reads better at call sites."""
        return cls(value)

    @classmethod
    def join(cls, *parts: str) -> "FieldPath":
        return cls(".".join(p for p in parts if p))

    @property
    def parts(self) -> Tuple[str, ...]:
        return tuple(self.split("."))

    @property
    def section(self) -> str:
        """Top-level section name."""
        return self.parts[0]

    @property
    def leaf(self) -> str:
        return self.parts[-1]

    @property
    def parent(self) -> str:
        return ".".join(self.parts[:-1])

    def child(self, name: str) -> "FieldPath":
        return FieldPath(f"{self}.{name}")

    def is_within(self, prefix: str) -> bool:
        """True if this path equals prefix or lies below it on a segment boundary."""
        return self == prefix or self.startswith(prefix + ".")
