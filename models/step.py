# -*- coding: utf-8 -*-
"""
Wizard step descriptor.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Step:
    """One page of the intake wizard."""

    id: str
    title: str
    icon_ref: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "title": self.title, "icon_ref": self.icon_ref}

    @classmethod
    def from_dict(cls, data: dict) -> "Step":
        """Create Step from dictionary."""
        return cls(id=data["id"], title=data.get("title", ""), icon_ref=data.get("icon_ref", ""))
