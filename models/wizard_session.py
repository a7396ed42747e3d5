# -*- coding: utf-8 -*-
"""
Wizard Session - state of one in-progress intake submission.

Holds:
- The category fixed at creation and its step catalog
- Current step index
- Nested form state
- Current error map
- Reference number and timestamps
"""

from typing import Dict, Any, Optional, Tuple
from datetime import datetime
import copy
import uuid

from app.config import Config
from models.category import Category
from models.field_error import ErrorMap, FieldError
from models.step import Step

STATUS_IN_PROGRESS = "in_progress"
STATUS_SUBMITTED = "submitted"


class WizardSession:
    """
    Value object threaded through the wizard controller.

    The session is owned by exactly one caller. The form state and error map
    are replaced wholesale by the store and error manager operations, never
    edited in place.
    """

    def __init__(self, category: Category, steps: Tuple[Step, ...],
                 form_state: Dict[str, Any], representative: Optional[Dict[str, Any]] = None):
        """Initialize session properties."""
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = STATUS_IN_PROGRESS
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()
        self.reference_number: str = self._generate_reference_number()

        self.category: Category = category
        self.steps: Tuple[Step, ...] = tuple(steps)
        self.current_step_index: int = 0
        self.form_state: Dict[str, Any] = form_state
        self.errors: ErrorMap = {}

        # Assigned representative, displayed only
        self.representative: Optional[Dict[str, Any]] = representative

        # Step completion tracking
        self.completed_steps: set = set()

    def _generate_reference_number(self) -> str:
        """
        Generate a unique reference number for the session.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_UUID}
        Example: QTE-20260118153045-A3F2
        """
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        short_id = self.wizard_id[:4].upper()
        return f"{Config.REFERENCE_PREFIX}-{timestamp}-{short_id}"

    @property
    def step_ids(self) -> Tuple[str, ...]:
        return tuple(step.id for step in self.steps)

    @property
    def current_step(self) -> Step:
        return self.steps[self.current_step_index]

    @property
    def is_submitted(self) -> bool:
        return self.status == STATUS_SUBMITTED

    def touch(self):
        self.updated_at = datetime.now()

    def mark_step_completed(self, step_index: int):
        """Mark a step as completed."""
        self.completed_steps.add(step_index)
        self.touch()

    def is_step_completed(self, step_index: int) -> bool:
        return step_index in self.completed_steps

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the session to a dictionary (draft snapshot)."""
        return {
            "wizard_id": self.wizard_id,
            "reference_number": self.reference_number,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "category": self.category.value,
            "steps": [step.to_dict() for step in self.steps],
            "current_step_index": self.current_step_index,
            "completed_steps": sorted(self.completed_steps),
            "form_state": copy.deepcopy(self.form_state),
            "errors": {path: error.to_dict() for path, error in self.errors.items()},
            "representative": self.representative,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WizardSession":
        """Restore a session from a dictionary produced by to_dict()."""
        category = Category.from_value(data["category"])
        steps = tuple(Step.from_dict(s) for s in data.get("steps", []))
        session = cls(
            category=category,
            steps=steps,
            form_state=copy.deepcopy(data.get("form_state", {})),
            representative=data.get("representative"),
        )
        session.wizard_id = data.get("wizard_id", session.wizard_id)
        session.reference_number = data.get("reference_number", session.reference_number)
        session.status = data.get("status", STATUS_IN_PROGRESS)
        session.current_step_index = data.get("current_step_index", 0)
        session.completed_steps = set(data.get("completed_steps", []))
        session.errors = {
            path: FieldError.from_dict(error) for path, error in data.get("errors", {}).items()
        }

        # Parse datetime strings
        if "created_at" in data:
            session.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            session.updated_at = datetime.fromisoformat(data["updated_at"])
        return session
