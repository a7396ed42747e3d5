# -*- coding: utf-8 -*-
"""
Wizard Controller
=================
Drives one intake session through its category's steps.

Handles:
- Forward navigation gated by validation of the current step
- Backward navigation without validation (exit request at the first step)
- Path-validated edits of the form state with dependent-field pruning
- Consent, signature and the final submission record
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from controllers.base_controller import BaseController
from models.category import Category
from models.field_error import ErrorMap
from models.field_path import FieldPath
from models.step import Step
from models.wizard_session import STATUS_SUBMITTED, WizardSession
from services.exceptions import (
    InvalidFieldPathException,
    ValidationException,
    WizardStateException,
)
from services.validation_service import ValidationService
from services.wizard import step_catalog as catalog
from services.wizard.error_state import ErrorStateManager
from services.wizard.form_state_store import FormStateStore
from services.wizard.open_bag_schema import schema_for_path, schemas_below
from services.wizard.submission import build_submission_record
from utils.datetime_utils import utc_now_iso
from utils.logger import get_logger

logger = get_logger(__name__)


def create_session(category, representative: Optional[Dict[str, Any]] = None) -> WizardSession:
    """
    Start a new intake session.

    Args:
        category: Category member or its string value
        representative: Assigned representative, passed through untouched

    Returns:
        WizardSession at step 0 with the category's empty form state

    Raises:
        InvalidCategoryException: for unknown categories
    """
    category = Category.from_value(category)
    session = WizardSession(
        category=category,
        steps=catalog.steps(category),
        form_state=FormStateStore.initial_state(category),
        representative=representative,
    )
    logger.info(f"Created session {session.reference_number} for {category.value}")
    return session


@dataclass
class NavigationResult:
    """Outcome of advance() / retreat()."""
    success: bool
    advanced: bool = False
    submitted: bool = False
    exit_requested: bool = False
    errors: ErrorMap = field(default_factory=dict)
    record: Optional[Dict[str, Any]] = None


class WizardController(BaseController):
    """
    State machine over a WizardSession.

    The session's form state and error map are only ever replaced, never
    edited in place. Once the session is submitted every mutating call
    raises WizardStateException.
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_index, new_index
    validation_failed = pyqtSignal(dict)  # path -> message
    errors_changed = pyqtSignal(dict)  # path -> message
    wizard_submitted = pyqtSignal(object)  # submission record dict
    exit_requested = pyqtSignal()

    def __init__(self, session: WizardSession, validation_service: ValidationService = None,
                 parent=None):
        super().__init__(parent)
        self.session = session
        self._validation = validation_service or ValidationService()
        self._consent_timestamp: Optional[str] = None

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def category(self) -> Category:
        return self.session.category

    @property
    def current_step(self) -> Step:
        return self.session.current_step

    @property
    def current_index(self) -> int:
        return self.session.current_step_index

    @property
    def step_count(self) -> int:
        return len(self.session.steps)

    @property
    def can_go_previous(self) -> bool:
        return self.session.current_step_index > 0

    @property
    def is_last_step(self) -> bool:
        return self.session.current_step_index == self.step_count - 1

    @property
    def is_submitted(self) -> bool:
        return self.session.is_submitted

    @property
    def form_state(self) -> Dict[str, Any]:
        return self.session.form_state

    @property
    def errors(self) -> ErrorMap:
        return self.session.errors

    @property
    def progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if self.step_count <= 1:
            return 100.0 if self.is_submitted else 0.0
        return (self.session.current_step_index / (self.step_count - 1)) * 100.0

    def field_error(self, path: str) -> Optional[str]:
        return ErrorStateManager.field_error(self.session.errors, path)

    def has_error(self, path: str) -> bool:
        return ErrorStateManager.has_error(self.session.errors, path)

    def get(self, path: str, default: Any = None) -> Any:
        """Current value at a dotted path."""
        return FormStateStore.get(self.session.form_state, path, default)

    # =========================================================================
    # Navigation
    # =========================================================================

    def advance(self) -> NavigationResult:
        """
        Validate the current step and move forward.

        On failure the step's errors are merged into the error map and the
        session stays put. On the last step a valid advance submits.
        """
        self._ensure_editable("advance")
        step = self.current_step
        index = self.session.current_step_index

        errors = self._validation.validate_step(step.id, self.session.form_state, self.category)
        if errors:
            logger.warning(f"Step {index} ({step.id}) validation failed: {sorted(errors)}")
            self._set_errors(ErrorStateManager.merge(self.session.errors, errors))
            self.validation_failed.emit(ErrorStateManager.to_messages(errors))
            return NavigationResult(success=False, errors=errors)

        self._set_errors(ErrorStateManager.clear_for_step(self.session.errors, step.id))
        self.session.mark_step_completed(index)

        if self.is_last_step:
            return self._submit()

        self._navigate_to(index + 1)
        return NavigationResult(success=True, advanced=True)

    def retreat(self) -> NavigationResult:
        """Move back one step without validating; at the first step request exit."""
        self._ensure_editable("retreat")
        index = self.session.current_step_index
        if index == 0:
            logger.info("Retreat from first step: exit requested")
            self.exit_requested.emit()
            return NavigationResult(success=True, exit_requested=True)

        self._navigate_to(index - 1)
        return NavigationResult(success=True)

    def _navigate_to(self, new_index: int):
        old_index = self.session.current_step_index
        self.session.current_step_index = new_index
        self.session.touch()
        logger.info(f"Navigation: step {old_index} -> {new_index} ({self.current_step.id})")
        self.step_changed.emit(old_index, new_index)

    def _submit(self) -> NavigationResult:
        record = build_submission_record(self.session, consent_timestamp=self._consent_timestamp)
        self.session.status = STATUS_SUBMITTED
        self.session.touch()
        self._log_operation("submit", reference=self.session.reference_number)
        self.wizard_submitted.emit(record)
        return NavigationResult(success=True, submitted=True, record=record)

    # =========================================================================
    # Edits
    # =========================================================================

    def set_section(self, section: str, field_name: str, value: Any) -> Dict[str, Any]:
        """
        Replace one field of a top-level section.

        Raises:
            InvalidFieldPathException: the path does not exist for this category
            ValidationException: wrongly typed value for an open-bag key
            WizardStateException: the session is already submitted
        """
        self._ensure_editable("set_section")
        path = FieldPath.join(section, field_name)
        self._check_path("set_section", path, value)
        state = FormStateStore.set_section(self.session.form_state, section, field_name, value)
        return self._apply(state)

    def set_path(self, path: str, value: Any) -> Dict[str, Any]:
        """Deep-set a value at a dotted path. Raises as set_section()."""
        self._ensure_editable("set_path")
        self._check_path("set_path", path, value)
        state = FormStateStore.set_path(self.session.form_state, path, value)
        return self._apply(state)

    def set_signature(self, data: str, signature_type: str, file_name: Optional[str] = None) -> Dict[str, Any]:
        """
        Store the signature artifact produced by the signature surface.

        Args:
            data: Encoded signature image
            signature_type: 'drawn' or 'uploaded'
            file_name: Name of the uploaded file, if any
        """
        self._ensure_editable("set_signature")
        if signature_type not in Config.SIGNATURE_TYPES:
            error = ValidationException(
                f"Unsupported signature type: {signature_type}", field="consent.signatureType"
            )
            self._emit_error("set_signature", error)
            raise error

        state = FormStateStore.set_many(self.session.form_state, {
            "consent.digitalSignature": data or "",
            "consent.signatureType": signature_type,
            "consent.signatureFileName": file_name or "",
        })
        return self._apply(state)

    def give_consent(self, given: bool) -> Dict[str, Any]:
        """Tick or untick the consent checkbox; the tick time is recorded."""
        self._ensure_editable("give_consent")
        given = bool(given)
        self._consent_timestamp = utc_now_iso() if given else None
        state = FormStateStore.set_path(self.session.form_state, "consent.consentGiven", given)
        return self._apply(state)

    def _check_path(self, operation: str, path: str, value: Any):
        try:
            parsed = FieldPath.parse(path)
            if not FormStateStore.is_known_path(parsed, self.category):
                raise InvalidFieldPathException(
                    f"Unknown field for {self.category.value}", path=str(parsed)
                )
            schema = schema_for_path(parsed, self.category)
            if schema is not None:
                self._check_bag_write(schema, parsed, value)
            for nested in schemas_below(parsed, self.category):
                self._check_ancestor_write(nested, parsed, value)
        except (InvalidFieldPathException, ValidationException) as e:
            self._emit_error(operation, e)
            raise

    @staticmethod
    def _check_bag_write(schema, path: FieldPath, value: Any):
        if path == schema.section:
            schema.check_bag(value)
            return
        key = FieldPath(path[len(schema.section) + 1:]).parts[0]
        schema.check(key, value)

    @staticmethod
    def _check_ancestor_write(schema, path: FieldPath, value: Any):
        """Check the bag carried inside a value written above it."""
        container = value
        for part in schema.section[len(path) + 1:].split("."):
            if not isinstance(container, dict):
                raise ValidationException(f"{path} expects a mapping", field=str(path))
            if part not in container:
                return
            container = container[part]
        schema.check_bag(container)

    def _apply(self, state: Dict[str, Any]) -> Dict[str, Any]:
        self.session.form_state = self._validation.prune_inactive_fields(state, self.category)
        self.session.touch()
        self.data_changed.emit()
        return self.session.form_state

    def _set_errors(self, errors: ErrorMap):
        changed = errors != self.session.errors
        self.session.errors = errors
        if changed:
            self.errors_changed.emit(ErrorStateManager.to_messages(errors))

    def _ensure_editable(self, operation: str):
        if self.session.is_submitted:
            raise WizardStateException(
                f"Cannot {operation}: session {self.session.reference_number} is already submitted",
                status=self.session.status,
            )
