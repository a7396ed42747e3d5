# -*- coding: utf-8 -*-
"""
Form validation service.

Validates the fields owned by a wizard step and keeps conditional fields
consistent with the answers that govern them.
"""

from typing import Any, Dict, Iterable, List, Optional

from models.category import Category
from models.field_error import ErrorMap
from services.validation.validation_factory import ValidationFactory
from services.validation.validation_strategy import ValidationStrategy
from services.wizard import step_catalog as catalog
from services.wizard.form_state_store import MISSING, FormStateStore
from utils.logger import get_logger

logger = get_logger(__name__)


class ValidationService:
    """Service for step validation and dependent-field pruning."""

    def __init__(self, factory: Optional[ValidationFactory] = None):
        """
        Initialize validation service.

        Args:
            factory: Rule registry to use (a fresh ValidationFactory by default)
        """
        self._factory = factory or ValidationFactory()

    @property
    def factory(self) -> ValidationFactory:
        return self._factory

    def validate_step(self, step_id: str, state: Dict[str, Any], category) -> ErrorMap:
        """
        Validate the fields owned by one step.

        Args:
            step_id: Step identifier
            state: Nested form state
            category: Category or category id

        Returns:
            ErrorMap keyed by field path (empty if the step is valid)
        """
        category = Category.from_value(category)
        errors = self._factory.validate(step_id, state, category)
        if errors:
            logger.debug(f"{step_id} ({category.value}): {len(errors)} field error(s)")
        return errors

    def validate_steps(self, step_ids: Iterable[str], state: Dict[str, Any], category) -> ErrorMap:
        """Validate several steps; earlier steps win on a shared path."""
        errors: ErrorMap = {}
        for step_id in step_ids:
            for path, error in self.validate_step(step_id, state, category).items():
                errors.setdefault(path, error)
        return errors

    def validate_all(self, state: Dict[str, Any], category) -> ErrorMap:
        """Validate every step of the category."""
        return self.validate_steps(catalog.step_ids(category), state, category)

    def _category_rules(self, category: Category) -> List[ValidationStrategy]:
        rules: List[ValidationStrategy] = []
        for step_id in catalog.step_ids(category):
            rules.extend(self._factory.rules_for(step_id, category))
        return rules

    def inactive_paths(self, state: Dict[str, Any], category) -> List[str]:
        """Dependent fields whose governing condition is answered and does not hold."""
        category = Category.from_value(category)
        paths: List[str] = []
        for rule in self._category_rules(category):
            for path in rule.inactive_paths(state):
                if path not in paths:
                    paths.append(path)
        return paths

    def prune_inactive_fields(self, state: Dict[str, Any], category) -> Dict[str, Any]:
        """
        Reset dependents of inactive conditions to their empty defaults.

        Only conditions whose governing fields are all answered count as
        inactive. Details entered before their governing question is
        answered are kept.

        Args:
            state: Nested form state
            category: Category or category id

        Returns:
            The same state object if nothing had to be reset, otherwise a new
            state with every stale dependent restored to its default
        """
        category = Category.from_value(category)
        paths = self.inactive_paths(state, category)
        if not paths:
            return state

        defaults = FormStateStore.initial_state(category)
        pruned = state
        for path in paths:
            default = FormStateStore.get(defaults, path)
            if default is MISSING:
                continue
            current = FormStateStore.get(pruned, path)
            if current is MISSING or current == default:
                continue
            pruned = FormStateStore.set_path(pruned, path, default)
            logger.debug(f"Cleared {path}: its condition no longer holds")
        return pruned
