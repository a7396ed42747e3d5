# -*- coding: utf-8 -*-
"""
Validation Factory - Builds and caches the rule set of each wizard step.

Provides a central point for looking up which strategies apply to a step
for a given category and for running them against a form state.
"""

from typing import Any, Dict, List, Tuple

from models.category import Category
from models.field_error import ErrorMap
from utils.logger import get_logger
from .step_rules import STEP_RULE_BUILDERS, RuleBuilder
from .validation_strategy import ValidationStrategy

logger = get_logger(__name__)


class ValidationFactory:
    """
    Registry of rule builders keyed by step id.

    Rule lists are built lazily per (step, category) and cached, so a
    builder runs at most once for each combination.
    """

    def __init__(self):
        """Initialize the validation factory."""
        self._builders: Dict[str, RuleBuilder] = {}
        self._cache: Dict[Tuple[str, Category], List[ValidationStrategy]] = {}
        self._register_default_builders()

    def _register_default_builders(self):
        """Register the built-in builder of every wizard step."""
        for step_id, builder in STEP_RULE_BUILDERS.items():
            self.register_step(step_id, builder)

    def register_step(self, step_id: str, builder: RuleBuilder):
        """
        Register a rule builder for a step, replacing any previous one.

        Args:
            step_id: Step identifier (e.g. 'personal-info')
            builder: Callable taking a Category and returning a rule list
        """
        self._builders[step_id] = builder
        self._cache = {key: rules for key, rules in self._cache.items() if key[0] != step_id}

    def rules_for(self, step_id: str, category) -> List[ValidationStrategy]:
        """
        Get the rules of a step for a category.

        Args:
            step_id: Step identifier
            category: Category or category id

        Returns:
            Ordered list of strategies (empty for steps that own no fields)
        """
        category = Category.from_value(category)
        key = (step_id, category)
        if key not in self._cache:
            builder = self._builders.get(step_id)
            self._cache[key] = list(builder(category)) if builder else []
            logger.debug(f"Built {len(self._cache[key])} rules for {step_id} ({category.value})")
        return self._cache[key]

    def validate(self, step_id: str, state: Dict[str, Any], category) -> ErrorMap:
        """
        Run every rule of a step against the form state.

        Args:
            step_id: Step identifier
            state: Nested form state
            category: Category or category id

        Returns:
            ErrorMap with at most one error per path; the first rule to
            report on a path wins
        """
        errors: ErrorMap = {}
        for rule in self.rules_for(step_id, category):
            for path, error in rule.validate(state).items():
                errors.setdefault(path, error)
        return errors

    def is_valid(self, step_id: str, state: Dict[str, Any], category) -> bool:
        return len(self.validate(step_id, state, category)) == 0

    def get_registered_steps(self) -> List[str]:
        """
        Get list of step ids with a registered builder.

        Returns:
            List of step identifiers
        """
        return list(self._builders.keys())
