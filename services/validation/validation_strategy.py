# -*- coding: utf-8 -*-
"""
Validation Strategy Pattern - composable field rules.

Each strategy is a pure predicate over the form state that reports failing
fields as an ErrorMap. Strategies never read or write anything but the state
passed in.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

from models.field_error import ErrorKind, ErrorMap, FieldError
from services.validation.formats import FORMATS
from services.wizard.form_state_store import FormStateStore
from utils.datetime_utils import parse_date
from utils.helpers import format_number, humanize_field_name, is_blank, to_number

Limit = Union[int, float, Callable[[], Union[int, float]], None]


def _value(state: Dict[str, Any], path: str) -> Any:
    return FormStateStore.get(state, path, None)


def _label(path: str, label: Optional[str]) -> str:
    return label or humanize_field_name(path.rsplit(".", 1)[-1])


def _resolve(limit: Limit):
    return limit() if callable(limit) else limit


class ValidationStrategy(ABC):
    """
    Abstract base class for validation strategies.

    Each strategy implements one rule over one or more fields.
    """

    @abstractmethod
    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        """
        Validate the form state.

        Args:
            state: Nested form state

        Returns:
            ErrorMap of failing fields (empty if valid)
        """
        pass

    @property
    @abstractmethod
    def paths(self) -> Tuple[str, ...]:
        """Field paths this strategy can report errors for."""
        pass

    def is_valid(self, state: Dict[str, Any]) -> bool:
        return len(self.validate(state)) == 0

    def inactive_paths(self, state: Dict[str, Any]) -> Tuple[str, ...]:
        """Fields whose governing condition does not currently hold."""
        return ()


class RequiredRule(ValidationStrategy):
    """Field must be filled in (or, for checkboxes, ticked)."""

    def __init__(self, path: str, label: Optional[str] = None, message: Optional[str] = None,
                 must_be_true: bool = False, kind: ErrorKind = ErrorKind.MISSING_REQUIRED):
        self.path = path
        self.label = _label(path, label)
        self.message = message or f"{self.label} is required"
        self.must_be_true = must_be_true
        self.kind = kind

    @property
    def paths(self) -> Tuple[str, ...]:
        return (self.path,)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        value = _value(state, self.path)
        missing = value is not True if self.must_be_true else is_blank(value)
        if missing:
            return {self.path: FieldError(self.kind, self.message)}
        return {}


class FormatRule(ValidationStrategy):
    """Filled-in field must match a named format (see formats.FORMATS)."""

    def __init__(self, path: str, fmt: str, label: Optional[str] = None, message: Optional[str] = None):
        if fmt not in FORMATS:
            raise ValueError(f"Unknown format: {fmt}")
        self.path = path
        self.fmt = fmt
        self.label = _label(path, label)
        check, template = FORMATS[fmt]
        self._check = check
        self.message = message or template.format(label=self.label)

    @property
    def paths(self) -> Tuple[str, ...]:
        return (self.path,)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        value = _value(state, self.path)
        if is_blank(value):
            return {}
        if not self._check(str(value)):
            return {self.path: FieldError(ErrorKind.FORMAT_INVALID, self.message)}
        return {}


class RangeRule(ValidationStrategy):
    """Filled-in numeric field must be a number within optional bounds."""

    def __init__(self, path: str, minimum: Limit = None, maximum: Limit = None,
                 exclusive_minimum: bool = False, integer: bool = False,
                 label: Optional[str] = None, kind: ErrorKind = ErrorKind.RANGE_INVALID):
        self.path = path
        self.minimum = minimum
        self.maximum = maximum
        self.exclusive_minimum = exclusive_minimum
        self.integer = integer
        self.label = _label(path, label)
        self.kind = kind

    @property
    def paths(self) -> Tuple[str, ...]:
        return (self.path,)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        value = _value(state, self.path)
        if is_blank(value):
            return {}

        number = to_number(value)
        if number is None:
            return {self.path: FieldError(ErrorKind.FORMAT_INVALID, f"{self.label} must be a valid number")}
        if self.integer and not float(number).is_integer():
            return {self.path: FieldError(ErrorKind.FORMAT_INVALID, f"{self.label} must be a whole number")}

        minimum = _resolve(self.minimum)
        maximum = _resolve(self.maximum)
        if minimum is not None:
            if self.exclusive_minimum and number <= minimum:
                return {self.path: FieldError(
                    self.kind, f"{self.label} must be greater than {format_number(minimum)}")}
            if not self.exclusive_minimum and number < minimum:
                return {self.path: FieldError(
                    self.kind, f"{self.label} must be at least {format_number(minimum)}")}
        if maximum is not None and number > maximum:
            return {self.path: FieldError(
                self.kind, f"{self.label} must not exceed {format_number(maximum)}")}
        return {}


class ChoiceRule(ValidationStrategy):
    """Filled-in field must be one of a fixed set of values."""

    def __init__(self, path: str, choices: Iterable[Any], label: Optional[str] = None,
                 message: Optional[str] = None):
        self.path = path
        self.choices = tuple(choices)
        self.label = _label(path, label)
        self.message = message or f"{self.label} must be one of: {', '.join(str(c) for c in self.choices)}"

    @property
    def paths(self) -> Tuple[str, ...]:
        return (self.path,)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        value = _value(state, self.path)
        if is_blank(value):
            return {}
        if value not in self.choices:
            return {self.path: FieldError(ErrorKind.FORMAT_INVALID, self.message)}
        return {}


class DateOrderRule(ValidationStrategy):
    """End date must not precede start date. Unparseable dates are left to FormatRule."""

    def __init__(self, start_path: str, end_path: str, message: Optional[str] = None):
        self.start_path = start_path
        self.end_path = end_path
        self.message = message or (
            f"{_label(end_path, None)} must be on or after {_label(start_path, None).lower()}"
        )

    @property
    def paths(self) -> Tuple[str, ...]:
        return (self.end_path,)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        start = parse_date(_value(state, self.start_path))
        end = parse_date(_value(state, self.end_path))
        if start is not None and end is not None and end < start:
            return {self.end_path: FieldError(ErrorKind.CROSS_FIELD_THRESHOLD, self.message)}
        return {}


# =========================================================================
# Conditions
# =========================================================================

class Condition:
    """Named predicate over the form state."""

    def __init__(self, predicate: Callable[[Dict[str, Any]], bool], description: str,
                 controllers: Tuple[str, ...] = ()):
        self._predicate = predicate
        self.description = description
        self.controllers = controllers

    def __call__(self, state: Dict[str, Any]) -> bool:
        return bool(self._predicate(state))

    def is_decided(self, state: Dict[str, Any]) -> bool:
        """True once every governing field has an answer."""
        return all(not is_blank(_value(state, path)) for path in self.controllers)

    def __repr__(self):
        return f"Condition({self.description})"


def equals(path: str, expected: Any) -> Condition:
    return Condition(lambda s: _value(s, path) == expected, f"{path} == {expected!r}", (path,))


def is_true(path: str) -> Condition:
    return Condition(lambda s: _value(s, path) is True, f"{path} is true", (path,))


def is_false(path: str) -> Condition:
    """Strictly False; an unanswered (None) question does not count."""
    return Condition(lambda s: _value(s, path) is False, f"{path} is false", (path,))


def at_least(path: str, threshold: Union[int, float]) -> Condition:
    def predicate(state):
        number = to_number(_value(state, path))
        return number is not None and number >= threshold
    return Condition(predicate, f"{path} >= {threshold}", (path,))


def less_than(path: str, threshold: Union[int, float]) -> Condition:
    def predicate(state):
        number = to_number(_value(state, path))
        return number is not None and number < threshold
    return Condition(predicate, f"{path} < {threshold}", (path,))


def less_than_field(path: str, other_path: str) -> Condition:
    def predicate(state):
        left = to_number(_value(state, path))
        right = to_number(_value(state, other_path))
        return left is not None and right is not None and left < right
    return Condition(predicate, f"{path} < {other_path}", (path, other_path))


# =========================================================================
# Conditional rules
# =========================================================================

Requirement = Union[str, Tuple[str, str]]


class WhenRule(ValidationStrategy):
    """
    Fields required, and nested rules applied, only while a condition holds.

    Subclasses fix the error kind reported for missing dependents.
    """

    kind: ErrorKind = ErrorKind.CONDITIONAL_REQUIRED

    def __init__(self, condition: Condition, required: Iterable[Requirement] = (),
                 rules: Sequence[ValidationStrategy] = ()):
        self.condition = condition
        self.required: Tuple[Tuple[str, str], ...] = tuple(
            (item, _label(item, None)) if isinstance(item, str) else (item[0], item[1])
            for item in required
        )
        self.rules = tuple(rules)

    @property
    def paths(self) -> Tuple[str, ...]:
        seen = []
        for path, _ in self.required:
            if path not in seen:
                seen.append(path)
        for rule in self.rules:
            for path in rule.paths:
                if path not in seen:
                    seen.append(path)
        return tuple(seen)

    def is_active(self, state: Dict[str, Any]) -> bool:
        return self.condition(state)

    def validate(self, state: Dict[str, Any]) -> ErrorMap:
        if not self.is_active(state):
            return {}

        errors: ErrorMap = {}
        for path, label in self.required:
            if is_blank(_value(state, path)):
                errors.setdefault(path, FieldError(self.kind, f"{label} is required"))
        for rule in self.rules:
            for path, error in rule.validate(state).items():
                errors.setdefault(path, error)
        return errors

    def inactive_paths(self, state: Dict[str, Any]) -> Tuple[str, ...]:
        if not self.is_active(state):
            # unanswered governing fields leave dependents alone
            return self.paths if self.condition.is_decided(state) else ()
        inactive = []
        for rule in self.rules:
            inactive.extend(rule.inactive_paths(state))
        return tuple(inactive)


class ConditionalRequiredRule(WhenRule):
    """Dependents required because a sibling holds a specific value."""

    kind = ErrorKind.CONDITIONAL_REQUIRED


class CrossFieldThresholdRule(WhenRule):
    """Dependents required because a computed relation over fields holds."""

    kind = ErrorKind.CROSS_FIELD_THRESHOLD
