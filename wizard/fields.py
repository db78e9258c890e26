"""Declarative field, section and selection specs for wizard steps."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

from core.validators import (
    ValidationResult,
    is_blank,
    validate_choice,
    validate_required,
    validate_selection,
)
from wizard.types import FieldScope, FieldValidator, FieldValue, ScopePredicate

ENTRY_KEY_SEPARATOR: Final[str] = ":"


def entry_field_key(entry_id: str, field_key: str) -> str:
    """Return the error-map key for ``field_key`` inside entry ``entry_id``."""

    return f"{entry_id}{ENTRY_KEY_SEPARATOR}{field_key}"


def split_field_key(key: str) -> tuple[str | None, str]:
    """Split ``entry_id:field`` keys; plain keys return ``(None, key)``."""

    entry_id, separator, field_key = key.partition(ENTRY_KEY_SEPARATOR)
    if not separator:
        return None, key
    return entry_id, field_key


def field_rule(validator: Callable[..., ValidationResult], **constraints: Any) -> FieldValidator:
    """Adapt a single-value validator so it can be attached to a :class:`FieldSpec`."""

    def _rule(value: FieldValue, _scope: FieldScope) -> ValidationResult:
        return validator(value, **constraints)

    return _rule


def when_false(flag_key: str) -> ScopePredicate:
    """Return a predicate that holds while ``flag_key`` is not ``True``."""

    def _predicate(scope: FieldScope) -> bool:
        return scope.get(flag_key) is not True

    return _predicate


@dataclass(frozen=True)
class FieldSpec:
    """A named field, its validator and its requiredness rules.

    ``required_when`` makes the field applicable only while the predicate holds
    for the field's scope; inapplicable fields are never validated.
    ``clears_when_true`` lists sibling fields reset to ``""`` (with their errors)
    when this boolean field is switched on. ``dependents`` lists siblings whose
    existing errors are re-checked whenever this field changes.
    """

    key: str
    label: str
    validator: FieldValidator | None = None
    required: bool = True
    required_when: ScopePredicate | None = None
    cleaner: Callable[[Any], FieldValue] | None = None
    default: FieldValue = ""
    clears_when_true: tuple[str, ...] = ()
    dependents: tuple[str, ...] = ()

    def is_applicable(self, scope: FieldScope) -> bool:
        return self.required_when is None or bool(self.required_when(scope))

    def is_required(self, scope: FieldScope) -> bool:
        return self.required and self.is_applicable(scope)

    def clean(self, value: Any) -> FieldValue:
        if self.cleaner is None:
            return value
        return self.cleaner(value)

    def check(self, scope: FieldScope) -> ValidationResult:
        """Validate this field's value within ``scope``."""

        if not self.is_applicable(scope):
            return ValidationResult.ok()
        value = scope.get(self.key)
        if not self.required and is_blank(value):
            return ValidationResult.ok()
        if self.validator is None:
            return validate_required(value, self.label)
        return self.validator(value, scope)


@dataclass(frozen=True)
class SelectionSpec:
    """A single- or multi-choice selection gating a step."""

    key: str
    label: str
    options: tuple[str, ...] = ()
    multiple: bool = False
    error_message: str = "Please make a selection"
    default: FieldValue = None

    def accepts(self, option: str) -> bool:
        return not self.options or option in self.options

    def as_field(self) -> FieldSpec:
        default = self.default
        if default is None and self.multiple:
            default = ()
        return FieldSpec(
            key=self.key,
            label=self.label,
            validator=field_rule(validate_selection, message=self.error_message),
            default=default,
        )


@dataclass(frozen=True)
class SectionSpec:
    """A repeatable section such as the list of education records."""

    key: str
    label: str
    fields: tuple[FieldSpec, ...]

    def field(self, key: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None

    def blank_entry(self) -> dict[str, FieldValue]:
        return {spec.key: spec.default for spec in self.fields}


def choice_field(
    key: str,
    label: str,
    options: tuple[str, ...],
    *,
    default: FieldValue = None,
) -> FieldSpec:
    """Return an optional field restricted to ``options`` once set."""

    return FieldSpec(
        key=key,
        label=label,
        validator=field_rule(validate_choice, options=options, label=label.lower()),
        required=False,
        default=default,
    )


__all__ = [
    "ENTRY_KEY_SEPARATOR",
    "FieldSpec",
    "SectionSpec",
    "SelectionSpec",
    "choice_field",
    "entry_field_key",
    "field_rule",
    "split_field_key",
    "when_false",
]
