"""Step validity predicates evaluated over a :class:`FieldStore`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from wizard.field_store import FieldStore
from wizard.fields import SectionSpec, entry_field_key
from wizard.step_registry import OptionalStep, RepeatableStep, StepDefinition
from wizard.types import FieldValue


@dataclass(frozen=True)
class StepCheck:
    """Validity of a step plus the message for every failing field key."""

    is_valid: bool
    errors: Mapping[str, str] = field(default_factory=dict)
    checked_keys: tuple[str, ...] = ()
    valid_entries: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


def entry_errors(section: SectionSpec, entry_id: str, scope: Mapping[str, FieldValue]) -> dict[str, str]:
    """Return ``entry_id:field`` → message for every failing field of one entry."""

    errors: dict[str, str] = {}
    for spec in section.fields:
        result = spec.check(scope)
        if not result.is_valid:
            errors[entry_field_key(entry_id, spec.key)] = result.error or "Invalid value"
    return errors


def is_entry_valid(section: SectionSpec, scope: Mapping[str, FieldValue]) -> bool:
    """Return ``True`` when every applicable field of the entry passes."""

    return all(spec.check(scope).is_valid for spec in section.fields)


def evaluate_step(step: StepDefinition, store: FieldStore) -> StepCheck:
    """Evaluate ``step`` against the current values in ``store``.

    Optional steps always pass. Repeatable sections follow an "any, not all"
    policy: each section needs at least one fully valid entry, while blank or
    partial extra entries do not block the step.
    """

    if isinstance(step, OptionalStep):
        return StepCheck(is_valid=True)

    errors: dict[str, str] = {}
    checked: list[str] = []
    scope = store.values
    for spec in step.all_fields():
        checked.append(spec.key)
        result = spec.check(scope)
        if not result.is_valid:
            errors[spec.key] = result.error or "Invalid value"
    is_valid = not errors

    valid_entries: dict[str, tuple[str, ...]] = {}
    if isinstance(step, RepeatableStep):
        for section in step.sections:
            passing: list[str] = []
            for entry in store.entries(section.key):
                checked.extend(entry_field_key(entry.id, spec.key) for spec in section.fields)
                failures = entry_errors(section, entry.id, entry.fields)
                if failures:
                    errors.update(failures)
                else:
                    passing.append(entry.id)
            valid_entries[section.key] = tuple(passing)
            if not passing:
                is_valid = False

    return StepCheck(
        is_valid=is_valid,
        errors=errors,
        checked_keys=tuple(checked),
        valid_entries=valid_entries,
    )


def is_step_valid(step: StepDefinition, store: FieldStore) -> bool:
    return evaluate_step(step, store).is_valid


__all__ = [
    "StepCheck",
    "entry_errors",
    "evaluate_step",
    "is_entry_valid",
    "is_step_valid",
]
