"""Step definitions and the flow registry that orders them."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wizard.fields import ENTRY_KEY_SEPARATOR, FieldSpec, SectionSpec, SelectionSpec

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from wizard.submission import WizardSnapshot

PayloadAssembler = Callable[["WizardSnapshot"], Mapping[str, Any]]


@dataclass(frozen=True)
class StepDefinition:
    """Base step: a key, a label and plain fields."""

    key: str
    label: str
    fields: tuple[FieldSpec, ...] = ()

    def all_fields(self) -> tuple[FieldSpec, ...]:
        return self.fields

    @property
    def required_field_keys(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.all_fields() if spec.required)


@dataclass(frozen=True)
class FormStep(StepDefinition):
    """Every applicable field must pass its own validator."""


@dataclass(frozen=True)
class RepeatableStep(StepDefinition):
    """Plain fields plus repeatable sections; each section needs one valid entry."""

    sections: tuple[SectionSpec, ...] = ()


@dataclass(frozen=True)
class SelectionStep(StepDefinition):
    """A required selection plus optional auxiliary fields."""

    selection: SelectionSpec | None = None

    def all_fields(self) -> tuple[FieldSpec, ...]:
        if self.selection is None:
            return self.fields
        return (self.selection.as_field(), *self.fields)


@dataclass(frozen=True)
class OptionalStep(StepDefinition):
    """Content is optional; advancing is always allowed."""


@dataclass(frozen=True)
class WizardFlow:
    """Ordered steps plus the assembler that turns field state into a payload.

    ``hidden_fields`` are carried between screens without being shown (for
    example the signup password). ``preference_bindings`` pairs field keys with
    preference keys that are loaded on entry and written through on change.
    """

    key: str
    label: str
    steps: tuple[StepDefinition, ...]
    assembler: PayloadAssembler
    hidden_fields: tuple[str, ...] = ()
    preference_bindings: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError(f"Flow '{self.key}' needs at least one step")
        seen_steps: set[str] = set()
        seen_fields: set[str] = set()
        for step in self.steps:
            if step.key in seen_steps:
                raise ValueError(f"Duplicate step key '{step.key}' in flow '{self.key}'")
            seen_steps.add(step.key)
            for spec in step.all_fields():
                if ENTRY_KEY_SEPARATOR in spec.key:
                    raise ValueError(f"Field key '{spec.key}' must not contain '{ENTRY_KEY_SEPARATOR}'")
                if spec.key in seen_fields:
                    raise ValueError(f"Duplicate field key '{spec.key}' in flow '{self.key}'")
                seen_fields.add(spec.key)
        section_keys = [section.key for section in self.sections()]
        if len(section_keys) != len(set(section_keys)):
            raise ValueError(f"Duplicate section key in flow '{self.key}'")

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step_keys(self) -> tuple[str, ...]:
        return tuple(step.key for step in self.steps)

    def step_at(self, index: int) -> StepDefinition:
        """Return the step at 1-based ``index``."""

        if not 1 <= index <= len(self.steps):
            raise IndexError(f"Step {index} is outside 1..{len(self.steps)}")
        return self.steps[index - 1]

    def is_terminal(self, index: int) -> bool:
        return index == len(self.steps)

    def iter_fields(self) -> Iterator[FieldSpec]:
        for step in self.steps:
            yield from step.all_fields()

    def field_spec(self, key: str) -> FieldSpec | None:
        for spec in self.iter_fields():
            if spec.key == key:
                return spec
        return None

    def sections(self) -> tuple[SectionSpec, ...]:
        found: list[SectionSpec] = []
        for step in self.steps:
            if isinstance(step, RepeatableStep):
                found.extend(step.sections)
        return tuple(found)

    def section_spec(self, section_id: str) -> SectionSpec | None:
        for section in self.sections():
            if section.key == section_id:
                return section
        return None

    def selection_spec(self, key: str) -> SelectionSpec | None:
        for step in self.steps:
            if isinstance(step, SelectionStep) and step.selection is not None and step.selection.key == key:
                return step.selection
        return None


__all__ = [
    "FormStep",
    "OptionalStep",
    "PayloadAssembler",
    "RepeatableStep",
    "SelectionStep",
    "StepDefinition",
    "WizardFlow",
]
