"""Generic multi-step wizard: field specs, stores, step gating and submission."""

from __future__ import annotations

from .error_store import ErrorStore
from .field_store import FieldStore, RepeatableEntry
from .fields import FieldSpec, SectionSpec, SelectionSpec, entry_field_key
from .step_registry import FormStep, OptionalStep, RepeatableStep, SelectionStep, StepDefinition, WizardFlow
from .step_status import StepCheck, evaluate_step, is_step_valid
from .submission import SubmissionResult, WizardSnapshot
from .navigation import StepTransition, TransitionKind, WizardController

__all__ = [
    "ErrorStore",
    "FieldSpec",
    "FieldStore",
    "FormStep",
    "OptionalStep",
    "RepeatableEntry",
    "RepeatableStep",
    "SectionSpec",
    "SelectionSpec",
    "SelectionStep",
    "StepCheck",
    "StepDefinition",
    "StepTransition",
    "SubmissionResult",
    "TransitionKind",
    "WizardController",
    "WizardFlow",
    "WizardSnapshot",
    "entry_field_key",
    "evaluate_step",
    "is_step_valid",
]
