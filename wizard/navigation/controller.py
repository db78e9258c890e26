"""Step-gated wizard controller shared by every flow."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any
from uuid import uuid4

from opentelemetry.trace import Status, StatusCode

from core.errors import SubmissionError, UnknownFieldError, WizardClosedError
from core.validators import ValidationResult
from state.preferences import PreferencesRepository
from utils.logging_context import log_context
from utils.telemetry import wizard_span
from wizard.error_store import ErrorStore
from wizard.field_store import EntryIdFactory, FieldStore, RepeatableEntry
from wizard.fields import FieldSpec, SelectionSpec, entry_field_key, split_field_key
from wizard.step_registry import StepDefinition, WizardFlow
from wizard.step_status import StepCheck, evaluate_step
from wizard.submission import SubmissionResult, Submitter, WizardSnapshot
from wizard.types import FieldValue

logger = logging.getLogger(__name__)


class TransitionKind(StrEnum):
    """Outcome of :meth:`WizardController.advance` or :meth:`WizardController.retreat`."""

    MOVED = "moved"
    BLOCKED = "blocked"
    SUBMITTED = "submitted"
    SUBMISSION_FAILED = "submission_failed"
    EXITED = "exited"
    IGNORED = "ignored"


@dataclass(frozen=True)
class StepTransition:
    """Result of a navigation request.

    ``step`` is the 1-based step index after the request was handled.
    """

    kind: TransitionKind
    step: int
    scroll_to_top: bool = False
    message: str | None = None


class WizardController:
    """Own the step index, field values and field errors of one wizard run.

    The controller gates ``advance()`` on the current step's validity, reveals
    every failing field when the gate rejects, and hands the assembled payload
    to ``submitter`` on the terminal step. A submission in flight turns further
    ``advance()``/``retreat()`` calls into ``ignored`` transitions. After a
    successful submission or an exit from step one the controller is closed
    and every mutation raises :class:`WizardClosedError`.
    """

    def __init__(
        self,
        flow: WizardFlow,
        *,
        submitter: Submitter,
        initial_values: Mapping[str, Any] | None = None,
        initial_entries: Mapping[str, Sequence[Mapping[str, FieldValue]]] | None = None,
        preferences: PreferencesRepository | None = None,
        wizard_id: str | None = None,
        id_factory: EntryIdFactory | None = None,
        on_exit: Callable[[], None] | None = None,
        on_complete: Callable[[SubmissionResult], None] | None = None,
    ) -> None:
        self._flow = flow
        self._submitter = submitter
        self._preferences = preferences
        self._wizard_id = wizard_id or uuid4().hex[:8]
        self._on_exit = on_exit
        self._on_complete = on_complete
        self._store = FieldStore(flow.sections(), id_factory=id_factory, initial_entries=initial_entries)
        self._errors = ErrorStore()
        self._current = 1
        self._submitting = False
        self._submission_error: str | None = None
        self._scroll_pending = False
        self._closed = False
        self._last_result: SubmissionResult | None = None

        for spec in flow.iter_fields():
            self._store.set(spec.key, spec.default)
        for key in flow.hidden_fields:
            self._store.set(key, None)
        for key, value in (initial_values or {}).items():
            spec = self._plain_spec(key)
            self._store.set(key, spec.clean(value) if spec is not None else value)
        self._load_preferences()
        logger.debug("Wizard %s started for flow '%s'", self._wizard_id, flow.key)

    # ── read-only state ──────────────────────────────────────
    @property
    def flow(self) -> WizardFlow:
        return self._flow

    @property
    def wizard_id(self) -> str:
        return self._wizard_id

    @property
    def current_step(self) -> int:
        return self._current

    @property
    def current_step_definition(self) -> StepDefinition:
        return self._flow.step_at(self._current)

    @property
    def total_steps(self) -> int:
        return self._flow.total_steps

    @property
    def is_terminal_step(self) -> bool:
        return self._flow.is_terminal(self._current)

    @property
    def errors(self) -> Mapping[str, str]:
        return self._errors.view

    @property
    def is_current_step_valid(self) -> bool:
        return self.check_current_step().is_valid

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def submission_error(self) -> str | None:
        return self._submission_error

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def last_result(self) -> SubmissionResult | None:
        return self._last_result

    def check_current_step(self) -> StepCheck:
        return evaluate_step(self.current_step_definition, self._store)

    def get_field(self, key: str, default: FieldValue = None) -> FieldValue:
        return self._store.get(key, default)

    def values(self) -> Mapping[str, FieldValue]:
        return MappingProxyType(dict(self._store.values))

    def entries(self, section_id: str) -> tuple[RepeatableEntry, ...]:
        return self._store.entries(section_id)

    def snapshot(self) -> WizardSnapshot:
        """Return an immutable copy of the field state for assemblers."""

        return WizardSnapshot(
            flow_key=self._flow.key,
            values=MappingProxyType(dict(self._store.values)),
            entries=self._store.snapshot_entries(),
            sections={section.key: section for section in self._flow.sections()},
        )

    def consume_scroll_to_top(self) -> bool:
        """Return and reset the pending scroll-to-top signal."""

        pending = self._scroll_pending
        self._scroll_pending = False
        return pending

    # ── field events ─────────────────────────────────────────
    def set_field(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and refresh errors that are already shown."""

        self._ensure_open()
        spec = self._resolve_spec(key)
        cleaned = spec.clean(value) if spec is not None else value
        self._store.set(key, cleaned)

        if spec is not None:
            if cleaned is True:
                for target in spec.clears_when_true:
                    target_key = self._sibling_key(key, target)
                    self._store.set(target_key, "")
                    self._errors.discard(target_key)
            self.recompute_error_if_present(key)
            for dependent in spec.dependents:
                self.recompute_error_if_present(self._sibling_key(key, dependent))

        self._write_preference(key, cleaned)

    def blur_field(self, key: str) -> ValidationResult:
        """Validate ``key`` when the user leaves it."""

        self._ensure_open()
        return self.validate_and_set_error(key)

    def validate_and_set_error(self, key: str) -> ValidationResult:
        """Validate ``key`` and store or clear its error."""

        spec = self._resolve_spec(key)
        if spec is None:
            raise UnknownFieldError(key)
        entry_id, _ = split_field_key(key)
        scope = self._store.values if entry_id is None else self._store.entry_scope(entry_id)
        result = spec.check(scope)
        self._errors.apply(key, result)
        return result

    def recompute_error_if_present(self, key: str) -> None:
        if self._errors.has(key):
            self.validate_and_set_error(key)

    def select(self, key: str, option: str) -> None:
        """Choose ``option`` for a selection; multi-selects gain the option once."""

        spec = self._selection(key, option)
        if spec.multiple:
            current = tuple(self._store.get(key) or ())
            if option not in current:
                self.set_field(key, (*current, option))
            return
        self.set_field(key, option)

    def toggle_selection(self, key: str, option: str) -> None:
        """Add or remove ``option`` from a multi-select, keeping selection order."""

        spec = self._selection(key, option)
        if not spec.multiple:
            self.set_field(key, option)
            return
        current = tuple(self._store.get(key) or ())
        if option in current:
            self.set_field(key, tuple(item for item in current if item != option))
        else:
            self.set_field(key, (*current, option))

    # ── repeatable entries ───────────────────────────────────
    def add_entry(self, section_id: str) -> str:
        self._ensure_open()
        return self._store.add_entry(section_id).id

    def remove_entry(self, section_id: str, entry_id: str) -> bool:
        """Remove an entry and its errors; the last entry of a section stays."""

        self._ensure_open()
        removed = self._store.remove_entry(section_id, entry_id)
        if removed:
            self._errors.discard_entry(entry_id)
        return removed

    # ── navigation ───────────────────────────────────────────
    def advance(self) -> StepTransition:
        """Move forward when the current step is valid, submitting on the last step."""

        self._ensure_open()
        with log_context(wizard_id=self._wizard_id, flow=self._flow.key, wizard_step=self._current):
            if self._submitting:
                logger.info("Ignoring advance while a submission is in flight")
                return StepTransition(TransitionKind.IGNORED, self._current)

            check = self.check_current_step()
            if not check.is_valid:
                for key in check.checked_keys:
                    self.validate_and_set_error(key)
                logger.debug("Step %s blocked by %s invalid field(s)", self._current, len(self._errors))
                return StepTransition(TransitionKind.BLOCKED, self._current)

            if self.is_terminal_step:
                return self._submit()

            self._current += 1
            self._scroll_pending = True
            logger.debug("Advanced to step %s", self._current)
            return StepTransition(TransitionKind.MOVED, self._current, scroll_to_top=True)

    def retreat(self) -> StepTransition:
        """Step back without validation; leaving step one exits the wizard."""

        self._ensure_open()
        with log_context(wizard_id=self._wizard_id, flow=self._flow.key, wizard_step=self._current):
            if self._submitting:
                return StepTransition(TransitionKind.IGNORED, self._current)
            if self._current > 1:
                self._current -= 1
                self._scroll_pending = True
                return StepTransition(TransitionKind.MOVED, self._current, scroll_to_top=True)

            logger.info("Wizard exited from the first step")
            self._close()
            if self._on_exit is not None:
                self._on_exit()
            return StepTransition(TransitionKind.EXITED, self._current)

    def _submit(self) -> StepTransition:
        self._submitting = True
        try:
            with wizard_span(
                "wizard.submit",
                flow=self._flow.key,
                wizard_id=self._wizard_id,
                step=self._current,
            ) as span:
                try:
                    payload = dict(self._flow.assembler(self.snapshot()))
                    outcome = self._submitter(payload)
                except SubmissionError as exc:
                    outcome = SubmissionResult.failure(exc.message)
                if outcome is None:
                    outcome = SubmissionResult.success()
                if not outcome.ok:
                    span.set_status(Status(StatusCode.ERROR, outcome.message or ""))
        finally:
            self._submitting = False

        if not outcome.ok:
            self._submission_error = outcome.message or SubmissionResult.failure().message
            logger.warning("Submission failed: %s", self._submission_error)
            self._scroll_pending = True
            return StepTransition(
                TransitionKind.SUBMISSION_FAILED,
                self._current,
                scroll_to_top=True,
                message=self._submission_error,
            )

        self._submission_error = None
        self._last_result = outcome
        logger.info("Submission succeeded for flow '%s'", self._flow.key)
        self._close()
        self._scroll_pending = True
        if self._on_complete is not None:
            self._on_complete(outcome)
        return StepTransition(TransitionKind.SUBMITTED, self._current, scroll_to_top=True, message=outcome.message)

    # ── helpers ──────────────────────────────────────────────
    def _ensure_open(self) -> None:
        if self._closed:
            raise WizardClosedError(f"Wizard '{self._wizard_id}' has been closed")

    def _close(self) -> None:
        self._store.clear()
        self._errors.clear()
        self._scroll_pending = False
        self._closed = True

    def _plain_spec(self, key: str) -> FieldSpec | None:
        spec = self._flow.field_spec(key)
        if spec is None and key not in self._flow.hidden_fields:
            raise UnknownFieldError(key)
        return spec

    def _resolve_spec(self, key: str) -> FieldSpec | None:
        entry_id, field_key = split_field_key(key)
        if entry_id is None:
            return self._plain_spec(key)
        section = self._store.section_spec(self._store.section_of(entry_id))
        spec = section.field(field_key)
        if spec is None:
            raise UnknownFieldError(key)
        return spec

    def _selection(self, key: str, option: str) -> SelectionSpec:
        spec = self._flow.selection_spec(key)
        if spec is None:
            raise UnknownFieldError(key)
        if not spec.accepts(option):
            raise ValueError(f"'{option}' is not an option of '{key}'")
        return spec

    @staticmethod
    def _sibling_key(key: str, target: str) -> str:
        entry_id, _ = split_field_key(key)
        return target if entry_id is None else entry_field_key(entry_id, target)

    def _load_preferences(self) -> None:
        if self._preferences is None:
            return
        for field_key, preference_key in self._flow.preference_bindings:
            stored = self._preferences.get(preference_key)
            if stored is None:
                continue
            spec = self._plain_spec(field_key)
            self._store.set(field_key, spec.clean(stored) if spec is not None else stored)

    def _write_preference(self, key: str, value: FieldValue) -> None:
        if self._preferences is None:
            return
        for field_key, preference_key in self._flow.preference_bindings:
            if field_key == key:
                self._preferences.set(preference_key, value)


__all__ = ["StepTransition", "TransitionKind", "WizardController"]
