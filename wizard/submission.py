"""Submission assembly: snapshots, assembler helpers and collaborator results.

Assemblers never perform I/O. They read a :class:`WizardSnapshot`, keep only
the repeatable entries that pass their own validation, trim text, drop empty
optional values and hand a plain ``dict`` to the submission collaborator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.errors import SUBMISSION_FAILED_MESSAGE, SubmissionError
from wizard.fields import SectionSpec
from wizard.step_status import is_entry_valid
from wizard.types import FieldValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome reported by the submission collaborator."""

    ok: bool
    message: str | None = None
    data: Any = None

    @classmethod
    def success(cls, data: Any = None, message: str | None = None) -> "SubmissionResult":
        return cls(ok=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str | None = None) -> "SubmissionResult":
        return cls(ok=False, message=message or SUBMISSION_FAILED_MESSAGE)


Submitter = Callable[[dict[str, Any]], "SubmissionResult | None"]


@dataclass(frozen=True)
class WizardSnapshot:
    """Read-only copy of a wizard's field state handed to assemblers."""

    flow_key: str
    values: Mapping[str, FieldValue]
    entries: Mapping[str, tuple[Mapping[str, FieldValue], ...]] = field(default_factory=dict)
    sections: Mapping[str, SectionSpec] = field(default_factory=dict)

    def value(self, key: str, default: FieldValue = None) -> FieldValue:
        return self.values.get(key, default)

    def text(self, key: str) -> str | None:
        return clean_text(self.values.get(key))

    def valid_entries(self, section_id: str) -> list[Mapping[str, FieldValue]]:
        """Return every entry of ``section_id`` that passes its own validation."""

        section = self.sections[section_id]
        return [entry for entry in self.entries.get(section_id, ()) if is_entry_valid(section, entry)]


def clean_text(value: Any) -> str | None:
    """Return trimmed text, or ``None`` when nothing is left."""

    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


_ModelT = TypeVar("_ModelT", bound=BaseModel)


def build_payload(model: type[_ModelT], **data: Any) -> _ModelT:
    """Validate ``data`` into ``model``; invalid data becomes a :class:`SubmissionError`."""

    try:
        return model(**data)
    except ValidationError as exc:
        logger.warning("Rejected %s payload: %s", model.__name__, exc.errors(include_url=False))
        raise SubmissionError() from exc


def optional_list(values: Iterable[Any] | None) -> list[Any] | None:
    """Return ``values`` as a list, or ``None`` when empty."""

    if not values:
        return None
    items = list(values)
    return items or None


__all__ = [
    "SubmissionResult",
    "Submitter",
    "WizardSnapshot",
    "build_payload",
    "clean_text",
    "optional_list",
]
