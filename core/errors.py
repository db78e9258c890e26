"""Custom exception types for the wizard core."""

from __future__ import annotations


class WizardError(Exception):
    """Base exception for wizard related issues."""


class UnknownFieldError(WizardError, KeyError):
    """Raised when a field key does not resolve to a known field or entry."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown field key '{self.key}'"


class UnknownSectionError(WizardError, KeyError):
    """Raised when a repeatable section id is not declared by the flow."""

    def __init__(self, section_id: str) -> None:
        super().__init__(section_id)
        self.section_id = section_id

    def __str__(self) -> str:
        return f"Unknown repeatable section '{self.section_id}'"


class WizardClosedError(WizardError):
    """Raised when a wizard is used after submission or exit discarded it."""


SUBMISSION_FAILED_MESSAGE = "Something went wrong. Please try again."


class SubmissionError(WizardError):
    """Raised when a payload cannot be built or the collaborator rejects it."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or SUBMISSION_FAILED_MESSAGE)
        self.message = message or SUBMISSION_FAILED_MESSAGE


__all__ = [
    "SUBMISSION_FAILED_MESSAGE",
    "SubmissionError",
    "UnknownFieldError",
    "UnknownSectionError",
    "WizardClosedError",
    "WizardError",
]
