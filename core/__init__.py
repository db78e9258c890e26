"""Core package for field validation, dates and error types."""

from .errors import SubmissionError, UnknownFieldError, UnknownSectionError, WizardClosedError, WizardError
from .validators import PasswordPolicy, ValidationResult

__all__ = [
    "PasswordPolicy",
    "SubmissionError",
    "UnknownFieldError",
    "UnknownSectionError",
    "ValidationResult",
    "WizardClosedError",
    "WizardError",
]
