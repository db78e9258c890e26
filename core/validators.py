"""Pure field validators for the signup, onboarding and event forms.

Every validator returns a :class:`ValidationResult` and never mutates its
input, so the same value always yields the same result. Validators that depend
on the calendar accept an explicit ``today`` keyword.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from datetime import date
from typing import Any, Final

from pydantic import EmailStr, ValidationError
from pydantic.type_adapter import TypeAdapter

from core.dates import coerce_date, coerce_time, compute_age, parse_iso_date

_EMAIL_ADAPTER: Final[TypeAdapter[EmailStr]] = TypeAdapter(EmailStr)
_NON_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"[^0-9]")
_FOUR_DIGIT_YEAR_RE: Final[re.Pattern[str]] = re.compile(r"^[0-9]{4}$")
_NAME_PUNCTUATION: Final[frozenset[str]] = frozenset("'-")
PASSWORD_SPECIAL_CHARACTERS: Final[str] = "!@#$%^&*(),.?\":{}|<>"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single field validation."""

    is_valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return _VALID

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


_VALID: Final[ValidationResult] = ValidationResult(is_valid=True)


@dataclass(frozen=True)
class PasswordPolicy:
    """Character-class requirements for :func:`validate_password`."""

    min_length: int = 8
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_number: bool = False
    require_special_char: bool = False


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def is_blank(value: Any) -> bool:
    """Return ``True`` for ``None``, whitespace-only strings and empty collections."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Collection):
        return len(value) == 0
    return False


def validate_required(value: Any, label: str = "Field") -> ValidationResult:
    """Fail when ``value`` is blank."""

    if is_blank(value):
        return ValidationResult.fail(f"{label} is required")
    return ValidationResult.ok()


def validate_text_length(
    value: Any,
    min_length: int,
    max_length: int,
    label: str = "Field",
) -> ValidationResult:
    """Require trimmed text between ``min_length`` and ``max_length`` characters."""

    text = _as_text(value).strip()
    if not text:
        return ValidationResult.fail(f"{label} is required")
    if len(text) < min_length:
        return ValidationResult.fail(f"{label} must be at least {min_length} characters")
    if len(text) > max_length:
        return ValidationResult.fail(f"{label} must be less than {max_length} characters")
    return ValidationResult.ok()


def validate_max_length(value: Any, max_length: int, label: str = "Field") -> ValidationResult:
    """Fail only when the trimmed text exceeds ``max_length`` characters."""

    if len(_as_text(value).strip()) > max_length:
        return ValidationResult.fail(f"{label} must be less than {max_length} characters")
    return ValidationResult.ok()


def validate_name(value: Any, min_length: int = 2, max_length: int = 50) -> ValidationResult:
    """Validate a person's full name."""

    result = validate_text_length(value, min_length, max_length, label="Name")
    if not result.is_valid:
        return result
    text = _as_text(value).strip()
    if not all(ch.isalpha() or ch.isspace() or ch in _NAME_PUNCTUATION for ch in text):
        return ValidationResult.fail("Name can only contain letters, spaces, hyphens, and apostrophes")
    return ValidationResult.ok()


def validate_event_name(value: Any, min_length: int = 3, max_length: int = 100) -> ValidationResult:
    """Validate an event title; its minimum differs from person names on purpose."""

    return validate_text_length(value, min_length, max_length, label="Event name")


def validate_host_name(value: Any, min_length: int = 2) -> ValidationResult:
    """Validate the name of the person or group hosting an event."""

    text = _as_text(value).strip()
    if not text:
        return ValidationResult.fail("Host name is required")
    if len(text) < min_length:
        return ValidationResult.fail(f"Host name must be at least {min_length} characters")
    return ValidationResult.ok()


def validate_email(value: Any) -> ValidationResult:
    """Validate the shape of an email address."""

    candidate = _as_text(value).strip()
    if not candidate:
        return ValidationResult.fail("Email is required")
    if any(ch.isspace() for ch in candidate):
        return ValidationResult.fail("Please enter a valid email address")
    try:
        _EMAIL_ADAPTER.validate_python(candidate)
    except (ValidationError, TypeError):
        return ValidationResult.fail("Please enter a valid email address")
    return ValidationResult.ok()


def clean_mobile_number(value: Any) -> str:
    """Strip every non-digit character from ``value``."""

    return _NON_DIGITS_RE.sub("", _as_text(value))


def format_mobile_number(value: Any) -> str:
    """Group the digits of ``value`` as ``123 456 7890`` for display."""

    cleaned = clean_mobile_number(value)
    if len(cleaned) <= 3:
        return cleaned
    if len(cleaned) <= 6:
        return f"{cleaned[:3]} {cleaned[3:]}"
    return f"{cleaned[:3]} {cleaned[3:6]} {cleaned[6:10]}"


def validate_mobile_number(value: Any, digits: int = 10) -> ValidationResult:
    """Require exactly ``digits`` digits once non-digits are removed."""

    cleaned = clean_mobile_number(value)
    if not cleaned:
        return ValidationResult.fail("Mobile number is required")
    if len(cleaned) != digits:
        return ValidationResult.fail(f"Mobile number must be {digits} digits")
    if len(set(cleaned)) == 1:
        return ValidationResult.fail("Please enter a valid mobile number")
    return ValidationResult.ok()


def validate_email_or_phone(value: Any, digits: int = 10) -> ValidationResult:
    """Accept either a valid email address or a valid mobile number."""

    if is_blank(value):
        return ValidationResult.fail("Email or phone number is required")
    if validate_email(value).is_valid or validate_mobile_number(value, digits).is_valid:
        return ValidationResult.ok()
    return ValidationResult.fail(f"Please enter a valid email or {digits}-digit phone number")


def _join_requirements(parts: list[str]) -> str:
    if len(parts) == 1:
        return parts[0]
    return f"{', '.join(parts[:-1])} and {parts[-1]}"


def validate_password(value: Any, policy: PasswordPolicy | None = None) -> ValidationResult:
    """Validate ``value`` against ``policy``.

    A password below the minimum length fails with a length message. Otherwise
    every missing character class is listed in a single message.
    """

    policy = policy or PasswordPolicy()
    password = _as_text(value)
    if not password:
        return ValidationResult.fail("Password is required")
    if len(password) < policy.min_length:
        return ValidationResult.fail(f"Password must be at least {policy.min_length} characters")
    missing: list[str] = []
    if policy.require_uppercase and not any(ch.isupper() for ch in password):
        missing.append("one uppercase letter")
    if policy.require_lowercase and not any(ch.islower() for ch in password):
        missing.append("one lowercase letter")
    if policy.require_number and not any(ch in "0123456789" for ch in password):
        missing.append("one number")
    if policy.require_special_char and not any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in password):
        missing.append("one special character")
    if missing:
        return ValidationResult.fail(f"Password must contain at least {_join_requirements(missing)}")
    return ValidationResult.ok()


def validate_date_of_birth(
    value: Any,
    min_age: int = 13,
    max_age: int = 120,
    *,
    today: date | None = None,
) -> ValidationResult:
    """Require a real ``YYYY-MM-DD`` date whose age lies in ``[min_age, max_age]``."""

    today = today or date.today()
    if is_blank(value):
        return ValidationResult.fail("Date of birth is required")
    if isinstance(value, date):
        born: date | None = coerce_date(value)
    else:
        text = _as_text(value).strip()
        if not re.match(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$", text):
            return ValidationResult.fail("Please enter a valid date (YYYY-MM-DD)")
        born = parse_iso_date(text)
    if born is None:
        return ValidationResult.fail("Please enter a valid date")
    if born > today:
        return ValidationResult.fail("Date of birth cannot be in the future")
    age = compute_age(born, today)
    if age < min_age:
        return ValidationResult.fail(f"You must be at least {min_age} years old")
    if age > max_age:
        return ValidationResult.fail("Please enter a valid date of birth")
    return ValidationResult.ok()


def validate_year(
    value: Any,
    min_year: int = 1950,
    max_year: int | None = None,
    *,
    label: str = "Year",
    today: date | None = None,
) -> ValidationResult:
    """Require a four-digit year within ``[min_year, max_year]``."""

    text = _as_text(value).strip()
    if not text:
        return ValidationResult.fail(f"{label} is required")
    if not _FOUR_DIGIT_YEAR_RE.match(text):
        return ValidationResult.fail(f"{label} must be a valid 4-digit year")
    upper = max_year if max_year is not None else (today or date.today()).year
    year = int(text)
    if year < min_year or year > upper:
        return ValidationResult.fail(f"{label} must be between {min_year} and {upper}")
    return ValidationResult.ok()


def validate_end_year(
    end: Any,
    start: Any,
    *,
    currently: bool = False,
    min_year: int = 1950,
    today: date | None = None,
) -> ValidationResult:
    """Validate the end of a year range from the end field's point of view.

    The end year is not required while ``currently`` is set. The ordering
    check only runs when ``start`` is itself a valid year.
    """

    if currently:
        return ValidationResult.ok()
    result = validate_year(end, min_year, label="End year", today=today)
    if not result.is_valid:
        return result
    if validate_year(start, min_year, today=today).is_valid and int(_as_text(end)) < int(_as_text(start)):
        return ValidationResult.fail("End year must be after start year")
    return ValidationResult.ok()


def validate_year_range(
    start: Any,
    end: Any,
    *,
    currently: bool = False,
    min_year: int = 1950,
    today: date | None = None,
) -> ValidationResult:
    """Require ``end >= start``; ``end`` is optional while ``currently`` is set."""

    result = validate_year(start, min_year, label="Start year", today=today)
    if not result.is_valid:
        return result
    return validate_end_year(end, start, currently=currently, min_year=min_year, today=today)


def validate_past_date(value: Any, label: str = "Date", *, today: date | None = None) -> ValidationResult:
    """Require a real calendar date that is not after ``today``."""

    if is_blank(value):
        return ValidationResult.fail(f"{label} is required")
    parsed = coerce_date(value)
    if parsed is None:
        return ValidationResult.fail(f"Please enter a valid {label.lower()}")
    if parsed > (today or date.today()):
        return ValidationResult.fail(f"{label} cannot be in the future")
    return ValidationResult.ok()


def validate_end_date(
    end: Any,
    start: Any,
    *,
    currently: bool = False,
    today: date | None = None,
) -> ValidationResult:
    """Validate the end of a date range from the end field's point of view."""

    if currently:
        return ValidationResult.ok()
    result = validate_past_date(end, "End date", today=today)
    if not result.is_valid:
        return result
    start_date = coerce_date(start)
    end_date = coerce_date(end)
    if start_date is not None and end_date is not None and end_date < start_date:
        return ValidationResult.fail("End date must be after start date")
    return ValidationResult.ok()


def validate_date_range(
    start: Any,
    end: Any,
    *,
    currently: bool = False,
    today: date | None = None,
) -> ValidationResult:
    """Require ``end >= start``; ``end`` is optional while ``currently`` is set."""

    result = validate_past_date(start, "Start date", today=today)
    if not result.is_valid:
        return result
    return validate_end_date(end, start, currently=currently, today=today)


def validate_event_date(value: Any, *, today: date | None = None) -> ValidationResult:
    """Require an event date that is today or later."""

    if is_blank(value):
        return ValidationResult.fail("Event date is required")
    parsed = coerce_date(value)
    if parsed is None:
        return ValidationResult.fail("Please enter a valid event date")
    if parsed < (today or date.today()):
        return ValidationResult.fail("Event date cannot be in the past")
    return ValidationResult.ok()


def validate_start_time(value: Any) -> ValidationResult:
    if is_blank(value) or coerce_time(value) is None:
        return ValidationResult.fail("Start time is required")
    return ValidationResult.ok()


def validate_end_time(end: Any, start: Any) -> ValidationResult:
    """Require an end time strictly after ``start`` (minute resolution)."""

    end_time = None if is_blank(end) else coerce_time(end)
    if end_time is None:
        return ValidationResult.fail("End time is required")
    start_time = None if is_blank(start) else coerce_time(start)
    if start_time is not None and (end_time.hour, end_time.minute) <= (start_time.hour, start_time.minute):
        return ValidationResult.fail("End time must be after start time")
    return ValidationResult.ok()


def validate_time_range(start: Any, end: Any) -> ValidationResult:
    """Require both times and an end strictly after the start."""

    result = validate_start_time(start)
    if not result.is_valid:
        return result
    return validate_end_time(end, start)


def validate_selection(values: Any, message: str = "Please make a selection") -> ValidationResult:
    """Require a non-empty selection (a chosen id or a non-empty collection)."""

    if is_blank(values):
        return ValidationResult.fail(message)
    return ValidationResult.ok()


def validate_choice(value: Any, options: Collection[str], label: str = "option") -> ValidationResult:
    """Require ``value`` to be one of ``options``."""

    if value not in options:
        return ValidationResult.fail(f"Please choose a valid {label}")
    return ValidationResult.ok()


__all__ = [
    "PASSWORD_SPECIAL_CHARACTERS",
    "PasswordPolicy",
    "ValidationResult",
    "clean_mobile_number",
    "format_mobile_number",
    "is_blank",
    "validate_date_of_birth",
    "validate_date_range",
    "validate_email",
    "validate_choice",
    "validate_email_or_phone",
    "validate_end_date",
    "validate_end_time",
    "validate_end_year",
    "validate_event_date",
    "validate_event_name",
    "validate_host_name",
    "validate_max_length",
    "validate_mobile_number",
    "validate_name",
    "validate_password",
    "validate_past_date",
    "validate_required",
    "validate_selection",
    "validate_start_time",
    "validate_text_length",
    "validate_time_range",
    "validate_year",
    "validate_year_range",
]
