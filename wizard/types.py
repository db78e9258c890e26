"""Shared type aliases for the wizard package."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from typing import Union

from core.validators import ValidationResult

FieldValue = Union[str, bool, date, datetime, time, tuple[str, ...], None]
FieldScope = Mapping[str, FieldValue]

# Validators see the field value plus its scope: the top-level values for plain
# fields, or the entry's own fields for repeatable sections.
FieldValidator = Callable[[FieldValue, FieldScope], ValidationResult]
ScopePredicate = Callable[[FieldScope], bool]


__all__ = [
    "FieldScope",
    "FieldValidator",
    "FieldValue",
    "ScopePredicate",
]
