"""Per-field validation messages for a single wizard instance."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from core.validators import ValidationResult
from wizard.fields import ENTRY_KEY_SEPARATOR


class ErrorStore:
    """Map field keys to their last failing message.

    A key is present only while its field fails validation; storing an empty
    message removes the key.
    """

    def __init__(self) -> None:
        self._errors: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._errors.get(key)

    def has(self, key: str) -> bool:
        return key in self._errors

    def set(self, key: str, message: str | None) -> None:
        if message:
            self._errors[key] = message
        else:
            self._errors.pop(key, None)

    def apply(self, key: str, result: ValidationResult) -> None:
        """Store or clear ``key`` according to ``result``."""

        self.set(key, None if result.is_valid else result.error or "Invalid value")

    def discard(self, key: str) -> None:
        self._errors.pop(key, None)

    def discard_entry(self, entry_id: str) -> list[str]:
        """Drop every key scoped to ``entry_id`` and return the removed keys."""

        prefix = f"{entry_id}{ENTRY_KEY_SEPARATOR}"
        removed = [key for key in self._errors if key.startswith(prefix)]
        for key in removed:
            del self._errors[key]
        return removed

    def clear(self) -> None:
        self._errors.clear()

    @property
    def view(self) -> Mapping[str, str]:
        return MappingProxyType(self._errors)

    def snapshot(self) -> dict[str, str]:
        return dict(self._errors)

    def __len__(self) -> int:
        return len(self._errors)


__all__ = ["ErrorStore"]
