"""Preference stores shared across wizard runs."""

from .preferences import (
    InMemoryPreferences,
    JsonFilePreferences,
    PreferencesRepository,
    SessionStatePreferences,
)

__all__ = [
    "InMemoryPreferences",
    "JsonFilePreferences",
    "PreferencesRepository",
    "SessionStatePreferences",
]
