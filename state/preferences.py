"""Key-value preference stores injected into wizard controllers.

Flows bind some fields to preference keys (for example the invited friends of
a private event). The controller loads bound values when a wizard starts and
writes them through on every change.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, MutableMapping, Protocol, cast, runtime_checkable

import streamlit as st

import config

logger = logging.getLogger(__name__)

SESSION_NAMESPACE = "wizard.preferences"


@runtime_checkable
class PreferencesRepository(Protocol):
    """Minimal get/set/remove interface for persisted preferences."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


def _storable(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


class InMemoryPreferences:
    """Process-local preferences, mainly for tests and previews."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _storable(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SessionStatePreferences:
    """Preferences kept in ``st.session_state`` under one namespaced dict."""

    def __init__(
        self,
        session_state: MutableMapping[str, Any] | None = None,
        *,
        namespace: str = SESSION_NAMESPACE,
    ) -> None:
        self._session_state = cast(MutableMapping[str, Any], session_state if session_state is not None else st.session_state)
        self._namespace = namespace

    def _bucket(self) -> dict[str, Any]:
        bucket = self._session_state.get(self._namespace)
        if not isinstance(bucket, dict):
            bucket = {}
            self._session_state[self._namespace] = bucket
        return bucket

    def get(self, key: str, default: Any = None) -> Any:
        return self._bucket().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._bucket()[key] = _storable(value)

    def remove(self, key: str) -> None:
        self._bucket().pop(key, None)


class JsonFilePreferences:
    """Preferences stored as one JSON object on disk.

    An unreadable or malformed file is treated as empty and logged; the next
    write replaces it.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else config.PREFERENCES_PATH

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences file %s: expected a JSON object", self._path)
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2, default=str), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = _storable(value)
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


__all__ = [
    "InMemoryPreferences",
    "JsonFilePreferences",
    "PreferencesRepository",
    "SESSION_NAMESPACE",
    "SessionStatePreferences",
]
