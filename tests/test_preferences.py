from __future__ import annotations

import json
from pathlib import Path

import streamlit as st

import config
from state.preferences import (
    InMemoryPreferences,
    JsonFilePreferences,
    PreferencesRepository,
    SessionStatePreferences,
)


def test_in_memory_preferences_store_tuples_as_lists() -> None:
    prefs = InMemoryPreferences()
    prefs.set("@kalon_selected_friends", ("a", "b"))
    assert prefs.get("@kalon_selected_friends") == ["a", "b"]
    prefs.remove("@kalon_selected_friends")
    assert prefs.get("@kalon_selected_friends", "missing") == "missing"
    assert isinstance(prefs, PreferencesRepository)


def test_session_state_preferences_default_to_streamlit_state() -> None:
    prefs = SessionStatePreferences()
    prefs.set("theme", "dark")

    assert st.session_state["wizard.preferences"] == {"theme": "dark"}
    assert SessionStatePreferences().get("theme") == "dark"


def test_session_state_preferences_accept_any_mapping() -> None:
    state: dict[str, object] = {}
    prefs = SessionStatePreferences(state, namespace="prefs")
    prefs.set("a", 1)
    prefs.remove("a")
    prefs.remove("never-set")
    assert state == {"prefs": {}}


def test_json_file_preferences_persist(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    prefs = JsonFilePreferences(path)
    prefs.set("@kalon_selected_friends", ("f1",))

    assert json.loads(path.read_text(encoding="utf-8")) == {"@kalon_selected_friends": ["f1"]}
    assert JsonFilePreferences(path).get("@kalon_selected_friends") == ["f1"]

    prefs.remove("@kalon_selected_friends")
    assert prefs.get("@kalon_selected_friends") is None


def test_json_file_preferences_ignore_corrupt_files(tmp_path: Path, caplog) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    prefs = JsonFilePreferences(path)

    with caplog.at_level("WARNING"):
        assert prefs.get("anything") is None
    assert "Ignoring unreadable preferences file" in caplog.text

    prefs.set("k", "v")
    assert prefs.get("k") == "v"


def test_json_file_preferences_default_to_configured_path(monkeypatch, tmp_path: Path) -> None:
    target = tmp_path / "prefs.json"
    monkeypatch.setattr(config, "PREFERENCES_PATH", target)

    prefs = JsonFilePreferences()
    prefs.set("@kalon_selected_friends", ["f2"])

    assert prefs.path == target
    assert json.loads(target.read_text(encoding="utf-8")) == {"@kalon_selected_friends": ["f2"]}
