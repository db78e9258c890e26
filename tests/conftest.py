from pathlib import Path
import sys
from dataclasses import dataclass
from datetime import date
from itertools import count

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture
def entry_ids():
    """Deterministic entry id factory: ``e1``, ``e2``, ..."""

    counter = count(1)
    return lambda: f"e{next(counter)}"


@pytest.fixture
def today() -> date:
    return date.today()


class RecordingSubmitter:
    """Submission collaborator that records payloads and replays scripted results."""

    def __init__(self, *results: object) -> None:
        self.payloads: list[dict[str, object]] = []
        self._results = list(results)

    def __call__(self, payload: dict[str, object]) -> object:
        self.payloads.append(payload)
        if self._results:
            result = self._results.pop(0)
            if isinstance(result, BaseException):
                raise result
            return result
        return None


@pytest.fixture
def submitter() -> RecordingSubmitter:
    return RecordingSubmitter()


@pytest.fixture
def make_submitter():
    """Return the recording submitter class for scripted outcomes."""

    return RecordingSubmitter
