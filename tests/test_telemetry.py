"""Tests for telemetry bootstrap and span helpers."""

from __future__ import annotations

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from core.errors import SubmissionError
from utils import telemetry
from wizard.flows.signup import create_signup_wizard


@pytest.fixture
def spans(monkeypatch):
    """Route wizard spans to an in-memory exporter."""

    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(telemetry, "get_tracer", lambda: provider.get_tracer(telemetry.TRACER_NAME))
    return exporter


def test_setup_tracing_skips_without_endpoint(monkeypatch) -> None:
    """No collector endpoint means tracing is not initialised."""

    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    monkeypatch.setenv("OTEL_TRACES_ENABLED", "1")
    monkeypatch.setattr(telemetry, "_INITIALISED", False)

    calls: list[object] = []
    monkeypatch.setattr(trace, "set_tracer_provider", calls.append)

    assert telemetry.setup_tracing(force=True) is False
    assert calls == []


def test_setup_tracing_respects_disable_flag(monkeypatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_ENABLED", "off")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")
    monkeypatch.setattr(telemetry, "_INITIALISED", False)

    assert telemetry.setup_tracing(force=True) is False


def test_setup_tracing_installs_provider_with_exporter(monkeypatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_ENABLED", "1")
    monkeypatch.setenv("OTEL_SERVICE_NAME", "wizard-tests")
    monkeypatch.setattr(telemetry, "_INITIALISED", False)
    installed: list[TracerProvider] = []
    monkeypatch.setattr(trace, "set_tracer_provider", installed.append)

    assert telemetry.setup_tracing(force=True, exporter=InMemorySpanExporter()) is True

    assert len(installed) == 1
    assert installed[0].resource.attributes["service.name"] == "wizard-tests"


def test_otlp_config_parses_headers_and_timeout(monkeypatch) -> None:
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_HEADERS", "api-key=abc, broken ,x=1")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_TIMEOUT", "2.5")

    config = telemetry.build_otlp_config()

    assert config is not None
    assert config.headers == {"api-key": "abc", "x": "1"}
    assert config.timeout == 2
    assert config.protocol == "http/protobuf"


def test_successful_submission_records_span(spans) -> None:
    controller = create_signup_wizard(submitter=lambda payload: None, wizard_id="span-1")
    controller.set_field("name", "Al")
    controller.set_field("email", "al@mail.com")
    controller.set_field("mobile_number", "5551234567")
    controller.set_field("password", "Passw0rd!")

    controller.advance()

    (span,) = spans.get_finished_spans()
    assert span.name == "wizard.submit"
    assert span.attributes["wizard.flow"] == "signup"
    assert span.attributes["wizard.wizard_id"] == "span-1"
    assert span.status.status_code is not StatusCode.ERROR


def test_failed_submission_marks_span_as_error(spans) -> None:
    def _reject(payload):
        raise SubmissionError("Email already registered")

    controller = create_signup_wizard(submitter=_reject)
    controller.set_field("name", "Al")
    controller.set_field("email", "al@mail.com")
    controller.set_field("mobile_number", "5551234567")
    controller.set_field("password", "Passw0rd!")

    controller.advance()

    (span,) = spans.get_finished_spans()
    assert span.status.status_code is StatusCode.ERROR
    assert controller.submission_error == "Email already registered"
