"""OpenTelemetry bootstrap and span helpers for wizard operations."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import (
    ALWAYS_OFF,
    ALWAYS_ON,
    ParentBased,
    Sampler,
    TraceIdRatioBased,
)
from opentelemetry.trace import Span, Status, StatusCode

LOGGER = logging.getLogger("form_wizard.telemetry")

TRACER_NAME = "form_wizard"
DEFAULT_SERVICE_NAME = "form-wizard"
_PROVIDER_MARKER = "_form_wizard_configured"

_INITIALISED = False


@dataclass(frozen=True)
class OtlpConfig:
    """Exporter settings read from the ``OTEL_EXPORTER_OTLP_*`` variables."""

    protocol: str
    endpoint: str
    headers: Mapping[str, str] | None = None
    timeout: int | None = None
    certificate_file: str | None = None
    insecure: bool | None = None


def _parse_headers(raw: str | None) -> Dict[str, str]:
    """Parse ``key=value`` pairs separated by commas."""

    headers: Dict[str, str] = {}
    if not raw:
        return headers
    for fragment in raw.split(","):
        key, separator, value = fragment.partition("=")
        key = key.strip()
        if not separator or not key:
            continue
        headers[key] = value.strip()
    return headers


def _coerce_ratio(raw: str, *, default: float) -> float:
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Invalid OTEL_TRACES_SAMPLER_ARG '%s'; using default %.2f", raw, default)
        return default
    return max(0.0, min(1.0, value))


def _build_sampler() -> Sampler:
    sampler_name = os.getenv("OTEL_TRACES_SAMPLER", "").strip().lower()
    ratio = _coerce_ratio(os.getenv("OTEL_TRACES_SAMPLER_ARG", "").strip(), default=1.0)

    if sampler_name in {"", "parentbased_traceidratio"}:
        return ParentBased(TraceIdRatioBased(ratio))
    if sampler_name == "traceidratio":
        return TraceIdRatioBased(ratio)
    if sampler_name == "always_on":
        return ALWAYS_ON
    if sampler_name == "always_off":
        return ALWAYS_OFF
    LOGGER.warning("Unknown OTEL_TRACES_SAMPLER '%s'; defaulting to parentbased_traceidratio", sampler_name)
    return ParentBased(TraceIdRatioBased(ratio))


def build_otlp_config() -> OtlpConfig | None:
    """Return exporter settings, or ``None`` when no endpoint is configured."""

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip()
    if not endpoint:
        return None

    timeout: Optional[int] = None
    timeout_raw = os.getenv("OTEL_EXPORTER_OTLP_TIMEOUT", "").strip()
    if timeout_raw:
        try:
            timeout = int(float(timeout_raw))
        except ValueError:
            LOGGER.warning("Invalid OTEL_EXPORTER_OTLP_TIMEOUT '%s'; ignoring", timeout_raw)

    insecure_flag = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "").strip().lower()
    return OtlpConfig(
        protocol=os.getenv("OTEL_EXPORTER_OTLP_PROTOCOL", "http/protobuf").strip().lower(),
        endpoint=endpoint,
        headers=_parse_headers(os.getenv("OTEL_EXPORTER_OTLP_HEADERS")) or None,
        timeout=timeout,
        certificate_file=os.getenv("OTEL_EXPORTER_OTLP_CERTIFICATE", "").strip() or None,
        insecure=True if insecure_flag in {"1", "true", "yes"} else None,
    )


def _create_otlp_exporter(config: OtlpConfig) -> SpanExporter:
    if config.protocol in {"grpc", "grpc/protobuf"}:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter as GrpcExporter

        return GrpcExporter(
            endpoint=config.endpoint,
            headers=tuple(config.headers.items()) if config.headers else None,
            timeout=config.timeout,
            insecure=config.insecure,
        )

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter as HttpExporter

    if config.protocol not in {"http", "http/protobuf"}:
        LOGGER.warning(
            "Unsupported OTEL_EXPORTER_OTLP_PROTOCOL '%s'; falling back to http/protobuf",
            config.protocol,
        )
    return HttpExporter(
        endpoint=config.endpoint,
        headers=dict(config.headers) if config.headers else None,
        timeout=config.timeout,
        certificate_file=config.certificate_file,
    )


def setup_tracing(*, force: bool = False, exporter: SpanExporter | None = None) -> bool:
    """Install a tracer provider when telemetry is enabled.

    Returns ``True`` when a provider was installed by this call. ``exporter``
    overrides the OTLP exporter built from the environment.
    """

    global _INITIALISED
    if _INITIALISED and not force:
        return False

    enabled_flag = os.getenv("OTEL_TRACES_ENABLED", "1").strip().lower()
    if enabled_flag in {"0", "false", "off"}:
        LOGGER.info("Telemetry disabled via OTEL_TRACES_ENABLED")
        return False

    if exporter is None:
        config = build_otlp_config()
        if config is None:
            LOGGER.debug("No OTLP endpoint configured; skipping telemetry bootstrap")
            return False
        exporter = _create_otlp_exporter(config)

    if not force and getattr(trace.get_tracer_provider(), _PROVIDER_MARKER, False):
        LOGGER.debug("Telemetry already initialised; skipping setup")
        return False

    service_name = os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)
    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name}),
        sampler=_build_sampler(),
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    setattr(provider, _PROVIDER_MARKER, True)
    trace.set_tracer_provider(provider)

    _INITIALISED = True
    LOGGER.info("OpenTelemetry tracing initialised for service '%s'", service_name)
    return True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


@contextmanager
def wizard_span(name: str, **attributes: object) -> Iterator[Span]:
    """Open a span named ``name`` and mark it failed when the body raises."""

    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(f"wizard.{key}", value if isinstance(value, (bool, int, float)) else str(value))
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise


__all__ = ["OtlpConfig", "build_otlp_config", "get_tracer", "setup_tracing", "wizard_span"]
