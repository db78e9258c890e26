from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

import config

_DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [wizard=%(wizard_id)s flow=%(flow)s step=%(wizard_step)s] "
    "%(name)s: %(message)s"
)

_wizard_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("wizard_id", default="-")
_flow_var: contextvars.ContextVar[str] = contextvars.ContextVar("flow", default="-")
_wizard_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("wizard_step", default="-")
_DEFAULT_RECORD_FACTORY = logging.getLogRecordFactory()
_RECORD_FACTORY_INSTALLED = False


def _apply_context(record: logging.LogRecord) -> None:
    record.wizard_id = _wizard_id_var.get("-")
    record.flow = _flow_var.get("-")
    record.wizard_step = _wizard_step_var.get("-")


class _ContextFilter(logging.Filter):
    """Inject contextual fields into log records for consistent formatting."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _apply_context(record)
        return True


def _coerce(value: object | None) -> str:
    if value is None:
        return "-"
    stripped = str(value).strip()
    return stripped or "-"


def configure_logging(*, level: int | str | None = None) -> None:
    """Ensure the root logger formats records with wizard metadata.

    ``level`` defaults to ``config.LOG_LEVEL``.
    """

    if level is None:
        level = config.LOG_LEVEL
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_LOG_FORMAT)
        root = logging.getLogger()
    for handler in root.handlers:
        formatter = handler.formatter or logging.Formatter(_DEFAULT_LOG_FORMAT)
        handler.setFormatter(formatter)
    has_filter = any(isinstance(flt, _ContextFilter) for flt in root.filters)
    if not has_filter:
        root.addFilter(_ContextFilter())
    global _RECORD_FACTORY_INSTALLED
    if not _RECORD_FACTORY_INSTALLED:
        default_factory = _DEFAULT_RECORD_FACTORY

        def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
            record = default_factory(*args, **kwargs)
            _apply_context(record)
            return record

        logging.setLogRecordFactory(_record_factory)
        _RECORD_FACTORY_INSTALLED = True


def set_wizard_id(wizard_id: str | None) -> None:
    """Bind a wizard instance identifier for subsequent log records."""

    configure_logging()
    _wizard_id_var.set(_coerce(wizard_id))


def set_flow(flow: str | None) -> None:
    """Bind the active flow key to the logging context."""

    _flow_var.set(_coerce(flow))


def set_wizard_step(step: object | None) -> None:
    """Bind the current wizard step to the logging context."""

    _wizard_step_var.set(_coerce(step))


@contextmanager
def log_context(
    *,
    wizard_id: str | None = None,
    flow: str | None = None,
    wizard_step: object | None = None,
) -> Iterator[None]:
    """Temporarily override logging context variables."""

    tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []
    if wizard_id is not None:
        tokens.append((_wizard_id_var, _wizard_id_var.set(_coerce(wizard_id))))
    if flow is not None:
        tokens.append((_flow_var, _flow_var.set(_coerce(flow))))
    if wizard_step is not None:
        tokens.append((_wizard_step_var, _wizard_step_var.set(_coerce(wizard_step))))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def current_context() -> dict[str, str]:
    """Return the active logging context values."""

    return {
        "wizard_id": _wizard_id_var.get("-"),
        "flow": _flow_var.get("-"),
        "wizard_step": _wizard_step_var.get("-"),
    }


__all__ = [
    "configure_logging",
    "current_context",
    "log_context",
    "set_flow",
    "set_wizard_id",
    "set_wizard_step",
]
