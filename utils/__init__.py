"""Logging and tracing helpers shared by the wizard packages."""

from __future__ import annotations

from .logging_context import configure_logging, log_context
from .telemetry import setup_tracing

__all__ = ["configure_logging", "log_context", "setup_tracing"]
