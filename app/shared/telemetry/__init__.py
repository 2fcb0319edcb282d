"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from app.shared.telemetry.logging import RequestIDFilter, setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry
from app.shared.telemetry.tracing import add_span_attributes, set_span_error, traced

__all__ = [
    "RequestIDFilter",
    "TelemetryConfig",
    "add_span_attributes",
    "get_telemetry",
    "set_span_error",
    "set_telemetry",
    "setup_logging",
    "traced",
]
