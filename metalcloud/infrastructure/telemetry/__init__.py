"""
metalcloud Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability
- Lookup metrics and per-call tracing spans
"""

from metalcloud.infrastructure.telemetry.otel_exporter import (
    LOOKUP_METRIC,
    OTELExporter,
    OTELConfig,
)

__all__ = [
    "LOOKUP_METRIC",
    "OTELExporter",
    "OTELConfig",
]
