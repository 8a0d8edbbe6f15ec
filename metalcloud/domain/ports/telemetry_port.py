"""
Telemetry Port

Architectural Intent:
- What the application layer needs from an observability backend
- Implemented by OTELExporter
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class TelemetryPort(Protocol):
    def record_lookup(self, operation: str, outcome: str) -> None: ...

    def start_span(
        self, name: str, attributes: Optional[dict[str, str]] = None
    ) -> Optional[Any]: ...

    def end_span(self, span: Any, error: Optional[BaseException] = None) -> None: ...
