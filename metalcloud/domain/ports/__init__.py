"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from metalcloud.domain.ports.device_directory_port import DeviceDirectoryPort
from metalcloud.domain.ports.telemetry_port import TelemetryPort

__all__ = [
    "DeviceDirectoryPort",
    "TelemetryPort",
]
