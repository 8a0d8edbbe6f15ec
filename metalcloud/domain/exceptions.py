"""
Domain Exceptions

Architectural Intent:
- Typed failures the orchestrator can classify without parsing messages
- Validation errors are raised before the device directory is contacted
- DirectoryError is the only error that originates outside this package

Hierarchy:
    MetalCloudError
     ├─ EmptyNodeNameError
     ├─ EmptyIdentifierError
     ├─ InvalidIdentifierError
     │   ├─ UnsupportedSchemeError
     │   └─ MalformedKeyError
     ├─ InstanceNotFoundError
     └─ DirectoryError
"""

from typing import Optional


class MetalCloudError(Exception):
    """Base class for every failure raised by metalcloud."""


class EmptyNodeNameError(MetalCloudError):
    def __init__(self) -> None:
        super().__init__("node name cannot be empty")


class EmptyIdentifierError(MetalCloudError):
    def __init__(self) -> None:
        super().__init__("providerID cannot be empty")


class InvalidIdentifierError(MetalCloudError):
    """A provider identifier that can never resolve, whatever the directory holds."""


class UnsupportedSchemeError(InvalidIdentifierError):
    def __init__(self, scheme: str, expected: str) -> None:
        self.scheme = scheme
        super().__init__(
            f"provider name from providerID should be {expected}, was {scheme}"
        )


class MalformedKeyError(InvalidIdentifierError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"{text} is not a valid UUID")


class InstanceNotFoundError(MetalCloudError):
    def __init__(self, lookup: str) -> None:
        self.lookup = lookup
        super().__init__(f"instance not found: {lookup}")


class DirectoryError(MetalCloudError):
    """Transport or server failure reported by a device directory."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        lookup: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.lookup = lookup
        super().__init__(message)
