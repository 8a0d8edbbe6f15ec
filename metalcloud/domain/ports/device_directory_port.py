"""
Device Directory Port

Architectural Intent:
- Port interface for the external device inventory
- Read-only: the resolver never creates, updates or deletes devices
- Implemented by the provider REST adapter and the in-memory directory

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Absence is a None result, never an exception
- Transport failures are raised as DirectoryError; cancellation is left to asyncio
"""

from typing import Optional, Protocol, runtime_checkable

from metalcloud.domain.entities.device import DeviceRecord
from metalcloud.domain.value_objects.provider_id import DeviceKey


@runtime_checkable
class DeviceDirectoryPort(Protocol):
    """Port for device lookups."""

    async def find_by_key(self, key: DeviceKey) -> Optional[DeviceRecord]:
        """Return the device with this ID, or None when there is none."""
        ...

    async def find_by_name(self, name: str) -> Optional[DeviceRecord]:
        """Return the device whose hostname equals ``name``, or None."""
        ...
