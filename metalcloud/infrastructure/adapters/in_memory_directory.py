"""
In-Memory Device Directory

Architectural Intent:
- Implements DeviceDirectoryPort over a dict, so the resolver can be exercised
  in tests and offline CLI runs with zero cloud credentials
- create_device/update_device stand in for the provider backend filling in
  devices; nothing in the resolver path calls them

Design Decisions:
- Registry keyed by DeviceKey, insertion ordered, so find_by_name returns
  the first device created with a given hostname
- Fixture files hold a JSON list of device objects in the provider API shape
"""

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

from metalcloud.domain.entities.device import (
    DeviceRecord,
    DeviceState,
    Facility,
    Metro,
    NetworkAddress,
    Plan,
)
from metalcloud.domain.value_objects.provider_id import DeviceKey

logger = logging.getLogger(__name__)


class InMemoryDeviceDirectory:
    """
    Device directory backed by process memory.
    """

    def __init__(self, devices: Optional[Iterable[DeviceRecord]] = None) -> None:
        self._devices: dict[DeviceKey, DeviceRecord] = {}
        for device in devices or ():
            self.add(device)

    @classmethod
    def from_file(cls, path: str) -> "InMemoryDeviceDirectory":
        """Load devices from a JSON fixture file."""
        with open(Path(path)) as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("devices", [])
        directory = cls(DeviceRecord.from_api(item) for item in payload)
        logger.info("Loaded %d device(s) from %s", len(directory), path)
        return directory

    def __len__(self) -> int:
        return len(self._devices)

    # ------------------------------------------------------------------
    # Backend simulation
    # ------------------------------------------------------------------

    def add(self, device: DeviceRecord) -> DeviceRecord:
        self._devices[device.id] = device
        return device

    def create_device(
        self,
        hostname: str,
        plan: str,
        facility: str,
        metro: Optional[str] = None,
        state: DeviceState = DeviceState.ACTIVE,
        network_addresses: Iterable[NetworkAddress] = (),
    ) -> DeviceRecord:
        """Create a device with a fresh random ID."""
        device = DeviceRecord(
            id=DeviceKey(str(uuid.uuid4())),
            hostname=hostname,
            plan=Plan(slug=plan),
            facility=Facility(code=facility, metro=Metro(metro) if metro else None),
            state=state,
            network_addresses=tuple(network_addresses),
        )
        logger.debug("Created device %s (hostname=%s)", device.id, hostname)
        return self.add(device)

    def update_device(self, key: DeviceKey, **changes) -> DeviceRecord:
        """Replace fields of an existing device, e.g. ``state=DeviceState.INACTIVE``."""
        if key not in self._devices:
            raise KeyError(f"unknown device {key}")
        if "network_addresses" in changes:
            changes["network_addresses"] = tuple(changes["network_addresses"])
        self._devices[key] = replace(self._devices[key], **changes)
        return self._devices[key]

    # ------------------------------------------------------------------
    # DeviceDirectoryPort implementation
    # ------------------------------------------------------------------

    async def find_by_key(self, key: DeviceKey) -> Optional[DeviceRecord]:
        return self._devices.get(key)

    async def find_by_name(self, name: str) -> Optional[DeviceRecord]:
        for device in self._devices.values():
            if device.hostname == name:
                return device
        return None
