"""
Device Module

Architectural Intent:
- Read-only snapshot of a device as the directory reported it
- Owned by the device directory; held only for the duration of one resolution
- DeviceState is a closed enumeration with an UNKNOWN member so new provider
  states never match "inactive" by accident
- from_api()/to_api() translate the provider REST payload shape
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from metalcloud.domain.value_objects.provider_id import DeviceKey


class DeviceState(Enum):
    QUEUED = "queued"
    PROVISIONING = "provisioning"
    DEPROVISIONING = "deprovisioning"
    REINSTALLING = "reinstalling"
    ACTIVE = "active"
    INACTIVE = "inactive"
    FAILED = "failed"
    POWERING_ON = "powering_on"
    POWERING_OFF = "powering_off"
    DELETED = "deleted"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> DeviceState:
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.UNKNOWN


class AddressFamily(Enum):
    V4 = 4
    V6 = 6


class AddressScope(Enum):
    PRIVATE = "private"
    PUBLIC = "public"


@dataclass(frozen=True)
class NetworkAddress:
    address: str
    family: AddressFamily = AddressFamily.V4
    scope: AddressScope = AddressScope.PRIVATE

    @staticmethod
    def from_api(payload: Mapping[str, Any]) -> NetworkAddress:
        return NetworkAddress(
            address=payload["address"],
            family=AddressFamily(int(payload.get("address_family", 4))),
            scope=AddressScope.PUBLIC if payload.get("public") else AddressScope.PRIVATE,
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "address_family": self.family.value,
            "public": self.scope is AddressScope.PUBLIC,
        }


@dataclass(frozen=True)
class Plan:
    slug: str


@dataclass(frozen=True)
class Metro:
    code: str


@dataclass(frozen=True)
class Facility:
    code: str
    metro: Optional[Metro] = None


@dataclass(frozen=True)
class DeviceRecord:
    id: DeviceKey
    hostname: str
    plan: Plan
    facility: Facility
    state: DeviceState = DeviceState.ACTIVE
    network_addresses: tuple[NetworkAddress, ...] = ()

    @property
    def is_inactive(self) -> bool:
        return self.state is DeviceState.INACTIVE

    @staticmethod
    def from_api(payload: Mapping[str, Any]) -> DeviceRecord:
        """Decode a device object as returned by ``GET /devices/{id}``."""
        facility = payload.get("facility") or {}
        metro = facility.get("metro")
        return DeviceRecord(
            id=DeviceKey(payload["id"]),
            hostname=payload.get("hostname") or "",
            plan=Plan(slug=(payload.get("plan") or {}).get("slug") or ""),
            facility=Facility(
                code=facility.get("code") or "",
                metro=Metro(code=metro.get("code") or "") if metro else None,
            ),
            state=DeviceState.parse(payload.get("state")),
            network_addresses=tuple(
                NetworkAddress.from_api(a) for a in payload.get("ip_addresses") or []
            ),
        )

    def to_api(self) -> dict[str, Any]:
        facility: dict[str, Any] = {"code": self.facility.code}
        if self.facility.metro is not None:
            facility["metro"] = {"code": self.facility.metro.code}
        return {
            "id": str(self.id),
            "hostname": self.hostname,
            "state": self.state.value,
            "plan": {"slug": self.plan.slug},
            "facility": facility,
            "ip_addresses": [a.to_api() for a in self.network_addresses],
        }
