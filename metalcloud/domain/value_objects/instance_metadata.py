"""
Instance Metadata Value Objects

Architectural Intent:
- The externally visible result of resolving a node
- Derived on every call and never stored
- Frozen with tuple fields so equal inputs give equal (and hashable) results
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeAddressType(Enum):
    HOSTNAME = "Hostname"
    INTERNAL_IP = "InternalIP"
    EXTERNAL_IP = "ExternalIP"


@dataclass(frozen=True)
class NodeAddress:
    type: NodeAddressType
    address: str

    def __str__(self) -> str:
        return f"{self.type.value}:{self.address}"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "address": self.address}


@dataclass(frozen=True)
class InstanceMetadata:
    provider_id: str
    instance_type: str
    node_addresses: tuple[NodeAddress, ...] = ()
    region: str = ""
    zone: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "providerID": self.provider_id,
            "instanceType": self.instance_type,
            "nodeAddresses": [a.to_dict() for a in self.node_addresses],
            "region": self.region,
            "zone": self.zone,
        }
