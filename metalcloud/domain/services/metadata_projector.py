"""
Metadata Projector

Architectural Intent:
- Derives node addresses, instance type and topology from a DeviceRecord
- Pure: no directory access, no failure path for a well-formed record
- The outward providerID is always rendered under the current scheme

Address order:
1. Hostname
2. The operator-provided node IP (InternalIP), when annotated
3. Directory addresses in directory order: private v4 -> InternalIP,
   public v4 -> ExternalIP. IPv6 addresses are not reported.
"""

from metalcloud.domain.entities.device import (
    AddressFamily,
    AddressScope,
    DeviceRecord,
)
from metalcloud.domain.value_objects.instance_metadata import (
    InstanceMetadata,
    NodeAddress,
    NodeAddressType,
)
from metalcloud.domain.value_objects.node_descriptor import NodeDescriptor
from metalcloud.domain.value_objects.provider_id import canonical_provider_id

_IPV4_ADDRESS_TYPES = {
    AddressScope.PRIVATE: NodeAddressType.INTERNAL_IP,
    AddressScope.PUBLIC: NodeAddressType.EXTERNAL_IP,
}


def node_addresses(
    record: DeviceRecord, node: NodeDescriptor
) -> tuple[NodeAddress, ...]:
    addresses = [NodeAddress(NodeAddressType.HOSTNAME, record.hostname)]

    if node.override_address:
        addresses.append(
            NodeAddress(NodeAddressType.INTERNAL_IP, node.override_address)
        )

    for network in record.network_addresses:
        if network.family is not AddressFamily.V4:
            continue
        addresses.append(NodeAddress(_IPV4_ADDRESS_TYPES[network.scope], network.address))

    return tuple(addresses)


def project_metadata(record: DeviceRecord, node: NodeDescriptor) -> InstanceMetadata:
    metro = record.facility.metro
    return InstanceMetadata(
        provider_id=canonical_provider_id(record.id),
        instance_type=record.plan.slug,
        node_addresses=node_addresses(record, node),
        region=metro.code if metro else "",
        zone=record.facility.code,
    )
