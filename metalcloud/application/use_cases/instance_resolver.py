"""
Instance Resolver Use Case

Architectural Intent:
- Matches a NodeDescriptor to exactly one device in the directory
- The providerID always wins over the node name; the name is consulted only
  when no providerID is set, never after a providerID lookup fails
- Holds no mutable state, so one instance serves concurrent callers
- No caching and no retries: every call is one round trip to the directory

Error semantics differ per operation:
- resolve / shutdown_state: an unmatched, well-formed lookup raises
  InstanceNotFoundError
- exists: an unmatched, well-formed providerID returns False; "device is gone"
  must stay distinguishable from "identifier is broken"
"""

import logging
from typing import Awaitable, Optional

from metalcloud.domain.entities.device import DeviceRecord
from metalcloud.domain.exceptions import (
    DirectoryError,
    EmptyNodeNameError,
    InstanceNotFoundError,
)
from metalcloud.domain.ports.device_directory_port import DeviceDirectoryPort
from metalcloud.domain.services.identifier_parser import parse_provider_id
from metalcloud.domain.value_objects.node_descriptor import NodeDescriptor

logger = logging.getLogger(__name__)


class InstanceResolver:
    def __init__(self, directory: DeviceDirectoryPort) -> None:
        self.directory = directory

    async def resolve(self, node: NodeDescriptor) -> DeviceRecord:
        """Return the device backing ``node``."""
        return await self._resolve("resolve", node)

    async def exists(self, node: NodeDescriptor) -> bool:
        """
        Report whether the device named by ``node.provider_id`` exists.

        An empty providerID raises EmptyIdentifierError; the node name is
        never used here.
        """
        provider_id = parse_provider_id(node.provider_id)
        record = await self._lookup(
            "exists", str(provider_id.key), self.directory.find_by_key(provider_id.key)
        )
        if record is None:
            logger.info(
                "Device %s no longer exists",
                provider_id.key,
                extra={"operation": "exists", "lookup": str(provider_id.key)},
            )
            return False
        return True

    async def shutdown_state(self, node: NodeDescriptor) -> bool:
        """Return True only when the device state is exactly ``inactive``."""
        record = await self._resolve("shutdown_state", node)
        return record.is_inactive

    async def _resolve(self, operation: str, node: NodeDescriptor) -> DeviceRecord:
        if node.provider_id:
            provider_id = parse_provider_id(node.provider_id)
            if provider_id.is_legacy:
                logger.debug(
                    "Node %s uses legacy providerID scheme %r",
                    node.name,
                    provider_id.scheme,
                )
            lookup = str(provider_id.key)
            record = await self._lookup(
                operation, lookup, self.directory.find_by_key(provider_id.key)
            )
        else:
            if not node.name:
                raise EmptyNodeNameError()
            lookup = node.name
            record = await self._lookup(
                operation, lookup, self.directory.find_by_name(node.name)
            )

        if record is None:
            logger.info(
                "%s: no device matches %s",
                operation,
                lookup,
                extra={"operation": operation, "lookup": lookup},
            )
            raise InstanceNotFoundError(lookup)
        return record

    async def _lookup(
        self,
        operation: str,
        lookup: str,
        query: Awaitable[Optional[DeviceRecord]],
    ) -> Optional[DeviceRecord]:
        logger.debug("%s: querying device directory for %s", operation, lookup)
        try:
            return await query
        except DirectoryError as e:
            raise DirectoryError(
                f"{operation} {lookup}: {e}", operation=operation, lookup=lookup
            ) from e
