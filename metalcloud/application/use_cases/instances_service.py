"""
Instances Service

Architectural Intent:
- The orchestrator-facing instance contract: metadata, exists, shutdown
- Composes InstanceResolver with the metadata projector
- Records one telemetry data point per call; errors pass through unchanged
"""

from typing import Awaitable, Optional, TypeVar

from metalcloud.application.use_cases.instance_resolver import InstanceResolver
from metalcloud.domain.ports.telemetry_port import TelemetryPort
from metalcloud.domain.services.metadata_projector import project_metadata
from metalcloud.domain.value_objects.instance_metadata import InstanceMetadata
from metalcloud.domain.value_objects.node_descriptor import NodeDescriptor

T = TypeVar("T")


class InstancesService:
    def __init__(
        self,
        resolver: InstanceResolver,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.resolver = resolver
        self.telemetry = telemetry

    async def instance_metadata(self, node: NodeDescriptor) -> InstanceMetadata:
        return await self._observe("instance_metadata", node, self._metadata(node))

    async def instance_exists(self, node: NodeDescriptor) -> bool:
        return await self._observe(
            "instance_exists", node, self.resolver.exists(node)
        )

    async def instance_shutdown(self, node: NodeDescriptor) -> bool:
        return await self._observe(
            "instance_shutdown", node, self.resolver.shutdown_state(node)
        )

    async def _metadata(self, node: NodeDescriptor) -> InstanceMetadata:
        record = await self.resolver.resolve(node)
        return project_metadata(record, node)

    async def _observe(
        self, operation: str, node: NodeDescriptor, call: Awaitable[T]
    ) -> T:
        if self.telemetry is None:
            return await call

        span = self.telemetry.start_span(
            f"metalcloud.{operation}", attributes={"node": str(node)}
        )
        try:
            result = await call
        except BaseException as e:
            # includes asyncio.CancelledError, so the span is always closed
            self.telemetry.record_lookup(operation, type(e).__name__)
            self.telemetry.end_span(span, error=e)
            raise
        self.telemetry.record_lookup(operation, "ok")
        self.telemetry.end_span(span)
        return result
