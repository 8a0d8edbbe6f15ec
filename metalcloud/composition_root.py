"""
Composition Root

Architectural Intent:
- Dependency injection composition root for metalcloud
- Single place where the directory adapter, resolver and service are wired
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- The telemetry exporter is built here but initialized by the caller, since
  initialization is async
"""

from dataclasses import dataclass
from typing import Optional, Union

from metalcloud.application.use_cases.instance_resolver import InstanceResolver
from metalcloud.application.use_cases.instances_service import InstancesService
from metalcloud.infrastructure.adapters.in_memory_directory import (
    InMemoryDeviceDirectory,
)
from metalcloud.infrastructure.adapters.metal_api_directory import MetalAPIDirectory
from metalcloud.infrastructure.config import MetalCloudConfig
from metalcloud.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter


@dataclass
class MetalCloudContainer:
    """DI container holding all wired dependencies."""

    config: MetalCloudConfig
    directory: Union[MetalAPIDirectory, InMemoryDeviceDirectory]
    telemetry: OTELExporter
    resolver: InstanceResolver
    instances: InstancesService

    async def aclose(self) -> None:
        if isinstance(self.directory, MetalAPIDirectory):
            await self.directory.aclose()


def create_directory(
    config: MetalCloudConfig,
) -> Union[MetalAPIDirectory, InMemoryDeviceDirectory]:
    backend = config.directory.backend
    if backend == "memory":
        if config.directory.fixtures_path:
            return InMemoryDeviceDirectory.from_file(config.directory.fixtures_path)
        return InMemoryDeviceDirectory()
    if backend == "api":
        return MetalAPIDirectory(
            api_key=config.api.key,
            project_id=config.api.project_id,
            base_url=config.api.url,
            timeout=config.api.timeout_seconds,
        )
    raise ValueError(f"Unknown directory backend: {backend!r}")


def create_container(config: Optional[MetalCloudConfig] = None) -> MetalCloudContainer:
    """Create and wire all dependencies."""
    config = config or MetalCloudConfig()

    directory = create_directory(config)
    telemetry = OTELExporter(
        OTELConfig(
            endpoint=config.telemetry.endpoint,
            insecure=config.telemetry.insecure,
        )
    )
    resolver = InstanceResolver(directory)
    instances = InstancesService(resolver, telemetry=telemetry)

    return MetalCloudContainer(
        config=config,
        directory=directory,
        telemetry=telemetry,
        resolver=resolver,
        instances=instances,
    )
