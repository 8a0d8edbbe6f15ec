"""Global test configuration.

Shared fixtures: an in-memory device directory and a populated device.
"""

import pytest

from metalcloud.domain.entities.device import (
    AddressFamily,
    AddressScope,
    NetworkAddress,
)
from metalcloud.infrastructure.adapters.in_memory_directory import (
    InMemoryDeviceDirectory,
)


@pytest.fixture
def directory():
    return InMemoryDeviceDirectory()


@pytest.fixture
def device(directory):
    """node-a in ams1/am with private v4, public v4 and public v6 addresses."""
    return directory.create_device(
        hostname="node-a",
        plan="c3.small.x86",
        facility="ams1",
        metro="am",
        network_addresses=[
            NetworkAddress("10.0.0.5", AddressFamily.V4, AddressScope.PRIVATE),
            NetworkAddress("203.0.113.9", AddressFamily.V4, AddressScope.PUBLIC),
            NetworkAddress("2604:1380::1", AddressFamily.V6, AddressScope.PUBLIC),
        ],
    )
