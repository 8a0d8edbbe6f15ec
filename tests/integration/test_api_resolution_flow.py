"""
Integration: InstancesService -> InstanceResolver -> MetalAPIDirectory.

A fake provider API (httpx.MockTransport) serves one project with two devices;
the full orchestrator contract is exercised over it.
"""

import uuid

import httpx
import pytest
import pytest_asyncio

from metalcloud.application.use_cases.instance_resolver import InstanceResolver
from metalcloud.application.use_cases.instances_service import InstancesService
from metalcloud.domain.exceptions import DirectoryError, InstanceNotFoundError
from metalcloud.domain.value_objects.node_descriptor import NodeDescriptor
from metalcloud.infrastructure.adapters.metal_api_directory import MetalAPIDirectory

PROJECT = "proj-1"
ACTIVE_ID = str(uuid.uuid4())
INACTIVE_ID = str(uuid.uuid4())

DEVICES = {
    ACTIVE_ID: {
        "id": ACTIVE_ID,
        "hostname": "node-a",
        "state": "active",
        "plan": {"slug": "c3.small.x86"},
        "facility": {"code": "ams1", "metro": {"code": "am"}},
        "ip_addresses": [
            {"address": "10.0.0.5", "address_family": 4, "public": False},
            {"address": "203.0.113.9", "address_family": 4, "public": True},
            {"address": "2604:1380::1", "address_family": 6, "public": True},
        ],
    },
    INACTIVE_ID: {
        "id": INACTIVE_ID,
        "hostname": "node-b",
        "state": "inactive",
        "plan": {"slug": "m3.large.x86"},
        "facility": {"code": "ewr1"},
        "ip_addresses": [],
    },
}


def _fake_api(request: httpx.Request) -> httpx.Response:
    path = request.url.path.removeprefix("/metal/v1")
    if path.startswith("/devices/"):
        device = DEVICES.get(path.rsplit("/", 1)[1])
        if device is None:
            return httpx.Response(404, json={"errors": ["Not found"]})
        return httpx.Response(200, json=device)
    if path == f"/projects/{PROJECT}/devices":
        return httpx.Response(
            200, json={"devices": list(DEVICES.values()), "meta": {"last_page": 1}}
        )
    return httpx.Response(500, json={"errors": ["unexpected path"]})


@pytest_asyncio.fixture
async def service():
    client = httpx.AsyncClient(
        base_url="https://api.test/metal/v1", transport=httpx.MockTransport(_fake_api)
    )
    directory = MetalAPIDirectory(project_id=PROJECT, client=client)
    yield InstancesService(InstanceResolver(directory))
    await directory.aclose()


class TestApiResolutionFlow:
    @pytest.mark.asyncio
    async def test_metadata_by_provider_id(self, service):
        md = await service.instance_metadata(
            NodeDescriptor(provider_id=f"packet://{ACTIVE_ID}", override_address="10.1.1.2")
        )
        assert md.provider_id == f"equinixmetal://{ACTIVE_ID}"
        assert [str(a) for a in md.node_addresses] == [
            "Hostname:node-a",
            "InternalIP:10.1.1.2",
            "InternalIP:10.0.0.5",
            "ExternalIP:203.0.113.9",
        ]
        assert (md.region, md.zone, md.instance_type) == ("am", "ams1", "c3.small.x86")

    @pytest.mark.asyncio
    async def test_metadata_by_name(self, service):
        md = await service.instance_metadata(NodeDescriptor(name="node-b"))
        assert md.provider_id == f"equinixmetal://{INACTIVE_ID}"
        assert md.region == ""
        assert md.zone == "ewr1"

    @pytest.mark.asyncio
    async def test_exists_and_shutdown(self, service):
        assert await service.instance_exists(NodeDescriptor(provider_id=ACTIVE_ID)) is True
        assert await service.instance_exists(NodeDescriptor(provider_id=str(uuid.uuid4()))) is False
        assert await service.instance_shutdown(NodeDescriptor(provider_id=ACTIVE_ID)) is False
        assert await service.instance_shutdown(NodeDescriptor(provider_id=INACTIVE_ID)) is True

    @pytest.mark.asyncio
    async def test_unknown_name(self, service):
        with pytest.raises(InstanceNotFoundError):
            await service.instance_metadata(NodeDescriptor(name="node-z"))

    @pytest.mark.asyncio
    async def test_directory_outage_surfaces(self):
        client = httpx.AsyncClient(
            base_url="https://api.test/metal/v1",
            transport=httpx.MockTransport(lambda r: httpx.Response(502, text="bad gateway")),
        )
        service = InstancesService(
            InstanceResolver(MetalAPIDirectory(project_id=PROJECT, client=client))
        )
        with pytest.raises(DirectoryError) as exc_info:
            await service.instance_exists(NodeDescriptor(provider_id=ACTIVE_ID))
        assert exc_info.value.operation == "exists"
        assert "502" in str(exc_info.value)
        await client.aclose()
