"""Tests for the in-memory device directory."""

import json
import uuid

import pytest

from metalcloud.domain.entities.device import DeviceState
from metalcloud.domain.ports.device_directory_port import DeviceDirectoryPort
from metalcloud.domain.value_objects.provider_id import DeviceKey
from metalcloud.infrastructure.adapters.in_memory_directory import (
    InMemoryDeviceDirectory,
)


class TestInMemoryDeviceDirectory:
    def test_satisfies_port(self, directory):
        assert isinstance(directory, DeviceDirectoryPort)

    @pytest.mark.asyncio
    async def test_empty(self, directory):
        assert len(directory) == 0
        assert await directory.find_by_key(DeviceKey(str(uuid.uuid4()))) is None
        assert await directory.find_by_name("node-a") is None

    @pytest.mark.asyncio
    async def test_create_and_find(self, directory):
        record = directory.create_device("node-a", plan="p", facility="ams1", metro="am")
        assert await directory.find_by_key(record.id) == record
        assert await directory.find_by_name("node-a") == record
        assert record.facility.metro.code == "am"

    @pytest.mark.asyncio
    async def test_find_by_name_returns_first_created(self, directory):
        first = directory.create_device("dup", plan="p", facility="f")
        directory.create_device("dup", plan="p", facility="f")
        assert await directory.find_by_name("dup") == first

    def test_unique_ids(self, directory):
        a = directory.create_device("a", plan="p", facility="f")
        b = directory.create_device("b", plan="p", facility="f")
        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_update_device(self, directory, device):
        updated = directory.update_device(device.id, state=DeviceState.INACTIVE)
        assert updated.state is DeviceState.INACTIVE
        assert (await directory.find_by_key(device.id)).state is DeviceState.INACTIVE
        # the earlier snapshot is untouched
        assert device.state is DeviceState.ACTIVE

    def test_update_unknown_device(self, directory):
        with pytest.raises(KeyError):
            directory.update_device(DeviceKey(str(uuid.uuid4())), hostname="x")


class TestFromFile:
    @pytest.mark.asyncio
    async def test_list_payload(self, tmp_path, device):
        path = tmp_path / "devices.json"
        path.write_text(json.dumps([device.to_api()]))

        directory = InMemoryDeviceDirectory.from_file(str(path))

        assert len(directory) == 1
        assert await directory.find_by_key(device.id) == device

    @pytest.mark.asyncio
    async def test_api_listing_payload(self, tmp_path, device):
        path = tmp_path / "devices.json"
        path.write_text(json.dumps({"devices": [device.to_api()], "meta": {}}))

        directory = InMemoryDeviceDirectory.from_file(str(path))

        assert await directory.find_by_name("node-a") == device

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            InMemoryDeviceDirectory.from_file(str(tmp_path / "nope.json"))
