"""Tests for the DeviceRecord entity and its API decoding."""

import uuid

import pytest

from metalcloud.domain.entities.device import (
    AddressFamily,
    AddressScope,
    DeviceRecord,
    DeviceState,
    Facility,
    Metro,
    NetworkAddress,
    Plan,
)
from metalcloud.domain.exceptions import MalformedKeyError
from metalcloud.domain.value_objects.provider_id import DeviceKey


def _payload(**overrides):
    payload = {
        "id": str(uuid.uuid4()),
        "hostname": "node-a",
        "state": "active",
        "plan": {"slug": "c3.small.x86", "name": "c3.small.x86"},
        "facility": {"code": "ams1", "name": "Amsterdam", "metro": {"code": "am"}},
        "ip_addresses": [
            {"address": "10.0.0.5", "address_family": 4, "public": False, "management": True},
            {"address": "203.0.113.9", "address_family": 4, "public": True},
            {"address": "2604:1380::1", "address_family": 6, "public": True},
        ],
    }
    payload.update(overrides)
    return payload


class TestDeviceState:
    @pytest.mark.parametrize("value", [s.value for s in DeviceState])
    def test_known_states(self, value):
        assert DeviceState.parse(value).value == value

    def test_case_insensitive(self):
        assert DeviceState.parse("INACTIVE") is DeviceState.INACTIVE

    def test_unrecognized_state_is_unknown(self):
        assert DeviceState.parse("hibernating") is DeviceState.UNKNOWN

    def test_missing_state_is_unknown(self):
        assert DeviceState.parse(None) is DeviceState.UNKNOWN
        assert DeviceState.parse("") is DeviceState.UNKNOWN


class TestFromApi:
    def test_full_payload(self):
        payload = _payload()
        record = DeviceRecord.from_api(payload)
        assert record.id == DeviceKey(payload["id"])
        assert record.hostname == "node-a"
        assert record.state is DeviceState.ACTIVE
        assert record.plan == Plan("c3.small.x86")
        assert record.facility == Facility("ams1", Metro("am"))
        assert record.network_addresses == (
            NetworkAddress("10.0.0.5", AddressFamily.V4, AddressScope.PRIVATE),
            NetworkAddress("203.0.113.9", AddressFamily.V4, AddressScope.PUBLIC),
            NetworkAddress("2604:1380::1", AddressFamily.V6, AddressScope.PUBLIC),
        )

    def test_facility_without_metro(self):
        record = DeviceRecord.from_api(_payload(facility={"code": "ewr1"}))
        assert record.facility.metro is None

    def test_missing_addresses(self):
        record = DeviceRecord.from_api(_payload(ip_addresses=None))
        assert record.network_addresses == ()

    def test_invalid_id_rejected(self):
        with pytest.raises(MalformedKeyError):
            DeviceRecord.from_api(_payload(id="abc"))

    def test_to_api_round_trips_fields_we_read(self):
        record = DeviceRecord.from_api(_payload(state="inactive"))
        assert DeviceRecord.from_api(record.to_api()) == record


class TestIsInactive:
    @pytest.mark.parametrize(
        "state, expected",
        [
            (DeviceState.INACTIVE, True),
            (DeviceState.ACTIVE, False),
            (DeviceState.POWERING_OFF, False),
            (DeviceState.UNKNOWN, False),
        ],
    )
    def test_only_inactive_counts(self, state, expected):
        record = DeviceRecord.from_api(_payload(state=state.value))
        assert record.is_inactive is expected
