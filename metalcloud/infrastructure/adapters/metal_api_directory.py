"""
Metal API Device Directory

Architectural Intent:
- Implements DeviceDirectoryPort against the provider REST API using httpx
- Owns the transport concerns the resolver deliberately does not: auth
  header, request timeout, pagination, status handling

Design Decisions:
- 404 on GET /devices/{id} is absence (None), every other failure is a
  DirectoryError chained from the httpx exception
- A 200 whose body cannot be decoded into devices is also a DirectoryError,
  never an identifier error: the caller's providerID was fine
- Name lookups page through GET /projects/{project}/devices and return the
  first device whose hostname matches exactly
- No retries; asyncio cancellation is never caught here
"""

import logging
from typing import Any, Optional

import httpx

from metalcloud.domain.entities.device import DeviceRecord
from metalcloud.domain.exceptions import DirectoryError, MetalCloudError
from metalcloud.domain.value_objects.provider_id import DeviceKey

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.equinix.com/metal/v1"
DEVICE_INCLUDES = "facility,facility.metro,plan,ip_addresses"


class MetalAPIDirectory:
    """
    Device directory backed by the provider REST API.

    Configuration parameters
    ------------------------
    api_key : str
        Value of the X-Auth-Token header.
    project_id : str
        Project whose devices are searched by hostname.
    base_url : str
        API root, e.g. "https://api.equinix.com/metal/v1".
    timeout : float
        Per-request timeout in seconds.
    page_size : int
        per_page value for device listings.
    client : httpx.AsyncClient | None
        Pre-built client; when given, base_url/api_key/timeout are not applied.
    """

    def __init__(
        self,
        api_key: str = "",
        project_id: str = "",
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        page_size: int = 100,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.project_id = project_id
        self.page_size = page_size
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            headers={"X-Auth-Token": api_key, "Accept": "application/json"},
            timeout=timeout,
        )

        logger.debug(
            "MetalAPIDirectory initialised (base_url=%s, project=%s)",
            base_url,
            project_id,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "MetalAPIDirectory":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # DeviceDirectoryPort implementation
    # ------------------------------------------------------------------

    async def find_by_key(self, key: DeviceKey) -> Optional[DeviceRecord]:
        response = await self._get(f"/devices/{key}", params={"include": DEVICE_INCLUDES})
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_status(response)
        path = response.request.url.path
        return self._parse_device(path, self._decode(path, response))

    async def find_by_name(self, name: str) -> Optional[DeviceRecord]:
        if not self.project_id:
            raise DirectoryError("project ID is required to look up devices by name")

        page = 1
        while True:
            response = await self._get(
                f"/projects/{self.project_id}/devices",
                params={
                    "include": DEVICE_INCLUDES,
                    "per_page": self.page_size,
                    "page": page,
                },
            )
            self._raise_for_status(response)
            path = response.request.url.path
            body = self._decode(path, response)
            try:
                devices = body.get("devices") or []
                match = next(
                    (item for item in devices if item.get("hostname") == name), None
                )
                last_page = int((body.get("meta") or {}).get("last_page") or page)
            except (AttributeError, TypeError, ValueError) as e:
                raise DirectoryError(f"GET {path}: invalid device listing: {e}") from e

            if match is not None:
                return self._parse_device(path, match)
            if page >= last_page:
                return None
            page += 1

    # ------------------------------------------------------------------
    # Transport helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str, params: dict[str, Any]) -> httpx.Response:
        logger.debug("GET %s %s", path, params)
        try:
            return await self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise DirectoryError(f"GET {path} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise DirectoryError(f"GET {path} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DirectoryError(
                f"{e.request.method} {e.request.url.path} returned "
                f"{response.status_code}: {response.text[:200]}"
            ) from e

    @staticmethod
    def _decode(path: str, response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise DirectoryError(f"GET {path}: response is not JSON: {e}") from e
        if not isinstance(body, dict):
            raise DirectoryError(f"GET {path}: expected a JSON object, got {type(body).__name__}")
        return body

    @staticmethod
    def _parse_device(path: str, payload: Any) -> DeviceRecord:
        # a bad id here is the directory's fault, not the caller's identifier
        try:
            return DeviceRecord.from_api(payload)
        except (AttributeError, KeyError, TypeError, ValueError, MetalCloudError) as e:
            raise DirectoryError(f"GET {path}: invalid device payload: {e}") from e
