import asyncio
from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

import httpx

from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.errors import UpstreamServiceError
from ip_intel.models.common import ProviderRecord


class MockResponse:
    def __init__(self, status_code: int, payload: dict[str, Any] | None = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self) -> dict[str, Any]:
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Every `get` call is recorded in `calls` as `(url, params)`.
    """

    def __init__(self, response: MockResponse) -> None:
        self._response = response
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict[str, Any] | None = None) -> MockResponse:
        self.calls.append((url, params))
        return self._response


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure."""

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.RequestError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict[str, Any] | None = None) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})


def make_record(ip: str, **overrides: Any) -> ProviderRecord:
    """Build a successful ip-api.com record for `ip` (Google-ish defaults)."""
    payload: dict[str, Any] = {
        "status": "success",
        "query": ip,
        "country": "United States",
        "countryCode": "US",
        "region": "VA",
        "regionName": "Virginia",
        "city": "Ashburn",
        "zip": "20149",
        "lat": 39.03,
        "lon": -77.5,
        "timezone": "America/New_York",
        "isp": "Google LLC",
        "org": "Google Public DNS",
        "as": "AS15169 Google LLC",
    }
    payload.update(overrides)
    return ProviderRecord.model_validate(payload)


class FakeLookupClient(BaseIPLookupClient):
    """In-memory stand-in for the upstream client.

    - `records` maps an IP to the record returned for it (default: `make_record(ip)`).
    - `errors` maps an IP to the exception raised for it.
    - `delays` maps an IP to seconds slept before answering.
    All calls are recorded in `calls` as `(ip, fields)`.
    """

    def __init__(
        self,
        records: dict[str, ProviderRecord] | None = None,
        errors: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.records = records or {}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, Sequence[str] | None]] = []

    async def fetch_record(self, ip: str, fields: Sequence[str] | None = None) -> ProviderRecord:
        self.calls.append((ip, fields))
        if ip in self.delays:
            await asyncio.sleep(self.delays[ip])
        if ip in self.errors:
            raise self.errors[ip]
        return self.records.get(ip) or make_record(ip)


class ErrorRaisingClient(BaseIPLookupClient):
    """Test double that always raises a configured exception."""

    def __init__(self, exc: Exception | None = None) -> None:
        self._exc = exc or UpstreamServiceError("Upstream failure")
        self.calls: list[str] = []

    async def fetch_record(self, ip: str, fields: Sequence[str] | None = None) -> ProviderRecord:
        self.calls.append(ip)
        raise self._exc
