from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

import httpx

from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.errors import ProviderLookupError, ReservedIpError, UpstreamServiceError
from ip_intel.models.common import ProviderRecord

DEFAULT_FIELDS: tuple[str, ...] = (
    "status",
    "message",
    "country",
    "countryCode",
    "region",
    "regionName",
    "city",
    "zip",
    "lat",
    "lon",
    "timezone",
    "isp",
    "org",
    "as",
    "query",
)
TIMEZONE_FIELDS: tuple[str, ...] = ("status", "message", "query", "timezone", "countryCode", "city")
ISP_FIELDS: tuple[str, ...] = (
    "status",
    "message",
    "query",
    "isp",
    "org",
    "as",
    "asname",
    "mobile",
    "proxy",
    "hosting",
)


class IpApiCom(BaseIPLookupClient):
    """Client for the http://ip-api.com JSON API.

    Each call is a single GET to `/json/{ip}` with an explicit `fields` list,
    so callers that need only a few attributes keep the payload small.
    """

    def __init__(self, base_url: str = "http://ip-api.com", timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    async def fetch_record(self, ip: str, fields: Sequence[str] | None = None) -> ProviderRecord:
        """Look up an explicit IP address.

        When `fields` is omitted the broad DEFAULT_FIELDS set is requested.
        """
        url = f"{self._base_url}/json/{ip}"
        params = {"fields": ",".join(fields or DEFAULT_FIELDS)}
        return await self._request(url, params)

    async def _request(self, url: str, params: dict[str, str]) -> ProviderRecord:
        """Perform the HTTP request and validate the response.

        ip-api.com answers HTTP 200 for failed lookups too and reports them via
        `status: "fail"` plus a `message`, so both layers are checked.
        A body that is not JSON is not translated and propagates as-is.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url, params=params)
        except httpx.RequestError as exc:
            raise UpstreamServiceError(f"Request to IP provider failed: {repr(exc)}") from exc

        self._handle_http_errors(response)

        data: dict[str, Any] = response.json()
        self._handle_provider_status(data)

        return ProviderRecord.model_validate(data)

    def _handle_http_errors(self, response: httpx.Response) -> None:
        """Map non-2xx HTTP statuses from the provider to UpstreamServiceError."""
        status_code = response.status_code

        if status_code == HTTPStatus.TOO_MANY_REQUESTS:
            # 429 - ip-api.com free tier allows 45 requests per minute.
            raise UpstreamServiceError("IP provider rate limit or quota exceeded (HTTP 429).")

        if not HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
            raise UpstreamServiceError(f"API error: {status_code}")

    def _handle_provider_status(self, data: dict[str, Any]) -> None:
        """Turn an ip-api.com `status: "fail"` payload into a domain exception."""
        if data.get("status") != "fail":
            return

        message = str(data.get("message") or "Invalid IP address")
        lower_msg = message.lower()

        if "private range" in lower_msg or "reserved range" in lower_msg:
            raise ReservedIpError(message)

        raise ProviderLookupError(message)
