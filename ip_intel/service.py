"""Entrypoint operations, independent of the HTTP layer.

Single-IP operations validate the address before touching the network and let
InvalidIpError / UpstreamServiceError propagate to the caller. The bulk
operation never raises for an individual address.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from ip_intel.bulk import bulk_lookup
from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.clients.ip_api_com_client import ISP_FIELDS, TIMEZONE_FIELDS
from ip_intel.models.response_models import (
    BulkLookupResponse,
    GeolocationResponse,
    IspInfoResponse,
    LookupResponse,
    OverviewResponse,
    TimezoneResponse,
)
from ip_intel.shapers import (
    shape_geolocation,
    shape_isp_info,
    shape_lookup,
    shape_overview,
    shape_timezone,
)
from ip_intel.validators import ensure_valid_ip

# Google public DNS, used for the free overview sample.
SAMPLE_IP = "8.8.8.8"


async def overview(client: BaseIPLookupClient, endpoints: Mapping[str, str]) -> OverviewResponse:
    sample = await client.fetch_record(SAMPLE_IP)
    return shape_overview(sample, endpoints)


async def lookup(ip: str, client: BaseIPLookupClient) -> LookupResponse:
    record = await client.fetch_record(ensure_valid_ip(ip))
    return shape_lookup(record)


async def bulk(
    ips: Sequence[str],
    client: BaseIPLookupClient,
    item_timeout_seconds: float | None = None,
) -> BulkLookupResponse:
    results = await bulk_lookup(ips, client, timeout_seconds=item_timeout_seconds)
    return BulkLookupResponse(
        count=len(results),
        results=results,
        fetched_at=datetime.now(timezone.utc),
    )


async def geolocate(ip: str, client: BaseIPLookupClient) -> GeolocationResponse:
    record = await client.fetch_record(ensure_valid_ip(ip))
    return shape_geolocation(record)


async def timezone_info(ip: str, client: BaseIPLookupClient) -> TimezoneResponse:
    record = await client.fetch_record(ensure_valid_ip(ip), fields=TIMEZONE_FIELDS)
    return shape_timezone(record)


async def isp_info(ip: str, client: BaseIPLookupClient) -> IspInfoResponse:
    record = await client.fetch_record(ensure_valid_ip(ip), fields=ISP_FIELDS)
    return shape_isp_info(record)
