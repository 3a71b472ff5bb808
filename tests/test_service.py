import pytest

from ip_intel import service
from ip_intel.clients.ip_api_com_client import ISP_FIELDS, TIMEZONE_FIELDS
from ip_intel.errors import InvalidIpError, UpstreamServiceError
from ip_intel.models.response_models import BulkLookupError, BulkLookupItem
from tests.common import ErrorRaisingClient, FakeLookupClient


@pytest.mark.asyncio
async def test_lookup_rejects_invalid_ip_before_network_call() -> None:
    client = FakeLookupClient()

    with pytest.raises(InvalidIpError):
        await service.lookup("256.1.1.1", client)

    assert client.calls == []


@pytest.mark.asyncio
async def test_lookup_propagates_upstream_errors() -> None:
    client = ErrorRaisingClient(UpstreamServiceError("API error: 500"))

    with pytest.raises(UpstreamServiceError, match="API error: 500"):
        await service.lookup("8.8.8.8", client)


@pytest.mark.asyncio
async def test_lookup_uses_default_fields() -> None:
    client = FakeLookupClient()

    result = await service.lookup("8.8.8.8", client)

    assert client.calls == [("8.8.8.8", None)]
    assert result.ip == "8.8.8.8"


@pytest.mark.asyncio
async def test_timezone_and_isp_info_request_narrow_field_sets() -> None:
    client = FakeLookupClient()

    await service.timezone_info("8.8.8.8", client)
    await service.isp_info("8.8.8.8", client)

    assert client.calls == [("8.8.8.8", TIMEZONE_FIELDS), ("8.8.8.8", ISP_FIELDS)]


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", [service.geolocate, service.timezone_info, service.isp_info])
async def test_single_ip_operations_validate_input(operation) -> None:
    client = FakeLookupClient()

    with pytest.raises(InvalidIpError):
        await operation("not-an-ip", client)

    assert client.calls == []


@pytest.mark.asyncio
async def test_bulk_counts_every_outcome() -> None:
    client = FakeLookupClient()

    result = await service.bulk(["8.8.8.8", "not-an-ip", "1.1.1.1"], client)

    assert result.count == 3
    assert isinstance(result.results[0], BulkLookupItem)
    assert result.results[1] == BulkLookupError(ip="not-an-ip", error="Invalid IP format")
    assert isinstance(result.results[2], BulkLookupItem)


@pytest.mark.asyncio
async def test_overview_samples_google_dns() -> None:
    client = FakeLookupClient()

    result = await service.overview(client, {"lookup": "Single IP lookup - $0.001"})

    assert client.calls == [("8.8.8.8", None)]
    assert result.sample_lookup.ip == "8.8.8.8"
    assert result.endpoints
