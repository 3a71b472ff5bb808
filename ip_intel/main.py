from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError

from ip_intel import service
from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.clients.ip_api_com_client import IpApiCom
from ip_intel.config import get_settings
from ip_intel.entrypoints import EntrypointRegistry
from ip_intel.exception_handlers import (
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from ip_intel.logger import logger
from ip_intel.models.request_models import BulkLookupRequest, IPLookupRequest, OverviewRequest
from ip_intel.models.response_models import (
    BulkLookupResponse,
    GeolocationResponse,
    HealthResponse,
    IspInfoResponse,
    LookupResponse,
    OverviewResponse,
    TimezoneResponse,
)

SERVICE_NAME = "ip-intel"
SERVICE_VERSION = "1.0.0"

app = FastAPI(
    title=SERVICE_NAME,
    version=SERVICE_VERSION,
    description=(
        "IP Intelligence API - Geolocation, ISP, timezone data for any IP address. "
        "Essential for security agents, fraud detection, and location-aware applications."
    ),
)
logger.info(f"Started IP Intel service port={get_settings().port}")


def get_ip_lookup_client() -> BaseIPLookupClient:
    """Dependency to provide the upstream ip-api.com client."""
    settings = get_settings()
    return IpApiCom(base_url=settings.ip_api_base_url, timeout_seconds=settings.ip_api_timeout_seconds)


# Register global exception handlers using the shared handlers module.
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


registry = EntrypointRegistry(app, client_dependency=get_ip_lookup_client)


async def overview_handler(payload: OverviewRequest, client: BaseIPLookupClient) -> OverviewResponse:
    return await service.overview(client, registry.paid_endpoint_summaries())


async def lookup_handler(payload: IPLookupRequest, client: BaseIPLookupClient) -> LookupResponse:
    return await service.lookup(payload.ip, client)


async def bulk_handler(payload: BulkLookupRequest, client: BaseIPLookupClient) -> BulkLookupResponse:
    return await service.bulk(payload.ips, client, item_timeout_seconds=get_settings().bulk_item_timeout_seconds)


async def geolocate_handler(payload: IPLookupRequest, client: BaseIPLookupClient) -> GeolocationResponse:
    return await service.geolocate(payload.ip, client)


async def timezone_handler(payload: IPLookupRequest, client: BaseIPLookupClient) -> TimezoneResponse:
    return await service.timezone_info(payload.ip, client)


async def isp_info_handler(payload: IPLookupRequest, client: BaseIPLookupClient) -> IspInfoResponse:
    return await service.isp_info(payload.ip, client)


registry.register(
    "overview",
    OverviewRequest,
    price=0,
    handler=overview_handler,
    description="Free overview - sample IP lookup and service info. Try before you buy.",
)
registry.register(
    "lookup",
    IPLookupRequest,
    price=1000,
    handler=lookup_handler,
    description="Look up geolocation and network info for a single IP address",
    summary="Single IP lookup",
)
registry.register(
    "bulk",
    BulkLookupRequest,
    price=3000,
    handler=bulk_handler,
    description="Look up multiple IP addresses at once (max 10)",
    summary="Bulk IP lookup (up to 10)",
)
registry.register(
    "geolocate",
    IPLookupRequest,
    price=2000,
    handler=geolocate_handler,
    description="Get detailed geographic location for an IP with coordinates and regional data",
    summary="Detailed geolocation",
)
registry.register(
    "timezone",
    IPLookupRequest,
    price=1000,
    handler=timezone_handler,
    description="Get timezone information for an IP address",
    summary="Timezone info",
)
registry.register(
    "isp-info",
    IPLookupRequest,
    price=2000,
    handler=isp_info_handler,
    description="Get ISP and organization details for an IP address - useful for fraud detection and security",
    summary="ISP/Organization details",
)
