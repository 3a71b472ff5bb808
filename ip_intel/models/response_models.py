from datetime import datetime

from pydantic import BaseModel

from ip_intel.models.common import CamelModel


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class EntrypointInfo(CamelModel):
    """Catalog entry describing one registered entrypoint."""

    key: str
    description: str
    price: int
    price_usd: str


class Coordinates(CamelModel):
    lat: float | None = None
    lon: float | None = None


class LookupResponse(CamelModel):
    """Full single-IP record returned by the `lookup` entrypoint."""

    ip: str | None = None
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    city: str | None = None
    zip: str | None = None
    coordinates: Coordinates
    timezone: str | None = None
    isp: str | None = None
    organization: str | None = None
    asn: str | None = None
    fetched_at: datetime


class BulkLookupItem(CamelModel):
    """Successful outcome for one address of a bulk request."""

    ip: str | None = None
    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    isp: str | None = None
    coordinates: Coordinates


class BulkLookupError(CamelModel):
    """Failed outcome for one address of a bulk request."""

    ip: str
    error: str


class BulkLookupResponse(CamelModel):
    count: int
    results: list[BulkLookupItem | BulkLookupError]
    fetched_at: datetime


class GeoLocation(CamelModel):
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    region_name: str | None = None
    city: str | None = None
    postal_code: str | None = None


class GeoCoordinates(CamelModel):
    latitude: float | None = None
    longitude: float | None = None
    maps_url: str | None = None


class GeolocationResponse(CamelModel):
    """Detailed location returned by the `geolocate` entrypoint."""

    ip: str | None = None
    location: GeoLocation
    coordinates: GeoCoordinates
    timezone: str | None = None
    fetched_at: datetime


class TimezoneResponse(CamelModel):
    """Timezone returned by the `timezone` entrypoint, with the current local time there."""

    ip: str | None = None
    timezone: str | None = None
    country: str | None = None
    city: str | None = None
    current_local_time: str | None = None
    utc_offset: str | None = None
    fetched_at: datetime


class NetworkFlags(CamelModel):
    mobile: bool = False
    proxy: bool = False
    hosting: bool = False


class IspInfoResponse(CamelModel):
    """Network ownership returned by the `isp-info` entrypoint."""

    ip: str | None = None
    isp: str | None = None
    organization: str | None = None
    asn: str | None = None
    as_name: str | None = None
    flags: NetworkFlags
    fetched_at: datetime


class SampleLookup(CamelModel):
    ip: str | None = None
    country: str | None = None
    city: str | None = None
    isp: str | None = None


class OverviewResponse(CamelModel):
    """Free service overview: a live sample lookup plus the entrypoint catalog."""

    service: str
    description: str
    data_source: str
    sample_lookup: SampleLookup
    endpoints: dict[str, str]
    fetched_at: datetime
