"""Mapping of raw ip-api.com records into the outward-facing response models.

Each entrypoint has its own shape; the functions here only select and rename
fields (plus the few derived values such as the maps link or the local time).
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ip_intel.models.common import ProviderRecord
from ip_intel.models.response_models import (
    BulkLookupItem,
    Coordinates,
    GeoCoordinates,
    GeolocationResponse,
    GeoLocation,
    IspInfoResponse,
    LookupResponse,
    NetworkFlags,
    OverviewResponse,
    SampleLookup,
    TimezoneResponse,
)

SERVICE_NAME = "IP Intelligence Agent"
SERVICE_DESCRIPTION = "Real-time IP geolocation, ISP info, and timezone data"
DATA_SOURCE = "ip-api.com (live)"

MAPS_URL_TEMPLATE = "https://www.google.com/maps?q={lat},{lon}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def shape_lookup(record: ProviderRecord) -> LookupResponse:
    return LookupResponse(
        ip=record.query,
        country=record.country,
        country_code=record.country_code,
        region=record.region_name,
        city=record.city,
        zip=record.zip,
        coordinates=Coordinates(lat=record.lat, lon=record.lon),
        timezone=record.timezone,
        isp=record.isp,
        organization=record.org,
        asn=record.as_number,
        fetched_at=_now(),
    )


def shape_bulk_item(record: ProviderRecord) -> BulkLookupItem:
    return BulkLookupItem(
        ip=record.query,
        country=record.country,
        country_code=record.country_code,
        city=record.city,
        isp=record.isp,
        coordinates=Coordinates(lat=record.lat, lon=record.lon),
    )


def maps_url(lat: float | None, lon: float | None) -> str | None:
    if lat is None or lon is None:
        return None
    return MAPS_URL_TEMPLATE.format(lat=lat, lon=lon)


def shape_geolocation(record: ProviderRecord) -> GeolocationResponse:
    return GeolocationResponse(
        ip=record.query,
        location=GeoLocation(
            country=record.country,
            country_code=record.country_code,
            region=record.region,
            region_name=record.region_name,
            city=record.city,
            postal_code=record.zip,
        ),
        coordinates=GeoCoordinates(
            latitude=record.lat,
            longitude=record.lon,
            maps_url=maps_url(record.lat, record.lon),
        ),
        timezone=record.timezone,
        fetched_at=_now(),
    )


def format_local_time(moment: datetime) -> str:
    """Render a datetime the way an en-US locale does, e.g. `3/7/2024, 9:05:03 PM`."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment.month}/{moment.day}/{moment.year}, {hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"


def format_utc_offset(moment: datetime) -> str | None:
    offset = moment.utcoffset()
    if offset is None:
        return None
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _local_now(tz_name: str | None, now: datetime | None = None) -> datetime | None:
    if not tz_name:
        return None
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None
    return (now or _now()).astimezone(zone)


def shape_timezone(record: ProviderRecord, now: datetime | None = None) -> TimezoneResponse:
    """Shape a timezone record, computing the current wall-clock time in that zone.

    `now` must be timezone-aware when given; it defaults to the current UTC time.
    Unknown or missing zone names leave the local time and offset empty.
    """
    fetched_at = now or _now()
    local = _local_now(record.timezone, fetched_at)
    return TimezoneResponse(
        ip=record.query,
        timezone=record.timezone,
        country=record.country_code,
        city=record.city,
        current_local_time=format_local_time(local) if local else None,
        utc_offset=format_utc_offset(local) if local else None,
        fetched_at=fetched_at,
    )


def shape_isp_info(record: ProviderRecord) -> IspInfoResponse:
    # Flags the provider leaves out are reported as False.
    return IspInfoResponse(
        ip=record.query,
        isp=record.isp,
        organization=record.org,
        asn=record.as_number,
        as_name=record.as_name,
        flags=NetworkFlags(
            mobile=bool(record.mobile),
            proxy=bool(record.proxy),
            hosting=bool(record.hosting),
        ),
        fetched_at=_now(),
    )


def shape_overview(sample: ProviderRecord, endpoints: Mapping[str, str]) -> OverviewResponse:
    return OverviewResponse(
        service=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        data_source=DATA_SOURCE,
        sample_lookup=SampleLookup(
            ip=sample.query,
            country=sample.country,
            city=sample.city,
            isp=sample.isp,
        ),
        endpoints=dict(endpoints),
        fetched_at=_now(),
    )
