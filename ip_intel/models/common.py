from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for outward-facing models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderRecord(BaseModel):
    """Raw ip-api.com payload for a single IP.

    Which attributes are present depends on the `fields` list sent with the
    request, so every attribute is optional. Field names follow the provider's
    schema through aliases (see http://ip-api.com/docs/api:json).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str | None = None
    message: str | None = None

    country: str | None = None
    country_code: str | None = Field(default=None, alias="countryCode")
    region: str | None = None
    region_name: str | None = Field(default=None, alias="regionName")
    city: str | None = None
    zip: str | None = None
    lat: float | None = None
    lon: float | None = None
    timezone: str | None = None

    isp: str | None = None
    org: str | None = None
    as_number: str | None = Field(default=None, alias="as")
    as_name: str | None = Field(default=None, alias="asname")

    mobile: bool | None = None
    proxy: bool | None = None
    hosting: bool | None = None

    # The address the provider actually looked up, possibly normalized.
    query: str | None = None

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _coerce_lat_lon(cls, value: Any) -> float | None:
        """Allow latitude/longitude to be provided as strings, numbers, or null."""
        if value is None:
            return None
        try:
            # For general GPS and mapping, 5-6 decimal places (e.g., 34.052235)
            return round(float(value), 6)
        except (TypeError, ValueError):
            return None
