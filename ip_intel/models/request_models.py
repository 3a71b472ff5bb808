from pydantic import BaseModel, ConfigDict, Field, field_validator

from ip_intel.validators import is_valid_ip

MAX_BULK_IPS = 10


class OverviewRequest(BaseModel):
    """The free overview entrypoint takes no input."""

    model_config = ConfigDict(extra="ignore")


class IPLookupRequest(BaseModel):
    """Input for the single-IP entrypoints (lookup, geolocate, timezone, isp-info).

    The address is validated here, so an invalid `ip` is rejected before the
    entrypoint handler runs and no upstream request is made.
    """

    ip: str = Field(
        description="IPv4 or IPv6 address to look up.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )

    @field_validator("ip", mode="before")
    @classmethod
    def _validate_ip(cls, value: object) -> object:
        if not is_valid_ip(value):
            raise ValueError("ip must be a valid IPv4 or IPv6 address")
        return value


class BulkLookupRequest(BaseModel):
    """Input for the bulk entrypoint.

    Only the list length is enforced; each entry is validated separately so a
    malformed address becomes an error outcome for that entry alone.
    """

    ips: list[str] = Field(
        min_length=1,
        max_length=MAX_BULK_IPS,
        description="Array of IP addresses to look up.",
        examples=[["8.8.8.8", "1.1.1.1"]],
    )
