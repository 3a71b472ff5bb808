from abc import ABC, abstractmethod
from collections.abc import Sequence

from ip_intel.models.common import ProviderRecord


class BaseIPLookupClient(ABC):
    """Abstract base for the upstream IP geolocation client.

    Implementations perform exactly one outbound request per call and raise
    UpstreamServiceError (or a subclass) when the provider fails.
    """

    @abstractmethod
    async def fetch_record(self, ip: str, fields: Sequence[str] | None = None) -> ProviderRecord:
        """Look up an explicit IP address, optionally restricting the returned fields."""
        raise NotImplementedError
