import asyncio
from collections.abc import Sequence

from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.logger import logger
from ip_intel.models.response_models import BulkLookupError, BulkLookupItem
from ip_intel.shapers import shape_bulk_item
from ip_intel.validators import is_valid_ip

INVALID_IP_FORMAT = "Invalid IP format"

BulkOutcome = BulkLookupItem | BulkLookupError


async def _lookup_one(ip: str, client: BaseIPLookupClient, timeout_seconds: float | None) -> BulkOutcome:
    """Resolve a single bulk entry; any failure is captured as an error outcome."""
    if not is_valid_ip(ip):
        return BulkLookupError(ip=ip, error=INVALID_IP_FORMAT)

    try:
        record = await asyncio.wait_for(client.fetch_record(ip), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.error(f"Bulk lookup item timed out ip={ip} timeout={timeout_seconds}")
        return BulkLookupError(ip=ip, error="Lookup timed out")
    except Exception as exc:  # noqa: BLE001 - one entry must not fail the batch
        logger.error(f"Bulk lookup item failed ip={ip} error={exc!r}")
        return BulkLookupError(ip=ip, error=str(exc))

    return shape_bulk_item(record)


async def bulk_lookup(
    ips: Sequence[str],
    client: BaseIPLookupClient,
    timeout_seconds: float | None = None,
) -> list[BulkOutcome]:
    """Look up every address concurrently and return one outcome per input, in input order.

    Invalid addresses never reach the provider. Failed lookups (upstream
    errors, unexpected payloads, per-item timeouts) are reported in their own
    slot and do not cancel or delay the others beyond the final join.
    """
    outcomes = await asyncio.gather(*(_lookup_one(ip, client, timeout_seconds) for ip in ips))
    return list(outcomes)
