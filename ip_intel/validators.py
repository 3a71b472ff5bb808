import re
from ipaddress import IPv6Address
from typing import Any

from ip_intel.errors import InvalidIpError

# 1-3 ASCII digits per octet; leading zeros are read as decimal (`010` == 10).
_IPV4_OCTET = re.compile(r"[0-9]{1,3}")


def _is_ipv4(candidate: str) -> bool:
    octets = candidate.split(".")
    if len(octets) != 4:
        return False
    return all(_IPV4_OCTET.fullmatch(octet) and int(octet) <= 255 for octet in octets)


def _is_ipv6(candidate: str) -> bool:
    try:
        IPv6Address(candidate)
    except ValueError:
        return False
    return True


def is_valid_ip(candidate: Any) -> bool:
    """Return True if `candidate` is a well-formed IPv4 or IPv6 address literal.

    IPv4 must be a dotted quad of decimal octets in 0-255; octets may carry
    leading zeros (`01.2.3.4`) and are still read as decimal.
    IPv6 accepts every standard colon-hex form, including `::` compression and
    an embedded IPv4 tail. Zone identifiers (`fe80::1%eth0`) and surrounding
    whitespace are rejected. Never raises.
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    if candidate != candidate.strip() or "%" in candidate:
        return False

    if ":" in candidate:
        return _is_ipv6(candidate)
    return _is_ipv4(candidate)


def ensure_valid_ip(candidate: str) -> str:
    """Return `candidate` unchanged or raise InvalidIpError."""
    if not is_valid_ip(candidate):
        raise InvalidIpError("Invalid IP address format")
    return candidate
