"""CIDR range matching for IPv4 addresses."""

import ipaddress
from typing import Iterable

from safeurl.exceptions import InvalidRangeError

# Private/reserved IPv4 space (RFC 1918, 5735, 6598)
RESERVED_RANGES: tuple[str, ...] = (
    "0.0.0.0/8",
    "10.0.0.0/8",
    "100.64.0.0/10",  # carrier-grade NAT
    "127.0.0.0/8",
    "169.254.0.0/16",  # link-local / cloud metadata
    "172.16.0.0/12",
    "192.0.0.0/29",
    "192.0.2.0/24",
    "192.88.99.0/24",
    "192.168.0.0/16",
    "198.18.0.0/15",
    "198.51.100.0/24",
    "203.0.113.0/24",
    "224.0.0.0/4",  # multicast
    "240.0.0.0/4",
)


def parse_range(cidr: str) -> ipaddress.IPv4Network:
    """Parse a CIDR string into a network.

    Host bits are masked off, so ``10.0.0.7/24`` is the same range as
    ``10.0.0.0/24``. A bare address is treated as a /32.
    """
    if not isinstance(cidr, str):
        raise InvalidRangeError(cidr, "expected a string")
    try:
        return ipaddress.IPv4Network(cidr.strip(), strict=False)
    except ValueError as e:
        raise InvalidRangeError(cidr, str(e)) from e


def parse_ranges(ranges: Iterable[str]) -> list[ipaddress.IPv4Network]:
    """Parse every CIDR string, failing on the first malformed entry."""
    return [parse_range(cidr) for cidr in ranges]


def ip_in_ranges(
    address: ipaddress.IPv4Address | None, ranges: Iterable[str]
) -> bool:
    """Return True if the address falls within at least one range."""
    networks = parse_ranges(ranges)
    if address is None:
        return False
    return any(address in network for network in networks)
