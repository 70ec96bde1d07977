"""Host to IPv4 address resolution with a pluggable DNS strategy.

A resolver is any object with a ``resolve(host)`` method returning one or
more IPv4 addresses, or raising ``ResolutionError`` when the host cannot be
resolved. Swap the default ``SystemResolver`` out to:

- query a specific DNS server
- avoid network access in restricted environments
- return deterministic mappings in tests (see ``StaticResolver``)
"""

import ipaddress
import logging
import socket
from typing import Mapping, Protocol, Sequence, Union, runtime_checkable

from safeurl.exceptions import ResolutionError

logger = logging.getLogger(__name__)

AddressLike = Union[str, ipaddress.IPv4Address]


@runtime_checkable
class DNSResolver(Protocol):
    """Strategy for turning a hostname into IPv4 addresses."""

    def resolve(self, host: str) -> Sequence[AddressLike] | AddressLike:
        ...


class SystemResolver:
    """Resolve through the operating system (``getaddrinfo``, IPv4 only)."""

    def resolve(self, host: str) -> list[str]:
        try:
            infos = socket.getaddrinfo(
                host, None, family=socket.AF_INET, type=socket.SOCK_STREAM
            )
        except (OSError, UnicodeError) as e:
            raise ResolutionError(host, str(e)) from e

        addresses: list[str] = []
        for info in infos:
            ip = info[4][0]
            if ip not in addresses:
                addresses.append(ip)
        return addresses

    def __repr__(self) -> str:
        return "SystemResolver()"


class StaticResolver:
    """Resolve from a fixed host -> address(es) mapping.

    Hosts missing from the mapping resolve to ``default`` when one is given,
    otherwise resolution fails.
    """

    def __init__(
        self,
        mapping: Mapping[str, Sequence[AddressLike] | AddressLike] | None = None,
        default: Sequence[AddressLike] | AddressLike | None = None,
    ) -> None:
        self.mapping = {k.lower(): v for k, v in (mapping or {}).items()}
        self.default = default

    def resolve(self, host: str) -> Sequence[AddressLike] | AddressLike:
        result = self.mapping.get(host.lower(), self.default)
        if result is None:
            raise ResolutionError(host, "no static mapping")
        return result

    def __repr__(self) -> str:
        return f"StaticResolver({self.mapping!r}, default={self.default!r})"


def _as_list(result: Sequence[AddressLike] | AddressLike | None) -> list[AddressLike]:
    if result is None:
        return []
    if isinstance(result, (str, ipaddress.IPv4Address)):
        return [result]
    return list(result)


def resolve_address(host: str, resolver: DNSResolver) -> ipaddress.IPv4Address | None:
    """Return the IPv4 address to check for a host, or None if there is none.

    Literal IPv4 hosts never reach the resolver. For names, only the first
    resolved address is returned; the rest are not checked.
    """
    if not host:
        return None

    try:
        return ipaddress.IPv4Address(host)
    except ValueError:
        pass

    try:
        result = resolver.resolve(host)
    except ResolutionError as e:
        logger.info(f"Resolution failed for {host}: {e.reason}")
        return None
    except Exception as e:
        # Timeouts and DNS library errors from custom resolvers deny too
        logger.warning(f"Resolver error for {host}: {e!r}", exc_info=True)
        return None

    addresses = _as_list(result)
    if not addresses:
        logger.info(f"Resolver returned no addresses for {host}")
        return None

    # TODO: check every address once the HTTP clients can pin the checked one
    first = addresses[0]
    try:
        address = ipaddress.IPv4Address(str(first))
    except ValueError:
        logger.warning(f"Resolver returned non-IPv4 address {first!r} for {host}")
        return None

    logger.debug(f"Resolved {host} -> {address}")
    return address
