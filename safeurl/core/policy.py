"""Allow/deny decisions for outbound URLs."""

import ipaddress
import logging
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from safeurl.core.options import Options
from safeurl.core.ranges import RESERVED_RANGES, ip_in_ranges
from safeurl.core.resolver import resolve_address
from safeurl.core.url import parse_url

logger = logging.getLogger(__name__)


class Reason(str, Enum):
    """Machine-readable outcome codes."""

    OK = "ok"
    UNSAFE_SCHEME = "unsafe_scheme"
    UNSAFE_RESERVED = "unsafe_reserved"
    UNSAFE_BLOCKLIST = "unsafe_blocklist"
    UNSAFE_ALLOWLIST = "unsafe_allowlist"
    UNRESOLVABLE_HOST = "unresolvable_host"
    RESTRICTED = "restricted"


@dataclass(frozen=True)
class Allowed:
    """The URL may be requested."""

    url: str
    address: ipaddress.IPv4Address

    ok: ClassVar[bool] = True

    @property
    def reason(self) -> Reason:
        return Reason.OK


@dataclass(frozen=True)
class Denied:
    """The URL must not be requested."""

    url: str
    reason: Reason
    address: ipaddress.IPv4Address | None = None

    ok: ClassVar[bool] = False


Decision = Allowed | Denied


def evaluate(url: str, options: Options) -> Decision:
    """Decide whether a URL is safe to request under the given options.

    Checks run in order and stop at the first denial:

    1. scheme must be one of ``options.schemes``
    2. host must resolve to an IPv4 address
    3. with a non-empty allowlist, the address must be in it and nothing
       else is consulted
    4. otherwise the address must be outside the reserved ranges (when
       ``block_reserved``) and outside the blocklist

    With ``detailed_error`` off, every denial is reported as ``restricted``.
    """
    decision = _decide(url, options)
    if isinstance(decision, Allowed):
        return decision

    reported = decision
    if not options.detailed_error:
        reported = Denied(url=url, reason=Reason.RESTRICTED, address=decision.address)

    logger.info(
        f"Denied {url}: {decision.reason.value}",
        extra=decision_fields(reported, detailed_reason=decision.reason),
    )
    return reported


def decision_fields(decision: Decision, detailed_reason: Reason | None = None) -> dict:
    """Structured log fields describing a decision."""
    return {
        "url": decision.url,
        "host": parse_url(decision.url).host,
        "reason": decision.reason.value,
        "detailed_reason": (detailed_reason or decision.reason).value,
        "address": str(decision.address) if decision.address is not None else None,
    }


def _decide(url: str, options: Options) -> Decision:
    scheme, host = parse_url(url)
    if scheme not in options.schemes:
        return Denied(url=url, reason=Reason.UNSAFE_SCHEME)

    address = resolve_address(host, options.resolver)
    if address is None:
        return Denied(url=url, reason=Reason.UNRESOLVABLE_HOST)

    if options.allowlist:
        if ip_in_ranges(address, options.allowlist):
            return Allowed(url=url, address=address)
        return Denied(url=url, reason=Reason.UNSAFE_ALLOWLIST, address=address)

    # Reserved wins when both would match
    if options.block_reserved and ip_in_ranges(address, RESERVED_RANGES):
        return Denied(url=url, reason=Reason.UNSAFE_RESERVED, address=address)

    if ip_in_ranges(address, options.blocklist):
        return Denied(url=url, reason=Reason.UNSAFE_BLOCKLIST, address=address)

    return Allowed(url=url, address=address)
