"""URL scheme/host extraction."""

from typing import NamedTuple
from urllib.parse import urlparse


class ParsedURL(NamedTuple):
    scheme: str
    host: str


def parse_url(url: str) -> ParsedURL:
    """Split a URL into its lower-cased scheme and bare host.

    Unparseable input yields empty fields instead of raising, so it is
    denied by the same checks as a disallowed URL.
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
    except (TypeError, ValueError, AttributeError):
        return ParsedURL("", "")
    return ParsedURL(parsed.scheme.lower(), host)
