"""
Shared pytest fixtures and configuration for all tests.
"""

import pytest

from safeurl.core.options import Defaults
from safeurl.core.resolver import StaticResolver
from safeurl.validator import SafeURL

PUBLIC_IP = "192.0.78.24"


@pytest.fixture
def public_resolver() -> StaticResolver:
    """Resolver mapping every host to one public address."""
    return StaticResolver(default=PUBLIC_IP)


@pytest.fixture
def loopback_resolver() -> StaticResolver:
    """Resolver mapping every host to 127.0.0.1."""
    return StaticResolver(default="127.0.0.1")


@pytest.fixture
def sample_resolver() -> StaticResolver:
    """Resolver with a few fixed hostnames and no fallback."""
    return StaticResolver(
        {
            "google.com": "142.250.72.14",
            "attacker.test": "203.0.113.5",
            "internal.corp": "10.1.2.3",
            "multi.example": ["93.184.216.34", "10.0.0.1"],
        }
    )


@pytest.fixture
def offline_defaults(sample_resolver: StaticResolver) -> Defaults:
    """Stock defaults with DNS answered from sample_resolver."""
    return Defaults(resolver=sample_resolver)


@pytest.fixture
def safeurl(offline_defaults: Defaults) -> SafeURL:
    """Validator bound to offline_defaults."""
    return SafeURL(offline_defaults)
