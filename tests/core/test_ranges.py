"""Tests for safeurl/core/ranges.py — CIDR parsing and membership."""

import ipaddress

import pytest

from safeurl.core.ranges import RESERVED_RANGES, ip_in_ranges, parse_range, parse_ranges
from safeurl.exceptions import ConfigurationError, InvalidRangeError


def _ip(value: str) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(value)


class TestReservedRanges:
    """The built-in reserved set."""

    def test_has_fifteen_entries(self):
        assert len(RESERVED_RANGES) == 15

    def test_is_immutable(self):
        """Stored as a tuple so nobody can append to it."""
        assert isinstance(RESERVED_RANGES, tuple)

    def test_all_entries_parse(self):
        assert len(parse_ranges(RESERVED_RANGES)) == 15

    @pytest.mark.parametrize(
        "address",
        [
            "0.0.0.0",
            "10.255.255.255",
            "100.64.0.1",
            "127.0.0.1",
            "169.254.169.254",
            "172.31.0.1",
            "192.0.0.7",
            "192.0.2.10",
            "192.88.99.1",
            "192.168.1.1",
            "198.19.0.1",
            "198.51.100.20",
            "203.0.113.5",
            "230.10.10.10",
            "255.255.255.255",
        ],
    )
    def test_reserved_addresses_match(self, address):
        assert ip_in_ranges(_ip(address), RESERVED_RANGES) is True

    @pytest.mark.parametrize(
        "address", ["8.8.8.8", "1.1.1.1", "172.32.0.1", "100.128.0.1", "192.0.0.8"]
    )
    def test_public_addresses_do_not_match(self, address):
        assert ip_in_ranges(_ip(address), RESERVED_RANGES) is False


class TestParseRange:
    """parse_range() accepts CIDR notation and rejects garbage."""

    def test_host_bits_are_masked(self):
        """10.0.0.7/24 is the same network as 10.0.0.0/24."""
        assert parse_range("10.0.0.7/24") == ipaddress.IPv4Network("10.0.0.0/24")

    def test_bare_address_is_slash_32(self):
        assert parse_range("5.5.5.5").prefixlen == 32

    def test_surrounding_whitespace_ignored(self):
        assert parse_range(" 5.5.0.0/16 ") == ipaddress.IPv4Network("5.5.0.0/16")

    @pytest.mark.parametrize(
        "cidr", ["not-a-range", "10.0.0.0/33", "300.1.1.1/8", "", "::1/128"]
    )
    def test_malformed_raises(self, cidr):
        with pytest.raises(InvalidRangeError, match="Invalid CIDR range"):
            parse_range(cidr)

    def test_non_string_raises(self):
        with pytest.raises(InvalidRangeError, match="expected a string"):
            parse_range(42)

    def test_invalid_range_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            parse_range("10.0.0.0/99")


class TestIpInRanges:
    """ip_in_ranges() membership semantics."""

    def test_match_in_any_range(self):
        assert ip_in_ranges(_ip("100.0.0.50"), ["5.5.0.0/16", "100.0.0.0/24"]) is True

    def test_no_match(self):
        assert ip_in_ranges(_ip("3.3.3.3"), ["5.5.0.0/16", "100.0.0.0/24"]) is False

    def test_empty_ranges_never_match(self):
        assert ip_in_ranges(_ip("10.0.0.1"), []) is False

    def test_none_address_never_matches(self):
        assert ip_in_ranges(None, ["0.0.0.0/0"]) is False

    def test_malformed_entry_raises_even_for_none(self):
        """A bad range is a configuration error, never silently skipped."""
        with pytest.raises(InvalidRangeError):
            ip_in_ranges(None, ["10.0.0.0/8", "bogus"])

    def test_network_boundaries(self):
        assert ip_in_ranges(_ip("10.0.0.0"), ["10.0.0.0/24"]) is True
        assert ip_in_ranges(_ip("10.0.0.255"), ["10.0.0.0/24"]) is True
        assert ip_in_ranges(_ip("10.0.1.0"), ["10.0.0.0/24"]) is False
