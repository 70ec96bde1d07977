"""Custom exceptions for SafeURL with user-friendly messages."""

from typing import Any


class SafeURLError(Exception):
    """Base exception for SafeURL errors."""

    def __init__(self, message: str, user_hint: str | None = None):
        self.message = message
        self.user_hint = user_hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_hint:
            return f"{self.message}\n  Hint: {self.user_hint}"
        return self.message


class ConfigurationError(SafeURLError):
    """Validation options are structurally invalid."""


class InvalidRangeError(ConfigurationError):
    """A CIDR entry in an allowlist or blocklist cannot be parsed."""

    def __init__(self, cidr: Any, reason: str):
        self.cidr = cidr
        super().__init__(
            message=f"Invalid CIDR range {cidr!r}: {reason}",
            user_hint="Use IPv4 network notation such as 10.0.0.0/8",
        )


class MissingOptionError(ConfigurationError):
    """A required option has neither an override nor a default."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            message=f"Option '{key}' has no value and no default",
            user_hint=f"Pass {key}=... or set it on the Defaults object",
        )


class UnknownOptionError(ConfigurationError):
    """An override key is not a recognised option."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(message=f"Unknown option '{key}'")


class ResolutionError(SafeURLError):
    """A resolver could not map a host to an address."""

    def __init__(self, host: str, reason: str):
        self.host = host
        self.reason = reason
        super().__init__(message=f"Cannot resolve {host!r}: {reason}")


class RestrictedURLError(SafeURLError):
    """An outgoing request was refused by URL validation."""

    def __init__(self, url: str, decision: Any):
        self.url = url
        self.decision = decision
        super().__init__(message=f"Request to {url} refused: {decision.reason.value}")

    @property
    def reason(self):
        return self.decision.reason
