"""Public entry points for URL validation.

Usage::

    from safeurl.validator import SafeURL

    safeurl = SafeURL()
    safeurl.allowed("https://example.com")          # True
    safeurl.validate("http://10.0.0.1/")            # Denied(reason=Reason.UNSAFE_RESERVED)
    safeurl.validate("http://10.0.0.1/", block_reserved=False)

Overrides accepted by every call: ``schemes``, ``block_reserved``,
``blocklist``, ``allowlist``, ``detailed_error``, ``resolver``. Anything not
overridden comes from the ``Defaults`` the validator was built with.
"""

from typing import Any

from safeurl.core.options import Defaults, Options, build_options
from safeurl.core.policy import Decision, evaluate


class SafeURL:
    """Validator bound to a set of default options."""

    def __init__(self, defaults: Defaults | None = None) -> None:
        self.defaults = defaults if defaults is not None else Defaults()

    def options(self, **overrides: Any) -> Options:
        """Resolve the options a call with these overrides would use."""
        return build_options(overrides, self.defaults)

    def validate(self, url: str, **overrides: Any) -> Decision:
        """Return Allowed or Denied for the URL."""
        return evaluate(url, self.options(**overrides))

    def allowed(self, url: str, **overrides: Any) -> bool:
        """Return True if the URL may be requested."""
        return self.validate(url, **overrides).ok


def validate(url: str, defaults: Defaults | None = None, **overrides: Any) -> Decision:
    """One-off validation; see SafeURL.validate."""
    return SafeURL(defaults).validate(url, **overrides)


def allowed(url: str, defaults: Defaults | None = None, **overrides: Any) -> bool:
    """One-off check; see SafeURL.allowed."""
    return SafeURL(defaults).allowed(url, **overrides)
