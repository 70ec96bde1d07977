"""Validation options: defaults, environment overrides and per-call merging."""

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from safeurl.core.ranges import parse_ranges
from safeurl.core.resolver import DNSResolver, SystemResolver
from safeurl.exceptions import (
    ConfigurationError,
    MissingOptionError,
    UnknownOptionError,
)

OPTION_KEYS = (
    "schemes",
    "block_reserved",
    "blocklist",
    "allowlist",
    "detailed_error",
    "resolver",
)

ENV_PREFIX = "SAFEURL_"


class Options(BaseModel):
    """Fully resolved options for a single validation call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    schemes: list[str]
    block_reserved: bool
    blocklist: list[str]
    allowlist: list[str]
    detailed_error: bool
    resolver: DNSResolver

    @field_validator("blocklist", "allowlist")
    @classmethod
    def validate_ranges(cls, v: list[str]) -> list[str]:
        """Reject malformed CIDR entries before any lookup happens."""
        parse_ranges(v)
        return v


class Defaults(BaseModel):
    """Process-wide default option values.

    A field set to None has no default; calls that do not override it
    fail with MissingOptionError.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    schemes: list[str] | None = Field(default_factory=lambda: ["http", "https"])
    block_reserved: bool | None = True
    blocklist: list[str] | None = Field(default_factory=list)
    allowlist: list[str] | None = Field(default_factory=list)
    detailed_error: bool | None = True
    resolver: DNSResolver | None = Field(default_factory=SystemResolver)

    @field_validator("blocklist", "allowlist")
    @classmethod
    def validate_ranges(cls, v: list[str] | None) -> list[str] | None:
        if v is not None:
            parse_ranges(v)
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **kwargs: Any) -> "Defaults":
        """Build defaults from SAFEURL_* environment variables.

        List values are comma-separated. Unset variables keep the field
        default; keyword arguments take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for key in ("schemes", "blocklist", "allowlist"):
            raw = env.get(f"{ENV_PREFIX}{key.upper()}")
            if raw is not None:
                values[key] = [item.strip() for item in raw.split(",") if item.strip()]

        for key in ("block_reserved", "detailed_error"):
            raw = env.get(f"{ENV_PREFIX}{key.upper()}")
            if raw is not None and raw.strip():
                values[key] = raw.strip().lower()

        values.update(kwargs)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                message=f"Invalid SafeURL environment configuration: {e}",
                user_hint="Check the SAFEURL_* variables in your .env file",
            ) from e


def build_options(overrides: Mapping[str, Any], defaults: Defaults) -> Options:
    """Merge per-call overrides with defaults, key by key.

    An explicitly supplied key always wins, including empty lists; there is
    no list concatenation between overrides and defaults.
    """
    for key in overrides:
        if key not in OPTION_KEYS:
            raise UnknownOptionError(key)

    values: dict[str, Any] = {}
    for key in OPTION_KEYS:
        if key in overrides:
            values[key] = overrides[key]
            continue
        default = getattr(defaults, key)
        if default is None:
            raise MissingOptionError(key)
        values[key] = default

    try:
        return Options(**values)
    except ValidationError as e:
        raise ConfigurationError(message=f"Invalid SafeURL options: {e}") from e
