"""httpx integration: validated GET helpers and request-validating transports."""

import asyncio
import logging
from typing import Any, Mapping

import httpx

from safeurl.core.options import Defaults
from safeurl.core.policy import Denied, decision_fields
from safeurl.exceptions import RestrictedURLError
from safeurl.validator import SafeURL

logger = logging.getLogger(__name__)


def _log_blocked(request: httpx.Request, decision: Denied) -> None:
    logger.warning(
        f"Blocked {request.method} {decision.url}: {decision.reason.value}",
        extra={**decision_fields(decision), "method": request.method},
    )


def get(
    url: str,
    options: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    *,
    defaults: Defaults | None = None,
    client: httpx.Client | None = None,
    **kwargs: Any,
) -> httpx.Response | Denied:
    """Validate a URL and GET it with httpx.

    Returns the Denied decision without touching the network when the URL is
    not allowed. ``headers`` and ``kwargs`` are passed to httpx unchanged.
    """
    decision = SafeURL(defaults).validate(url, **dict(options or {}))
    if isinstance(decision, Denied):
        return decision

    if client is not None:
        return client.get(url, headers=headers, **kwargs)
    return httpx.get(url, headers=headers, **kwargs)


async def aget(
    url: str,
    options: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    *,
    defaults: Defaults | None = None,
    client: httpx.AsyncClient | None = None,
    **kwargs: Any,
) -> httpx.Response | Denied:
    """Async twin of get(); DNS resolution runs in a worker thread."""
    validator = SafeURL(defaults)
    decision = await asyncio.to_thread(validator.validate, url, **dict(options or {}))
    if isinstance(decision, Denied):
        return decision

    if client is not None:
        return await client.get(url, headers=headers, **kwargs)
    async with httpx.AsyncClient() as new_client:
        return await new_client.get(url, headers=headers, **kwargs)


class SafeTransport(httpx.BaseTransport):
    """Transport that refuses requests to URLs failing validation.

    Example::

        client = httpx.Client(transport=SafeTransport(schemes=["https"]))
        client.get("https://10.0.0.1/")  # raises RestrictedURLError
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        validator: SafeURL | None = None,
        **overrides: Any,
    ) -> None:
        self._transport = transport if transport is not None else httpx.HTTPTransport()
        self._validator = validator if validator is not None else SafeURL()
        self._overrides = overrides
        # Fail on bad options at construction, not on the first request
        self._validator.options(**overrides)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        decision = self._validator.validate(url, **self._overrides)
        if isinstance(decision, Denied):
            _log_blocked(request, decision)
            raise RestrictedURLError(url, decision)
        return self._transport.handle_request(request)

    def close(self) -> None:
        self._transport.close()


class AsyncSafeTransport(httpx.AsyncBaseTransport):
    """Async counterpart of SafeTransport."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        validator: SafeURL | None = None,
        **overrides: Any,
    ) -> None:
        self._transport = (
            transport if transport is not None else httpx.AsyncHTTPTransport()
        )
        self._validator = validator if validator is not None else SafeURL()
        self._overrides = overrides
        self._validator.options(**overrides)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        decision = await asyncio.to_thread(
            self._validator.validate, url, **self._overrides
        )
        if isinstance(decision, Denied):
            _log_blocked(request, decision)
            raise RestrictedURLError(url, decision)
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        await self._transport.aclose()
