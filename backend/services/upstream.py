"""Shared outbound-call helper: one request, failures normalized per provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from services.errors import TimeoutFailure, TransportFailure

logger = logging.getLogger(__name__)


async def send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    timeout: float,
    error_prefix: str = "",
    **kwargs: Any,
) -> httpx.Response:
    """Perform exactly one request and return the 2xx response.

    Timeouts become TimeoutFailure, any other transport error or non-2xx
    status becomes TransportFailure carrying the provider's text verbatim.
    """
    try:
        response = await client.request(method, url, timeout=timeout, **kwargs)
    except httpx.TimeoutException as exc:
        logger.warning("[%s] upstream timeout after %ss", provider, timeout)
        raise TimeoutFailure(f"upstream timeout after {timeout}s", provider=provider) from exc
    except httpx.HTTPError as exc:
        logger.warning("[%s] transport error: %s", provider, exc)
        raise TransportFailure(str(exc) or type(exc).__name__, provider=provider) from exc

    if not response.is_success:
        text = response.text.strip() or response.reason_phrase
        logger.warning("[%s] HTTP %d: %.200s", provider, response.status_code, text)
        raise TransportFailure(f"{error_prefix}{text}", provider=provider)
    return response


def json_body(response: httpx.Response, *, provider: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise TransportFailure(f"non-JSON response: {response.text[:200]}", provider=provider) from exc
    if not isinstance(data, dict):
        raise TransportFailure("unexpected JSON payload", provider=provider)
    return data
