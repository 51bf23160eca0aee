"""Shared HTTP helpers for the outbound CESSDA services."""

import logging
from typing import Mapping, Optional

import httpx

from domain.errors import TransportError

logger = logging.getLogger(__name__)


def build_timeout(total: float, connect: float = 10.0) -> httpx.Timeout:
    """Bound a request by a total timeout with a shorter connect phase."""
    return httpx.Timeout(total, connect=min(connect, total))


async def get_ok(
    client: httpx.AsyncClient,
    service: str,
    url: str,
    *,
    accept: str,
    timeout: httpx.Timeout,
    params: Optional[Mapping[str, str]] = None,
) -> httpx.Response:
    """GET a URL and return the response only if it is a non-empty 200.

    Raises:
        TransportError: On network failure, timeout, non-200 status or an
            empty body.
    """
    try:
        response = await client.get(
            url, params=params, headers={"Accept": accept}, timeout=timeout
        )
    except httpx.TimeoutException as e:
        raise TransportError(f"{service} request timed out: {url}") from e
    except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as e:
        raise TransportError(f"{service} request failed: {e}") from e

    if response.status_code != 200:
        raise TransportError(
            f"{service} returned HTTP {response.status_code} for: {response.request.url}",
            status_code=response.status_code,
        )
    if not response.content:
        raise TransportError(f"{service} returned an empty body for: {response.request.url}")
    return response
