"""HTTP client utilities and helpers."""

from typing import Any

import httpx

from slot_rewards.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
)
from slot_rewards.helpers.errors import UpstreamError
from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from slot_rewards.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            response = await client.get("https://example.com")
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def fetch_json_with_status(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | None = None,
) -> tuple[int, Any]:
    """Fetch a URL and decode its JSON body whatever the status code.

    Beacon nodes report conditions like "block not found" as a JSON body
    (``{"code": 404, "message": ...}``), so the body has to be read before
    the status is judged.

    Args:
        client: HTTP client instance
        url: URL to fetch
        timeout: Optional timeout override

    Returns:
        Tuple of (HTTP status code, decoded JSON body)

    Raises:
        UpstreamError: On transport failure or a non-JSON body
    """
    try:
        response = await client.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.warning("Timeout fetching %s", url)
        msg = f"timeout fetching {url}"
        raise UpstreamError(msg) from e
    except httpx.HTTPError as e:
        logger.warning("HTTP error fetching %s: %s", url, e)
        msg = f"HTTP error fetching {url}: {e}"
        raise UpstreamError(msg) from e

    try:
        body = response.json()
    except ValueError as e:
        msg = f"{url} returned non-JSON body (HTTP {response.status_code})"
        raise UpstreamError(msg) from e

    return response.status_code, body


__all__ = ["create_http_client", "fetch_json_with_status"]
