# app/services/http_client.py
# Outbound HTTP calls with a hard deadline.
# Author: Shibo Li
# Date: 2025-06-14
# Version: 0.1.0

import asyncio
import httpx
from app.core.errors import TimedOut
from app.utils.logger import console


async def call_with_timeout(method: str, url: str, timeout: float, **kwargs) -> httpx.Response:
    """
    Performs a single HTTP request that is cancelled once `timeout` seconds have passed.

    The deadline covers the whole exchange (connect, send, read), not a single phase.
    The client is closed on every exit path, including cancellation.

    Args:
        method: The HTTP method, e.g. "POST".
        url: The target URL.
        timeout: The deadline in seconds.
        **kwargs: Passed through to `httpx.AsyncClient.request` (json, headers, ...).

    Raises:
        TimedOut: If the deadline passed before a response arrived.
        httpx.HTTPError: For transport failures before the deadline.

    Returns:
        The response, whatever its status code.
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        try:
            return await asyncio.wait_for(client.request(method, url, **kwargs), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            console.warning(f"{method} {url} timed out after {timeout}s.")
            raise TimedOut(f"{method} {url} timed out after {timeout}s") from e
