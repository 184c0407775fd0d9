"""
HTTP client for remote driver sources.

Fetches the whole driver collection in one request (no pagination, no auth)
with automatic retry on transient failures using tenacity. Anything that still
fails is raised as `SourceUnavailable`; the record store decides what to do
with it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from driver_roster.errors import SourceUnavailable
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)


def _is_transient(exc: BaseException) -> bool:
    """Connection problems, timeouts and 5xx answers are worth another try."""
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status >= 500
    return isinstance(exc, (aiohttp.ClientError, asyncio.TimeoutError))


async def _request_json(session: aiohttp.ClientSession, method: str, url: str) -> Any:
    async with session.request(method, url) as response:
        response.raise_for_status()
        return await response.json(content_type=None)


async def fetch_payload(
    url: str,
    method: str = "GET",
    timeout_seconds: float = 10.0,
    attempts: int = 3,
    wait: Optional[wait_base] = None,
) -> Any:
    """
    Fetch and decode a JSON payload.

    Retries up to `attempts` times with exponential backoff for transient
    errors (connection failures, timeouts, 5xx).

    Raises
    ------
    SourceUnavailable
        If the request fails after all attempts or the body is not JSON.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait or wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception(_is_transient),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        log.info(
                            f"Retrying {method} {url}",
                            extra={"url": url, "attempt": attempt.retry_state.attempt_number},
                        )
                    return await _request_json(session, method.upper(), url)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise SourceUnavailable(url, str(exc) or type(exc).__name__) from exc
    raise SourceUnavailable(url, "no attempt was made")  # pragma: no cover - stop_after_attempt(>=1)


__all__ = ["fetch_payload"]
