"""
Outbound GET with bounded, linearly backed-off retries.

Knows nothing about Open Food Facts URLs or payloads; callers build the URL
and parse the response.
"""
import asyncio
from typing import Awaitable, Callable, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from errors import TransientUpstreamError, UpstreamExhaustedError
from logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_RETRIES = 3
DEFAULT_DELAY_MS = 1000

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

Sleep = Callable[[float], Awaitable[None]]


def build_headers(user_agent: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Cache-bypass and identifying headers, overridden by any caller headers."""
    merged = {**NO_CACHE_HEADERS, "User-Agent": user_agent}
    merged.update(headers or {})
    return merged


async def send_once(
    client: httpx.AsyncClient,
    url: str,
    headers: Dict[str, str],
    method: str = "GET",
) -> httpx.Response:
    """One request; any request error or non-2xx status becomes TransientUpstreamError."""
    try:
        response = await client.request(method, url, headers=headers)
    except httpx.RequestError as exc:
        raise TransientUpstreamError(url, reason=f"{type(exc).__name__}: {exc}") from exc
    if not response.is_success:
        raise TransientUpstreamError(url, status_code=response.status_code)
    return response


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.info(
        "upstream_attempt_failed",
        url=getattr(exc, "url", None),
        attempt=retry_state.attempt_number,
        status_code=getattr(exc, "status_code", None),
        error=str(exc),
        retry_in_ms=round(retry_state.upcoming_sleep * 1000) if retry_state.upcoming_sleep else 0,
    )


async def retry_fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    user_agent: str,
    headers: Optional[Dict[str, str]] = None,
    method: str = "GET",
    retries: int = DEFAULT_RETRIES,
    delay_ms: int = DEFAULT_DELAY_MS,
    sleep: Sleep = asyncio.sleep,
) -> httpx.Response:
    """
    Perform a request, retrying request errors and non-2xx statuses.

    After failed attempt n (counting from 1) waits ``delay_ms * n`` before
    the next one. When the last attempt fails, raises UpstreamExhaustedError
    chained to the final TransientUpstreamError.
    """
    if retries < 1:
        raise ValueError("retries must be at least 1")

    request_headers = build_headers(user_agent, headers)
    delay_s = delay_ms / 1000.0
    retryer = AsyncRetrying(
        stop=stop_after_attempt(retries),
        wait=wait_incrementing(start=delay_s, increment=delay_s),
        retry=retry_if_exception_type(TransientUpstreamError),
        before_sleep=_log_retry,
        sleep=sleep,
    )

    try:
        async for attempt in retryer:
            with attempt:
                return await send_once(client, url, request_headers, method)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        logger.warning(
            "upstream_retries_exhausted",
            url=url,
            attempts=e.last_attempt.attempt_number,
            error=str(last_error),
        )
        raise UpstreamExhaustedError(url, e.last_attempt.attempt_number, last_error) from last_error
