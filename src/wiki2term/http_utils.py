"""HTTP helpers for talking to the wiki API with retries and backoff."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final, Mapping

import httpx

from wiki2term.config import (
    WIKI2TERM_FETCH_BACKOFF_S,
    WIKI2TERM_FETCH_MAX_RETRIES,
    WIKI2TERM_FETCH_TIMEOUT_S,
    WIKI2TERM_USER_AGENT,
)
from wiki2term.exceptions import FetchError, RateLimitError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def _transient_error(status_code: int, url: str) -> FetchError:
    if status_code == 429:
        return RateLimitError(f"Rate limited by {url}")
    return FetchError(f"HTTP {status_code} from {url}")


async def fetch_with_retries(
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    client: httpx.AsyncClient | None = None,
    return_bytes: bool = False,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> str | bytes:
    """GET ``url``, retrying transient failures with exponential backoff.

    Status codes in RETRY_STATUS_CODES and transport errors are retried up
    to WIKI2TERM_FETCH_MAX_RETRIES times. A 404 is never retried.

    Args:
        url: The URL to fetch.
        params: Query parameters sent with every attempt.
        client: Shared httpx.AsyncClient. A short-lived client is created
            when omitted.
        return_bytes: Return the raw body instead of decoded text.
        on_404: Exception class raised on 404 (FetchError by default).
        on_404_message: Message for the 404 exception.

    Returns:
        The response body as text, or as bytes if ``return_bytes`` is set.

    Raises:
        RateLimitError: If the last attempt was answered with 429.
        FetchError: If every attempt failed, or on 404 without ``on_404``.
    """
    not_found_exc_class = on_404 or FetchError

    async def attempt_all(http_client: httpx.AsyncClient) -> str | bytes:
        last_exc: Exception | None = None

        for attempt in range(WIKI2TERM_FETCH_MAX_RETRIES + 1):
            if attempt:
                backoff = WIKI2TERM_FETCH_BACKOFF_S * (2 ** (attempt - 1))
                logger.debug("retrying %s in %.2fs after: %s", url, backoff, last_exc)
                await asyncio.sleep(backoff)

            try:
                response = await http_client.get(url, params=params)
            except httpx.RequestError as exc:
                last_exc = exc
                continue

            if response.status_code == 404:
                raise not_found_exc_class(on_404_message or f"Resource not found at {url}")
            if response.status_code in RETRY_STATUS_CODES:
                last_exc = _transient_error(response.status_code, url)
                continue

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                last_exc = exc
                continue
            return response.content if return_bytes else response.text

        if isinstance(last_exc, RateLimitError):
            raise last_exc
        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await attempt_all(client)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(WIKI2TERM_FETCH_TIMEOUT_S),
        headers={"User-Agent": WIKI2TERM_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await attempt_all(new_client)
