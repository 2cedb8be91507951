"""Shared aiohttp session — one instance for the whole process lifetime."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

_session: aiohttp.ClientSession | None = None

MAX_RETRIES = 3
RETRY_BACKOFF = 2.0


async def get_session() -> aiohttp.ClientSession:
    global _session
    if _session is None or _session.closed:
        timeout = aiohttp.ClientTimeout(total=30, connect=10)
        _session = aiohttp.ClientSession(
            timeout=timeout,
            headers={"User-Agent": "Flapboard/1.0 (Airport Flight Board)"},
        )
    return _session


async def close_session() -> None:
    global _session
    if _session and not _session.closed:
        await _session.close()
    _session = None


async def fetch_text(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    retries: int = MAX_RETRIES,
    log_url: str | None = None,
) -> str:
    """GET *url* and return the body as text, retrying on transient errors.

    ``log_url`` replaces *url* in log lines when the query carries a secret.
    """
    session = await get_session()
    shown = log_url or url
    last_exc: Exception | None = None

    for attempt in range(1, retries + 1):
        try:
            async with session.get(url, params=params, headers=headers) as resp:
                resp.raise_for_status()
                return await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            last_exc = exc
            if attempt < retries:
                wait = RETRY_BACKOFF ** attempt
                logger.warning(
                    "%s attempt %d/%d failed (%s), retry in %.0fs",
                    shown, attempt, retries, exc, wait,
                )
                await asyncio.sleep(wait)
            else:
                logger.debug("%s failed after %d attempt(s): %s", shown, retries, exc)

    raise last_exc  # type: ignore[misc]
