from __future__ import annotations

import asyncio
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from clubsync.config import settings
from clubsync.log import get_logger

logger = get_logger("fetcher")


def proxied_url(url: str, proxy_base: str | None = None) -> str:
    """Route a target URL through a `?url=` style proxy when one is configured."""
    if not proxy_base:
        return url
    return f"{proxy_base}?url={quote(url, safe='')}"


class PageFetcher:
    """Fetches event pages, returning None instead of raising on failure.

    `timeout` is a wall-clock deadline for the whole fetch, retries
    included, on top of the client's per-read timeout.
    """

    def __init__(
        self,
        proxy_base: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.proxy_base = proxy_base if proxy_base is not None else settings.proxy_event_url
        self.timeout = timeout or settings.fetch_timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> PageFetcher:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(max(settings.fetch_attempts, 1)),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        reraise=True,
    )
    async def _get(self, url: str) -> httpx.Response:
        return await self.client.get(url)

    async def fetch_html(self, url: str) -> str | None:
        """GET a page's HTML. Non-2xx, timeouts and network errors give None."""
        target = proxied_url(url, self.proxy_base)
        try:
            resp = await asyncio.wait_for(self._get(target), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("fetch_timeout", url=url, timeout=self.timeout)
            return None
        except httpx.HTTPError as e:
            logger.warning("fetch_error", url=url, error=str(e))
            return None
        if not resp.is_success:
            logger.warning("fetch_failed", url=url, status=resp.status_code)
            return None
        return resp.text
