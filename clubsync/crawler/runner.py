from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from clubsync.config import settings
from clubsync.crawler.base import PageFetcher
from clubsync.crawler.lineup import parse_lineup_from_html
from clubsync.log import get_logger
from clubsync.models import CrawlSummary, LineupResult

logger = get_logger("runner")

LineupCallback = Callable[[Any, LineupResult], Any]


async def crawl_lineups(
    items: Iterable[tuple[Any, str]],
    on_lineup: LineupCallback | None = None,
    concurrency: int | None = None,
    delay: float | None = None,
    proxy_base: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> tuple[dict[Any, LineupResult | None], CrawlSummary]:
    """Fetch lineups for (key, url) pairs with a fixed pool of workers.

    Workers pull from a shared queue until it is empty, pausing `delay`
    seconds between requests. A page that fails to load or parse is
    recorded as None and counted; the rest of the batch carries on.
    `on_lineup(key, lineup)` is called for every page with at least one
    performer, so the caller can store appearances as results arrive.
    """
    concurrency = concurrency or settings.crawl_concurrency
    delay = settings.crawl_delay if delay is None else delay

    queue: asyncio.Queue[tuple[Any, str]] = asyncio.Queue()
    for item in items:
        queue.put_nowait(item)
    total = queue.qsize()

    results: dict[Any, LineupResult | None] = {}
    summary = CrawlSummary()
    logger.info("crawl_start", total=total, concurrency=concurrency)

    async def worker(fetcher: PageFetcher, worker_id: int) -> None:
        while True:
            try:
                key, url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            lineup = None
            try:
                html = await fetcher.fetch_html(url)
                if html is not None:
                    lineup = parse_lineup_from_html(html, debug=summary.processed < 3)
                if lineup is not None and lineup.performers and on_lineup is not None:
                    outcome = on_lineup(key, lineup)
                    if inspect.isawaitable(outcome):
                        await outcome
            except Exception as e:
                logger.error("crawl_item_failed", key=key, url=url, error=str(e))
                lineup = None

            results[key] = lineup
            summary.processed += 1
            if lineup is None:
                summary.failed += 1
            elif lineup.performers:
                summary.with_lineup += 1
                summary.performers += len(lineup.performers)
                logger.info(
                    "lineup_found",
                    key=key,
                    worker=worker_id,
                    performers=len(lineup.performers),
                    hosts=lineup.hosts,
                )
            else:
                logger.info("lineup_empty", key=key, worker=worker_id)

            if delay and not queue.empty():
                await asyncio.sleep(delay)

    async with PageFetcher(proxy_base=proxy_base, client=client) as fetcher:
        await asyncio.gather(*(worker(fetcher, i) for i in range(min(concurrency, total) or 1)))

    logger.info(
        "crawl_complete",
        processed=summary.processed,
        with_lineup=summary.with_lineup,
        failed=summary.failed,
        performers=summary.performers,
    )
    return results, summary
