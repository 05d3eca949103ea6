from __future__ import annotations

import re

import httpx
from bs4 import BeautifulSoup

from clubsync.crawler.base import PageFetcher
from clubsync.log import get_logger
from clubsync.models import LineupResult
from clubsync.performers import MAX_NAME_LEN, extract_name_strings

logger = get_logger("lineup")

CARD_SELECTOR = ".ccb-performers-card"
CARD_NAME_SELECTOR = "div:not(.ccb-performers-card-image)"
DESCRIPTION_SELECTOR = ".tribe-events-single-event-description"

_LEADING_BULLET = re.compile(r"^[-•*]\s*")
_PARENTHETICAL = re.compile(r"\(.*?\)")


def _dedupe(names: list[str]) -> list[str]:
    return [n for n in dict.fromkeys(names) if n]


def _full_description(raw: str) -> str | None:
    lines = [line.strip() for line in raw.strip().split("\n")]
    text = "\n".join(line for line in lines if line)
    return text or None


def _card_names(cards) -> list[str]:
    names = []
    for card in cards:
        label = card.select_one(CARD_NAME_SELECTOR)
        if label is None:
            continue
        name = label.get_text().strip()
        if 0 < len(name) < MAX_NAME_LEN:
            names.append(name)
    return names


def parse_lineup_from_html(html: str, debug: bool = False) -> LineupResult:
    """Parse an event page into performers and hosts.

    Performer cards are preferred when the page has them. Otherwise names
    are pulled from the description text and its bullet lists.
    """
    soup = BeautifulSoup(html or "", "lxml")
    performers: list[str] = []
    hosts: list[str] = []

    content = soup.select_one(DESCRIPTION_SELECTOR)
    raw_content = content.get_text() if content is not None else ""

    cards = soup.select(CARD_SELECTOR)
    if cards:
        performers = _card_names(cards)
        if debug:
            logger.debug("performer_cards_found", count=len(cards), names=performers)

        if "host" in raw_content.lower():
            hosts = [n for n in extract_name_strings(raw_content) if n in performers]

        return LineupResult(
            performers=_dedupe(performers),
            hosts=_dedupe(hosts),
            raw_content=raw_content,
            full_description=_full_description(raw_content),
        )

    if debug:
        logger.debug("no_performer_cards", has_description=content is not None)

    if content is not None:
        if debug:
            logger.debug("raw_content", preview=raw_content[:300])
        performers.extend(extract_name_strings(raw_content))

        for li in content.select("ul li, ol li"):
            text = li.get_text().strip()
            if not text or len(text) >= MAX_NAME_LEN or "http" in text:
                continue
            if "host" in text.lower():
                hosts.extend(extract_name_strings(text))
                continue
            cleaned = _PARENTHETICAL.sub("", _LEADING_BULLET.sub("", text)).strip()
            if 0 < len(cleaned) < MAX_NAME_LEN:
                performers.append(cleaned)

    return LineupResult(
        performers=_dedupe(performers),
        hosts=_dedupe(hosts),
        raw_content=raw_content,
        full_description=_full_description(raw_content),
    )


async def fetch_lineup_from_url(
    url: str,
    proxy_base: str | None = None,
    debug: bool = False,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> LineupResult | None:
    """Fetch an event page and parse its lineup.

    None when the page can't be fetched within `timeout` seconds
    (FETCH_TIMEOUT, 10 by default).
    """
    async with PageFetcher(proxy_base=proxy_base, timeout=timeout, client=client) as fetcher:
        if debug:
            logger.debug("fetching", url=url, proxy=fetcher.proxy_base or None)
        html = await fetcher.fetch_html(url)
    if html is None:
        return None
    if debug:
        logger.debug("received", url=url, size=len(html))
    return parse_lineup_from_html(html, debug=debug)
