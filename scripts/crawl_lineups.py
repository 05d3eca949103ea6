#!/usr/bin/env python3
"""Crawl event pages for lineups and print them as JSON.

Reads one event URL per line (blank lines and # comments ignored) from a
file, or from stdin when no file is given.

Usage:
    scripts/crawl_lineups.py urls.txt > lineups.json
    scripts/crawl_lineups.py urls.txt --concurrency 5 --delay 0.5
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clubsync.crawler.runner import crawl_lineups
from clubsync.log import configure_logging


def read_urls(source):
    urls = []
    for line in source:
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


async def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("file", type=Path, nargs="?")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("--concurrency", type=int)
    parser.add_argument("--delay", type=float)
    parser.add_argument("--proxy", help="proxy endpoint (default: PROXY_EVENT_URL)")
    args = parser.parse_args()
    if args.verbose:
        configure_logging("DEBUG")

    if args.file:
        with args.file.open(encoding="utf-8") as f:
            urls = read_urls(f)
    else:
        urls = read_urls(sys.stdin)

    print(f"Crawling {len(urls)} event pages...", file=sys.stderr)
    results, summary = await crawl_lineups(
        ((url, url) for url in urls),
        concurrency=args.concurrency,
        delay=args.delay,
        proxy_base=args.proxy,
    )

    output = [
        {
            "url": url,
            "performers": lineup.performers if lineup else [],
            "hosts": lineup.hosts if lineup else [],
            "ok": lineup is not None,
        }
        for url, lineup in results.items()
    ]
    print(json.dumps(output, indent=2, ensure_ascii=False))
    print(
        f"Done! {summary.with_lineup}/{summary.processed} pages had a lineup "
        f"({summary.performers} performers, {summary.failed} failed).",
        file=sys.stderr,
    )


if __name__ == "__main__":
    asyncio.run(main())
