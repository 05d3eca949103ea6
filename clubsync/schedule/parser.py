from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable

from clubsync.log import get_logger
from clubsync.models import ParsedShow
from clubsync.schedule.common import clean_line, parse_day_header, parse_show_line, weekday_name
from clubsync.schedule.dialects import Dialect, ManualDialect, get_dialect

logger = get_logger("schedule")

CSV_FIELDS = ["date", "day_of_week", "time", "title", "price", "hosted_by"]


class ScheduleParser:
    """Turns a block of schedule text into shows, using one dialect for date context."""

    def __init__(self, dialect: Dialect | None = None) -> None:
        self.dialect = dialect or ManualDialect()

    def parse(self, text: str) -> list[ParsedShow]:
        ctx = self.dialect.start()
        shows: list[ParsedShow] = []
        headers = 0

        for raw in (text or "").splitlines():
            line = clean_line(raw)
            if not line:
                continue
            line = self.dialect.consume(line, ctx)
            if not line:
                continue
            if self.dialect.requires_anchor and ctx.anchor is None:
                continue

            header = parse_day_header(line)
            if header is not None:
                ctx.current = self.dialect.resolve(header, ctx)
                headers += 1
                if ctx.current is None:
                    logger.debug("day_header_unresolved", line=line)
                continue

            if ctx.current is None:
                continue
            show = parse_show_line(line)
            if show is None:
                continue
            shows.append(
                ParsedShow(
                    date=ctx.current,
                    day_of_week=weekday_name(ctx.current),
                    time=show.time,
                    title=show.title,
                    price=show.price,
                    hosted_by=show.hosted_by,
                )
            )

        result = dedupe_shows(shows)
        logger.info(
            "schedule_parsed",
            dialect=self.dialect.name,
            day_headers=headers,
            shows=len(result),
            duplicates=len(shows) - len(result),
        )
        return result


def dedupe_shows(shows: Iterable[ParsedShow]) -> list[ParsedShow]:
    """Drop repeats of (date, time, title) and sort by date then time."""
    seen: dict[tuple, ParsedShow] = {}
    for show in shows:
        seen.setdefault(show.key, show)
    return sorted(seen.values(), key=lambda s: (s.date, s.time))


def merge_parsed_shows(existing: Iterable[ParsedShow], new: Iterable[ParsedShow]) -> list[ParsedShow]:
    """Combine a previous parse with a new one, keeping the earlier copy of repeats."""
    return dedupe_shows([*existing, *new])


def parse_schedule(text: str, dialect: str = "manual", **options) -> list[ParsedShow]:
    """Parse schedule text in the named dialect ("manual", "whatsapp" or "beeper")."""
    return ScheduleParser(get_dialect(dialect, **options)).parse(text)


def shows_to_csv(shows: Iterable[ParsedShow]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for show in shows:
        row = show.model_dump(mode="json")
        writer.writerow({k: row[k] if row[k] is not None else "" for k in CSV_FIELDS})
    return buf.getvalue()


def shows_to_json(shows: Iterable[ParsedShow]) -> str:
    return json.dumps(
        [s.model_dump(mode="json", exclude_none=True) for s in shows],
        indent=2,
        ensure_ascii=False,
    )
