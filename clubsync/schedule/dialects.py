"""Input dialects for schedule text.

Each dialect knows which lines set the date context (a chat message stamp,
a "## Aug 19, 2024" week heading) and how to pick a year for day headers
that omit it. Day headers and show lines themselves are shared.
"""

from __future__ import annotations

import abc
import re
from dataclasses import dataclass
from datetime import date

from clubsync.config import settings
from clubsync.schedule.common import MONTHS, DayHeader, next_weekday, safe_date


@dataclass
class ScheduleContext:
    anchor: date | None = None  # date the surrounding message or week refers to
    current: date | None = None  # date of the most recent day header
    year: int | None = None


def nearest_year(anchor: date, month: int, day: int) -> date | None:
    """Resolve month/day to the occurrence closest to `anchor` (previous, same or next year)."""
    candidates = [safe_date(anchor.year + offset, month, day) for offset in (0, -1, 1)]
    candidates = [c for c in candidates if c is not None]
    if not candidates:
        return None
    return min(candidates, key=lambda c: abs((c - anchor).days))


class Dialect(abc.ABC):
    """Strategy for one flavour of schedule text."""

    name: str = "base"
    requires_anchor: bool = True

    def start(self) -> ScheduleContext:
        return ScheduleContext()

    def consume(self, line: str, ctx: ScheduleContext) -> str | None:
        """Handle context-setting lines. Returns what is left to parse, or None."""
        return line

    @abc.abstractmethod
    def resolve_explicit(self, header: DayHeader, ctx: ScheduleContext) -> date | None:
        """Date for a header carrying month and day."""
        ...

    def resolve(self, header: DayHeader, ctx: ScheduleContext) -> date | None:
        if header.has_date:
            return self.resolve_explicit(header, ctx)
        known = [d for d in (ctx.current, ctx.anchor) if d is not None]
        if not known:
            return None
        base = max(known)
        return next_weekday(base, header.weekday)


class WhatsAppDialect(Dialect):
    """Raw `_chat.txt` export: `[8/19/24, 10:56:49] Sender: message` lines."""

    name = "whatsapp"

    _MESSAGE = re.compile(
        r"^\[(\d{1,2})/(\d{1,2})/(\d{2}),\s*\d{1,2}:\d{2}(?::\d{2})?\]\s*([^:]+?):\s*(.*)$"
    )

    @staticmethod
    def parse_timestamp(month: str, day: str, year: str) -> date | None:
        yy = int(year)
        return safe_date(2000 + yy if yy < 50 else 1900 + yy, int(month), int(day))

    def consume(self, line: str, ctx: ScheduleContext) -> str | None:
        m = self._MESSAGE.match(line)
        if not m:
            return line
        # ctx.current carries over into the next message
        ctx.anchor = self.parse_timestamp(m.group(1), m.group(2), m.group(3))
        content = m.group(5).strip()
        return content or None

    def resolve_explicit(self, header: DayHeader, ctx: ScheduleContext) -> date | None:
        if header.year is not None:
            return safe_date(header.year, header.month, header.day)
        if ctx.anchor is None:
            return None
        return nearest_year(ctx.anchor, header.month, header.day)


class BeeperDialect(WhatsAppDialect):
    """Beeper chat export: messages grouped under `## Aug 19, 2024` headings."""

    name = "beeper"

    _WEEK = re.compile(r"^##\s+([a-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})", re.I)

    def consume(self, line: str, ctx: ScheduleContext) -> str | None:
        m = self._WEEK.match(line)
        if not m:
            return line
        month = MONTHS.get(m.group(1).lower())
        if month is not None:
            ctx.anchor = safe_date(int(m.group(3)), month, int(m.group(2)))
            ctx.current = None
        return None


class ManualDialect(Dialect):
    """Schedule text pasted by hand, with no year anywhere.

    Dates take the configured year and roll into the next one when a
    header jumps back more than half a year (a Sept-Jan schedule).
    """

    name = "manual"
    requires_anchor = False

    ROLLOVER_DAYS = 183

    def __init__(self, year: int | None = None, start: date | None = None) -> None:
        self.year = year or (start.year if start else settings.schedule_year)
        self.start_date = start or date(self.year, 1, 1)

    def start(self) -> ScheduleContext:
        return ScheduleContext(anchor=self.start_date, year=self.year)

    def resolve_explicit(self, header: DayHeader, ctx: ScheduleContext) -> date | None:
        if header.year is not None:
            resolved = safe_date(header.year, header.month, header.day)
            if resolved is not None:
                ctx.year = header.year
            return resolved

        year = ctx.year or self.year
        resolved = safe_date(year, header.month, header.day)
        if resolved is None:
            return None
        if ctx.current is not None and (ctx.current - resolved).days > self.ROLLOVER_DAYS:
            rolled = safe_date(year + 1, header.month, header.day)
            if rolled is not None:
                ctx.year = year + 1
                return rolled
        return resolved


DIALECTS: dict[str, type[Dialect]] = {
    WhatsAppDialect.name: WhatsAppDialect,
    BeeperDialect.name: BeeperDialect,
    ManualDialect.name: ManualDialect,
}


def get_dialect(name: str, **options) -> Dialect:
    try:
        cls = DIALECTS[name]
    except KeyError:
        raise ValueError(f"unknown schedule dialect: {name!r}") from None
    return cls(**options)
