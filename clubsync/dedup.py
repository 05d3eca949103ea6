"""Merge show records that describe the same night from different sources.

The iCal feed, hand-entered shows and chat-export imports overlap: the
same show arrives as "House Show" and "House Show: Special", sometimes a
day apart when a source stored the wrong date. Records are grouped when
their titles contain one another, their dates are at most a day apart and
their start times agree; each group becomes one record taken from the
most trusted source with empty fields filled in from the rest.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from clubsync.log import get_logger
from clubsync.models import ShowRecord, ShowSource
from clubsync.normalize import normalize_title

logger = get_logger("dedup")

SOURCE_PRIORITY = {
    ShowSource.ICAL.value: 1,
    ShowSource.MANUAL.value: 2,
    ShowSource.BEEPER.value: 4,
}
DEFAULT_PRIORITY = 3  # schedule imports and anything unknown

FILLABLE_FIELDS = ("description", "url", "image_url")
MAX_DAY_GAP = 1


def source_priority(source: str | ShowSource) -> int:
    """Lower is more trusted: ical, manual, schedule/other, beeper."""
    key = source.value if isinstance(source, ShowSource) else str(source)
    return SOURCE_PRIORITY.get(key, DEFAULT_PRIORITY)


def titles_overlap(a: str, b: str) -> bool:
    na, nb = normalize_title(a), normalize_title(b)
    return na == nb or na in nb or nb in na


def is_same_show(a: ShowRecord, b: ShowRecord) -> bool:
    return (
        a.time == b.time
        and abs((a.date - b.date).days) <= MAX_DAY_GAP
        and titles_overlap(a.title, b.title)
    )


def merge_group(candidates: Sequence[ShowRecord]) -> ShowRecord:
    """Best-source record of a group, with empty optional fields filled from the others."""
    ranked = sorted(candidates, key=lambda r: source_priority(r.source))
    merged = ranked[0].model_copy()
    for other in ranked[1:]:
        for field in FILLABLE_FIELDS:
            if not getattr(merged, field) and getattr(other, field):
                setattr(merged, field, getattr(other, field))
    return merged


def _merge_pass(records: list[ShowRecord]) -> list[ShowRecord]:
    used = [False] * len(records)
    merged: list[ShowRecord] = []

    for i, show in enumerate(records):
        if used[i]:
            continue
        group = [show]
        used[i] = True
        for j in range(i + 1, len(records)):
            if not used[j] and is_same_show(show, records[j]):
                group.append(records[j])
                used[j] = True
        if len(group) > 1:
            logger.debug(
                "shows_merged",
                title=show.title,
                date=show.date.isoformat(),
                sources=[r.source for r in group],
            )
        merged.append(merge_group(group))

    merged.sort(key=lambda r: (r.date, r.time or ""))
    return merged


def merge_shows(records: Iterable[ShowRecord]) -> list[ShowRecord]:
    """Collapse near-duplicate show records into one per real-world show.

    Passes repeat until nothing merges, so merging the output again
    changes nothing. A merged record keeps the date of its best source,
    so a later pass can join it with a record that was two days from one
    of its weaker duplicates.
    """
    current = list(records)
    total = len(current)
    while True:
        merged = _merge_pass(current)
        if len(merged) == len(current):
            break
        current = merged
    logger.info("dedup_complete", input=total, output=len(merged))
    return merged


def shows_in_window(records: Iterable[ShowRecord], start: date, days: int) -> list[ShowRecord]:
    """Records dated within [start, start + days)."""
    end = start + timedelta(days=days)
    return [r for r in records if start <= r.date < end]
