from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


class ShowSource(str, Enum):
    ICAL = "ical"
    MANUAL = "manual"
    SCHEDULE = "schedule"
    BEEPER = "beeper"


class TeamType(str, Enum):
    HOUSE = "house"
    INDIE = "indie"
    OTHER = "other"


class Performer(BaseModel):
    """Registry entry for a person who appears in shows."""

    id: int
    name: str
    slug: str
    image_url: str | None = None
    bio: str | None = None
    social: str | None = None


class Team(BaseModel):
    """A team and the weeks of the month it performs on."""

    id: int | None = None
    name: str
    slug: str
    type: TeamType = TeamType.HOUSE
    coach: str | None = None
    members: list[str] = Field(default_factory=list)
    weeks: list[int] = Field(default_factory=list)  # 1..5, nth weekday of month
    start_date: dt.date | None = None


class LineupResult(BaseModel):
    """Performers and hosts scraped from one event page."""

    performers: list[str] = Field(default_factory=list)
    hosts: list[str] = Field(default_factory=list)
    raw_content: str = ""
    full_description: str | None = None

    def role_for(self, name: str) -> str:
        return "host" if name in self.hosts else "performer"


class ParsedShow(BaseModel):
    """A show line recovered from pasted schedule text."""

    date: dt.date
    day_of_week: str
    time: str  # HH:MM, 24h
    title: str
    price: str | None = None
    hosted_by: str | None = None

    @property
    def key(self) -> tuple[dt.date, str, str]:
        return (self.date, self.time, self.title)


class ShowRecord(BaseModel):
    """A show as stored by one source, before cross-source merging."""

    id: int | str | None = None
    title: str
    date: dt.date
    time: str | None = None
    source: str = ShowSource.MANUAL.value
    slug: str | None = None
    url: str | None = None
    image_url: str | None = None
    description: str | None = None


# --- Performer match outcomes ---


class Matched(BaseModel):
    kind: Literal["matched"] = "matched"
    name: str
    entry: Any


class Unmatched(BaseModel):
    kind: Literal["unmatched"] = "unmatched"
    name: str
    slug: str = ""  # proposed registry slug for a newly-seen name
    suggestions: list[Any] = Field(default_factory=list)


class Ambiguous(BaseModel):
    kind: Literal["ambiguous"] = "ambiguous"
    name: str
    candidates: list[Any] = Field(default_factory=list)


MatchOutcome = Union[Matched, Unmatched, Ambiguous]


class CrawlSummary(BaseModel):
    processed: int = 0
    with_lineup: int = 0
    failed: int = 0
    performers: int = 0
