"""Line-level parsing shared by every schedule dialect.

Schedules are typed by hand, so the same information shows up in many
shapes: "*Wednesday, August 21st*", "SUNDAY 7th Sept", "Friday:", and show
lines like "8:00pm - House Show (Hosted by X)" or "Improv Jam: 20:00".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_WEEKDAY = r"(monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
_ORDINAL = r"(?:st|nd|rd|th)?"
_YEAR = r"(?:,?\s+(\d{4}))?"

# (pattern, month group, day group, year group)
_DAY_HEADERS = [
    # "Wednesday, August 21st", "Friday, Nov 1, 2024"
    (re.compile(rf"^{_WEEKDAY},?\s+([a-z]+)\.?\s+(\d{{1,2}}){_ORDINAL}{_YEAR}$", re.I), 2, 3, 4),
    # "WEDNESDAY - August 6"
    (re.compile(rf"^{_WEEKDAY}\s*[-–]\s*([a-z]+)\.?\s+(\d{{1,2}}){_ORDINAL}{_YEAR}$", re.I), 2, 3, 4),
    # "SUNDAY 7th Sept", "Wednesday, 26 Nov"
    (re.compile(rf"^{_WEEKDAY},?\s+(\d{{1,2}}){_ORDINAL}\s+([a-z]+)\.?{_YEAR}$", re.I), 3, 2, 4),
]
_BARE_WEEKDAY = re.compile(rf"^{_WEEKDAY}$", re.I)

_MERIDIEM = r"[ap]\.?m\.?(?![a-z])"
# An end time must carry minutes or am/pm so "8pm - 5 Minute Musicals" keeps its title
_END_TIME = (
    rf"(?:\s*[-–]\s*(?=\d{{1,2}}(?:[:.]\d{{2}}|\s*{_MERIDIEM}))"
    rf"\d{{1,2}}(?:[:.]\d{{2}})?\s*(?P<end_meridiem>{_MERIDIEM})?)"
)
_CLOCK = rf"(?P<hour>\d{{1,2}})[:.](?P<minute>\d{{2}})\s*(?P<meridiem>{_MERIDIEM})?"

# "8:00pm - Show", "20:00-21:00 - Show", "8:00 PM - 9:00 PM: Show", "20:00 Show", "8pm Show"
_TIME_FIRST = re.compile(
    rf"^(?P<hour>\d{{1,2}})(?:[:.](?P<minute>\d{{2}}))?\s*(?P<meridiem>{_MERIDIEM})?"
    rf"{_END_TIME}?(?:\s*[-–:]\s*|\s+)(?P<title>.+)$",
    re.I,
)
# "Show Name - 8:00 PM - 9:00 PM", "Show Name: 20:00"
_TITLE_FIRST = re.compile(rf"^(?P<title>.+?)\s*[-–:]\s*{_CLOCK}{_END_TIME}?(?:\s.*)?$", re.I)
# "Show Name 8:00 PM - 9:00 PM"
_TITLE_FIRST_RANGE = re.compile(rf"^(?P<title>.+?)\s+{_CLOCK}{_END_TIME}(?:\s.*)?$", re.I)

_SKIP_LINE = [
    re.compile(r"^\[?\d{1,2}/\d{1,2}/\d{2}"),  # chat timestamps
    re.compile(r"^\[\d"),
    re.compile(r"^(?:https?:|www\.)", re.I),
    re.compile(r"\b(?:omitted|deleted|edited)\b", re.I),  # chat system messages
    re.compile(r"^time:", re.I),  # workshop details
    re.compile(r"^(?:sat|sun),", re.I),
]
_LEADING_BULLET = re.compile(r"^[•\-–*]+\s*")
_HOSTED_BY = re.compile(r"\(\s*hosted by\s+(.+?)\)", re.I)
_PRICE = re.compile(r"\((\d+\s*€|free)\)|[-–]\s*(\d+\s*€)", re.I)
_NON_SHOW = re.compile(r"yoga|workshop|klein technique|morning movement", re.I)
_JAM = re.compile(r"jam", re.I)

_TITLE_CLEANUP = [
    re.compile(r"\s*[-–]\s*\d{1,2}[:.]\d{2}.*$"),  # trailing end time
    re.compile(r"\s*[-–]\s*\d+\s*€.*$"),
    re.compile(r"\s*\(\d+\s*€\)", re.I),
    re.compile(r"\s*\(free\)", re.I),
    re.compile(r"\s*\(\s*hosted by\s+.+?\)", re.I),
]
_TITLE_LOOKS_LIKE_TIME = re.compile(r"^\[?\d{1,2}[/:]")
_FORMATTING = re.compile(r"[*•_~]")


@dataclass
class DayHeader:
    weekday: str
    month: int | None = None
    day: int | None = None
    year: int | None = None

    @property
    def has_date(self) -> bool:
        return self.month is not None and self.day is not None


@dataclass
class ShowLine:
    time: str
    title: str
    price: str | None = None
    hosted_by: str | None = None


def clean_line(line: str) -> str:
    """Strip whitespace and the invisible marks chat exports put at line starts."""
    return line.replace("\u200e", "").replace("\u00a0", " ").strip()


def parse_day_header(line: str) -> DayHeader | None:
    """Recognize a day header line. Lines with an unknown month are not headers."""
    text = _FORMATTING.sub("", line).strip().rstrip(":").strip()
    if not text:
        return None

    m = _BARE_WEEKDAY.match(text)
    if m:
        return DayHeader(weekday=m.group(1).capitalize())

    for pattern, month_group, day_group, year_group in _DAY_HEADERS:
        m = pattern.match(text)
        if not m:
            continue
        month = MONTHS.get(m.group(month_group).lower())
        if month is None:
            continue
        year = m.group(year_group)
        return DayHeader(
            weekday=m.group(1).capitalize(),
            month=month,
            day=int(m.group(day_group)),
            year=int(year) if year else None,
        )
    return None


def to_24h(hour: int, minute: int, meridiem: str | None) -> str | None:
    """Format a clock time as HH:MM. None when the result isn't a valid time."""
    if meridiem:
        meridiem = meridiem.lower().replace(".", "")
        if hour > 12:
            return None
        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def _match_show(line: str) -> tuple[int, int, str | None, str] | None:
    """Split a show line into (hour, minute, am/pm, raw title)."""
    m = _TIME_FIRST.match(line)
    if m is None or not (m.group("minute") or m.group("meridiem")):
        m = _TITLE_FIRST.match(line) or _TITLE_FIRST_RANGE.match(line)
    if not m:
        return None
    return (
        int(m.group("hour")),
        int(m.group("minute") or 0),
        m.group("meridiem") or m.group("end_meridiem"),
        m.group("title"),
    )


def is_non_show(title: str) -> bool:
    return bool(_NON_SHOW.search(title)) and not _JAM.search(title)


def parse_show_line(line: str) -> ShowLine | None:
    """Parse "time + title" lines. Returns None for anything that isn't a show."""
    if any(p.search(line) for p in _SKIP_LINE):
        return None

    line = _LEADING_BULLET.sub("", line).strip()
    line = line.replace("*", "").strip()

    matched = _match_show(line)
    if matched is None:
        return None
    hour, minute, meridiem, title = matched

    time = to_24h(hour, minute, meridiem)
    if time is None:
        return None

    hosted = _HOSTED_BY.search(line)
    price = _PRICE.search(line)

    for pattern in _TITLE_CLEANUP:
        title = pattern.sub("", title)
    title = title.strip(" -–:")

    if len(title) < 3 or _TITLE_LOOKS_LIKE_TIME.match(title):
        return None
    if is_non_show(title):
        return None

    return ShowLine(
        time=time,
        title=title,
        price=(price.group(1) or price.group(2)).replace(" ", "") if price else None,
        hosted_by=hosted.group(1).strip() if hosted else None,
    )


def safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def next_weekday(start: date, weekday: str) -> date:
    """First date on or after `start` falling on `weekday`."""
    target = WEEKDAYS.index(weekday.capitalize())
    return start + timedelta(days=(target - start.weekday()) % 7)


def weekday_name(d: date) -> str:
    return WEEKDAYS[d.weekday()]
