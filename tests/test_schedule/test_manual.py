from datetime import date

import pytest

from clubsync.schedule.dialects import ManualDialect, get_dialect
from clubsync.schedule.parser import ScheduleParser, parse_schedule


def test_parse_hosted_show():
    text = "Friday, January 10\n8:00pm - Show Title (Hosted by X)\n"
    shows = parse_schedule(text, year=2025)
    assert len(shows) == 1
    show = shows[0]
    assert show.date == date(2025, 1, 10)
    assert show.day_of_week == "Friday"
    assert show.time == "20:00"
    assert show.title == "Show Title"
    assert show.hosted_by == "X"


def test_parse_week():
    text = """
*Wednesday, January 8th*
• 7:30pm - Stand-up Night (5€)
10:00 - Yoga for Improvisers

*Friday, January 10th*
8:00pm - House Show
10pm - Late Night Jam

Saturday
20:00-21:30 - Musical Improv
"""
    shows = parse_schedule(text, year=2025)
    assert [(s.date, s.time, s.title) for s in shows] == [
        (date(2025, 1, 8), "19:30", "Stand-up Night"),
        (date(2025, 1, 10), "20:00", "House Show"),
        (date(2025, 1, 10), "22:00", "Late Night Jam"),
        (date(2025, 1, 11), "20:00", "Musical Improv"),
    ]
    assert shows[0].price == "5€"


def test_shows_before_first_header_dropped():
    text = "8:00pm - Orphan Show\nFriday, January 10\n8:00pm - House Show"
    shows = parse_schedule(text, year=2025)
    assert [s.title for s in shows] == ["House Show"]


def test_invalid_header_date_drops_its_shows():
    text = "Friday, February 30\n8pm - Lost Show\nFriday, January 10\n8pm - House Show"
    shows = parse_schedule(text, year=2025)
    assert [s.title for s in shows] == ["House Show"]


def test_duplicates_removed():
    text = "Friday, January 10\n8pm - House Show\n8:00 PM - House Show\n"
    assert len(parse_schedule(text, year=2025)) == 1


def test_sorted_by_date_and_time():
    text = "Friday, January 10\n10pm - Late Show\n8pm - Early Show\nWednesday, January 8\n8pm - Midweek Show"
    shows = parse_schedule(text, year=2025)
    assert [s.title for s in shows] == ["Midweek Show", "Early Show", "Late Show"]


def test_year_rollover():
    text = """
Friday, December 27
8pm - House Show
Friday, January 3
8pm - House Show
"""
    shows = ScheduleParser(ManualDialect(year=2024)).parse(text)
    assert [s.date for s in shows] == [date(2024, 12, 27), date(2025, 1, 3)]


def test_explicit_year():
    text = "Friday, Nov 1, 2024\n8pm - House Show"
    shows = parse_schedule(text, year=2025)
    assert shows[0].date == date(2024, 11, 1)


def test_default_year_from_settings():
    from clubsync.config import settings

    assert ManualDialect().year == settings.schedule_year


def test_empty_text():
    assert parse_schedule("") == []
    assert parse_schedule("nothing to see here") == []


def test_unknown_dialect():
    with pytest.raises(ValueError):
        get_dialect("telegram")
