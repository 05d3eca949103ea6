from datetime import date

import pytest

from clubsync.schedule.common import (
    clean_line,
    is_non_show,
    next_weekday,
    parse_day_header,
    parse_show_line,
    safe_date,
    to_24h,
)


def test_day_header_month_first():
    header = parse_day_header("*Wednesday, August 21st*")
    assert (header.weekday, header.month, header.day, header.year) == ("Wednesday", 8, 21, None)


def test_day_header_dash():
    header = parse_day_header("WEDNESDAY - August 6")
    assert (header.weekday, header.month, header.day) == ("Wednesday", 8, 6)


def test_day_header_day_first():
    header = parse_day_header("SUNDAY 7th Sept")
    assert (header.weekday, header.month, header.day) == ("Sunday", 9, 7)
    header = parse_day_header("Wednesday, 26 Nov")
    assert (header.month, header.day) == (11, 26)


def test_day_header_with_year():
    header = parse_day_header("Friday, Nov 1, 2024")
    assert (header.month, header.day, header.year) == (11, 1, 2024)


def test_day_header_bare_weekday():
    header = parse_day_header("Friday:")
    assert header.weekday == "Friday"
    assert header.has_date is False


def test_day_header_rejects_other_lines():
    assert parse_day_header("Friday, Smarch 13") is None
    assert parse_day_header("8:00pm - House Show") is None
    assert parse_day_header("") is None


@pytest.mark.parametrize(
    "hour, minute, meridiem, expected",
    [
        (8, 0, "pm", "20:00"),
        (12, 30, "am", "00:30"),
        (12, 15, "pm", "12:15"),
        (9, 5, "a.m.", "09:05"),
        (20, 0, None, "20:00"),
        (24, 0, None, None),
        (20, 60, None, None),
        (13, 0, "pm", None),
    ],
)
def test_to_24h(hour, minute, meridiem, expected):
    assert to_24h(hour, minute, meridiem) == expected


def test_show_line_time_first():
    show = parse_show_line("8:00pm - Show Title (Hosted by X)")
    assert show.time == "20:00"
    assert show.title == "Show Title"
    assert show.hosted_by == "X"
    assert show.price is None


def test_show_line_range():
    show = parse_show_line("20:00-21:00 - Improv Jam")
    assert (show.time, show.title) == ("20:00", "Improv Jam")
    show = parse_show_line("8:00 PM - 9:00 PM: Late Show")
    assert (show.time, show.title) == ("20:00", "Late Show")


def test_show_line_hour_only():
    show = parse_show_line("8pm - 5 Minute Musicals")
    assert (show.time, show.title) == ("20:00", "5 Minute Musicals")


def test_show_line_title_first():
    show = parse_show_line("Improv Jam: 20:00")
    assert (show.time, show.title) == ("20:00", "Improv Jam")
    show = parse_show_line("Musical Improv - 7:30 PM - 9:00 PM")
    assert (show.time, show.title) == ("19:30", "Musical Improv")


def test_show_line_price():
    show = parse_show_line("• 7:30pm - Stand-up Night (5€)")
    assert (show.time, show.title, show.price) == ("19:30", "Stand-up Night", "5€")
    show = parse_show_line("*20:00 - House Show (free)*")
    assert (show.title, show.price) == ("House Show", "free")


def test_show_line_invalid_time_dropped():
    assert parse_show_line("25:00 - Midnight Madness") is None
    assert parse_show_line("20:75 - Odd Show") is None


def test_show_line_skips_non_shows():
    assert parse_show_line("10:00 - Yoga for Improvisers") is None
    assert parse_show_line("11:00 - Clown Workshop") is None
    assert parse_show_line("14:00 - Workshop Jam") is not None
    assert parse_show_line("https://club.example/tickets") is None
    assert parse_show_line("image omitted") is None
    assert parse_show_line("Time: 10:00 - 13:00") is None
    assert parse_show_line("Just chatting about the weekend") is None


def test_is_non_show():
    assert is_non_show("Morning Movement") is True
    assert is_non_show("Klein Technique") is True
    assert is_non_show("Workshop Jam") is False
    assert is_non_show("House Show") is False


def test_clean_line():
    assert clean_line("\u200e[8/19/24, 10:56:49] Anna: hi ") == "[8/19/24, 10:56:49] Anna: hi"
    assert clean_line("8:00pm\u00a0- Show\u00a0") == "8:00pm - Show"


def test_date_helpers():
    assert safe_date(2025, 2, 30) is None
    assert safe_date(2024, 2, 29) == date(2024, 2, 29)
    assert next_weekday(date(2025, 1, 6), "Friday") == date(2025, 1, 10)
    assert next_weekday(date(2025, 1, 10), "friday") == date(2025, 1, 10)
