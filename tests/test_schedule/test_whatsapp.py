from datetime import date

from clubsync.schedule.dialects import WhatsAppDialect, nearest_year
from clubsync.schedule.parser import parse_schedule

CHAT = """\
Messages and calls are end-to-end encrypted.
[8/19/24, 10:56:49] Anna Lee: Hi all! Here's the schedule for this week
*Wednesday, August 21st*
8:00pm - House Show
*Friday, August 23rd*
7:30pm - Improv Jam (free)
[8/19/24, 11:02:13] Ben: ‎image omitted
8pm - Late Show
"""


def test_parse_chat_export():
    shows = parse_schedule(CHAT, dialect="whatsapp")
    assert [(s.date, s.time, s.title) for s in shows] == [
        (date(2024, 8, 21), "20:00", "House Show"),
        (date(2024, 8, 23), "19:30", "Improv Jam"),
        (date(2024, 8, 23), "20:00", "Late Show"),
    ]
    assert shows[1].price == "free"


def test_header_inside_message():
    text = "[12/30/24, 09:15:02] Anna Lee: Friday, January 3\n8:00pm - House Show\n"
    shows = parse_schedule(text, dialect="whatsapp")
    assert shows[0].date == date(2025, 1, 3)


def test_schedule_split_across_messages():
    text = (
        "[8/19/24, 10:56:49] Anna Lee: *Friday, August 23rd*\n"
        "[8/19/24, 10:57:02] Anna Lee: 8:00pm - House Show\n"
        "[8/19/24, 10:57:30] Anna Lee: 10pm - Late Night Jam\n"
    )
    shows = parse_schedule(text, dialect="whatsapp")
    assert [(s.date, s.time, s.title) for s in shows] == [
        (date(2024, 8, 23), "20:00", "House Show"),
        (date(2024, 8, 23), "22:00", "Late Night Jam"),
    ]


def test_bare_weekday_in_later_message_uses_message_date():
    text = (
        "[8/19/24, 10:00:00] Anna Lee: Wednesday, August 21\n"
        "8pm - House Show\n"
        "[9/2/24, 10:00:00] Anna Lee: Friday\n"
        "8pm - House Show\n"
    )
    shows = parse_schedule(text, dialect="whatsapp")
    assert [s.date for s in shows] == [date(2024, 8, 21), date(2024, 9, 6)]


def test_lines_before_first_message_ignored():
    text = "Friday, January 3\n8:00pm - House Show\n"
    assert parse_schedule(text, dialect="whatsapp") == []


def test_parse_timestamp():
    assert WhatsAppDialect.parse_timestamp("8", "19", "24") == date(2024, 8, 19)
    assert WhatsAppDialect.parse_timestamp("2", "30", "24") is None


def test_nearest_year():
    assert nearest_year(date(2024, 12, 30), 1, 3) == date(2025, 1, 3)
    assert nearest_year(date(2025, 1, 2), 12, 27) == date(2024, 12, 27)
    assert nearest_year(date(2024, 8, 19), 8, 21) == date(2024, 8, 21)
    assert nearest_year(date(2025, 3, 1), 2, 29) == date(2024, 2, 29)
