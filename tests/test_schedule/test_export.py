import json
from datetime import date

from clubsync.models import ParsedShow
from clubsync.schedule.parser import dedupe_shows, merge_parsed_shows, shows_to_csv, shows_to_json


def _show(day, time, title, **kwargs):
    d = date(2025, 1, day)
    return ParsedShow(date=d, day_of_week=d.strftime("%A"), time=time, title=title, **kwargs)


def test_shows_to_csv():
    csv_text = shows_to_csv([_show(10, "20:00", "Show Title", hosted_by="X")])
    assert csv_text.splitlines() == [
        "date,day_of_week,time,title,price,hosted_by",
        "2025-01-10,Friday,20:00,Show Title,,X",
    ]


def test_shows_to_csv_quotes_commas():
    csv_text = shows_to_csv([_show(10, "20:00", "Stand-up, Sketch & Songs", price="5€")])
    assert '"Stand-up, Sketch & Songs",5€,' in csv_text


def test_shows_to_json():
    data = json.loads(shows_to_json([_show(10, "20:00", "House Show")]))
    assert data == [
        {"date": "2025-01-10", "day_of_week": "Friday", "time": "20:00", "title": "House Show"}
    ]


def test_dedupe_keeps_first():
    first = _show(10, "20:00", "House Show", hosted_by="X")
    again = _show(10, "20:00", "House Show")
    assert dedupe_shows([first, again]) == [first]


def test_merge_parsed_shows():
    existing = [_show(10, "20:00", "House Show"), _show(8, "19:30", "Stand-up Night")]
    new = [_show(10, "20:00", "House Show"), _show(11, "20:00", "Improv Jam")]
    merged = merge_parsed_shows(existing, new)
    assert [(s.date.day, s.title) for s in merged] == [
        (8, "Stand-up Night"),
        (10, "House Show"),
        (11, "Improv Jam"),
    ]
