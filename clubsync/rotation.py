"""House Show team rotation.

Four house teams share the Friday House Show; each performs on fixed
weeks of the month ("2nd and 4th Fridays"). A 5th Friday has no teams.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Iterable, Sequence

from clubsync.log import get_logger
from clubsync.models import ShowRecord, Team, TeamType

logger = get_logger("rotation")

FRIDAY = 4

HOUSE_SHOW_TEAMS: tuple[Team, ...] = (
    Team(
        name="Brace! Brace!",
        slug="brace-brace",
        weeks=[2, 4],
        coach="Noah Telson",
        members=[
            "Anita Waltho",
            "Georgia Riungu",
            "Jared Lorenzo",
            "Julia Lang",
            "Kathy MacLeod",
            "Keshia Fredua-Mensah",
            "Pip Roper",
            "Simone O'Donovan",
            "Tina Marie Serra",
            "Zoe Langer",
        ],
    ),
    Team(
        name="Handshake",
        slug="handshake",
        weeks=[1, 4],
        coach="Josh Telson",
        start_date=dt.date(2025, 1, 1),
        members=[
            "AdibA",
            "Grant Selland",
            "Harry Haddon",
            "Katie Kerckaert",
            "Laura Kenny",
            "Lucrezia Villani",
            "Poppe",
            "Seema Iyer",
            "Theo Mason Wood",
        ],
    ),
    Team(
        name="Capiche",
        slug="capiche",
        weeks=[2, 3],
        coach="Antonia Bär",
        start_date=dt.date(2025, 8, 1),
        members=[
            "Adam Ferreira",
            "Evelyn Ferguson",
            "Harry Ritchie",
            "Ilana Ullman",
            "Jason Porter",
            "Marie-Laure Gagné",
            "Sonia Williams",
            "Terezie Fendrychova",
            "Tetiana Mulenko",
            "Vishal Bala",
        ],
    ),
    Team(
        name="Thunderclap!",
        slug="thunderclap",
        weeks=[1, 3],
        coach="Caroline Clifford",
        members=[
            "Adrian Doonan",
            "Georg Kammerer",
            "Julie Millaud",
            "Konrad Duffy",
            "Lisa Gelbhardt",
            "Martina Tranström",
            "Muaaz Saleem",
            "Richie Murphy",
            "Theresa Robinson",
        ],
    ),
)


def _as_date(day: dt.date | str) -> dt.date:
    if isinstance(day, dt.datetime):
        return day.date()
    if isinstance(day, dt.date):
        return day
    return dt.date.fromisoformat(day[:10])


def nth_weekday_of_month(day: dt.date | str) -> int:
    """Which occurrence of its weekday `day` is within the month (1-5)."""
    return math.ceil(_as_date(day).day / 7)


def team_performs_on(team: Team, day: dt.date | str) -> bool:
    d = _as_date(day)
    if team.start_date is not None and d < team.start_date:
        return False
    return nth_weekday_of_month(d) in team.weeks


def get_teams_for_date(day: dt.date | str, roster: Sequence[Team] = HOUSE_SHOW_TEAMS) -> list[Team]:
    """Teams on the bill for `day`, in roster order. Empty on a 5th week."""
    d = _as_date(day)
    return [team for team in roster if team_performs_on(team, d)]


def is_house_show(title: str) -> bool:
    return title.strip().lower() == "house show"


def format_teams(day: dt.date | str, roster: Sequence[Team] = HOUSE_SHOW_TEAMS) -> str:
    return " & ".join(team.name for team in get_teams_for_date(day, roster))


def get_team_by_slug(slug: str, roster: Sequence[Team] = HOUSE_SHOW_TEAMS) -> Team | None:
    return next((team for team in roster if team.slug == slug), None)


def is_house_team(slug: str, roster: Sequence[Team] = HOUSE_SHOW_TEAMS) -> bool:
    team = get_team_by_slug(slug, roster)
    return team is not None and team.type == TeamType.HOUSE


def upcoming_dates(
    slug: str,
    count: int = 5,
    today: dt.date | None = None,
    weekday: int = FRIDAY,
    roster: Sequence[Team] = HOUSE_SHOW_TEAMS,
) -> list[dt.date]:
    """Next `count` show dates for a team, starting from `today` inclusive."""
    team = get_team_by_slug(slug, roster)
    if team is None or not any(1 <= w <= 5 for w in team.weeks) or count <= 0:
        return []

    day = today or dt.date.today()
    day += dt.timedelta(days=(weekday - day.weekday()) % 7)
    dates: list[dt.date] = []
    while len(dates) < count:
        if team_performs_on(team, day):
            dates.append(day)
        day += dt.timedelta(days=7)
    return dates


def house_show_lineups(
    records: Iterable[ShowRecord], roster: Sequence[Team] = HOUSE_SHOW_TEAMS
) -> list[tuple[ShowRecord, list[Team]]]:
    """Pair every House Show record with the teams the rotation puts on it."""
    lineups = []
    skipped = 0
    for record in records:
        if not is_house_show(record.title):
            continue
        teams = get_teams_for_date(record.date, roster)
        if not teams:
            skipped += 1
            continue
        lineups.append((record, teams))
    logger.info("house_show_lineups", shows=len(lineups), skipped=skipped)
    return lineups
