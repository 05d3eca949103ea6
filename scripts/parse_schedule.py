#!/usr/bin/env python3
"""Parse a pasted schedule or chat export into shows.

Usage:
    scripts/parse_schedule.py schedule.txt
    scripts/parse_schedule.py _chat.txt --dialect whatsapp --json
    scripts/parse_schedule.py week.md --dialect beeper --csv > shows.csv
    scripts/parse_schedule.py autumn.txt --year 2024

Shows go to stdout; progress goes to stderr.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clubsync.log import configure_logging
from clubsync.schedule.dialects import DIALECTS
from clubsync.schedule.parser import parse_schedule, shows_to_csv, shows_to_json


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("file", type=Path)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("--dialect", choices=sorted(DIALECTS), default="manual")
    parser.add_argument("--year", type=int, help="year for manual schedules (default: SCHEDULE_YEAR)")
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("--csv", action="store_true")
    fmt.add_argument("--json", action="store_true")
    args = parser.parse_args()
    if args.verbose:
        configure_logging("DEBUG")

    text = args.file.read_text(encoding="utf-8")
    options = {"year": args.year} if args.dialect == "manual" and args.year else {}
    shows = parse_schedule(text, dialect=args.dialect, **options)
    print(f"Parsed {len(shows)} shows from {args.file.name}", file=sys.stderr)

    if args.json:
        print(shows_to_json(shows))
    elif args.csv:
        sys.stdout.write(shows_to_csv(shows))
    else:
        for show in shows:
            extra = f" (hosted by {show.hosted_by})" if show.hosted_by else ""
            print(f"{show.date} {show.day_of_week[:3]} {show.time}  {show.title}{extra}")


if __name__ == "__main__":
    main()
