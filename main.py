"""
Command-line calendar viewer for the slot engine.

Runs against the in-memory demo store, so no backing service is needed.

Usage:
    python main.py calendar --plan rec_half_body --days 7
    python main.py slots --date 2025-08-10 --hour 11 --plan rec_experience_30
    python main.py next --plan rec_full_body
"""

import argparse
import logging
import sys
from datetime import date

from slotbook.config import settings
from slotbook.scheduling.slots import find_next_available, generate_slots_for_hour
from slotbook.scheduling.summary import summarize_week
from slotbook.scheduling.timeutils import hour_start, parse_date
from slotbook.services.plans import PlanNotFoundError, require_plan
from slotbook.services.seed import build_demo_store

logger = logging.getLogger(__name__)


def _cmd_calendar(args: argparse.Namespace) -> None:
    plan = require_plan(args.plan) if args.plan else None
    start = parse_date(args.date) if args.date else date.today()
    snapshot = build_demo_store().snapshot()
    grid = summarize_week(start, plan, snapshot, days=args.days)

    hours = range(settings.calendar.start_hour, settings.calendar.end_hour)
    sys.stdout.write("      " + "".join(f"{d:>14}" for d in grid) + "\n")
    for row, hour in enumerate(hours):
        cells = "".join(f"{day[row].label:>14}" for day in grid.values())
        sys.stdout.write(f"{hour:02d}:00 {cells}\n")


def _cmd_slots(args: argparse.Namespace) -> None:
    plan = require_plan(args.plan)
    snapshot = build_demo_store().snapshot()
    slots = generate_slots_for_hour(hour_start(parse_date(args.date), args.hour), plan, snapshot)
    if not slots:
        sys.stdout.write("No bookable start times in this hour.\n")
        return
    for slot in slots:
        sys.stdout.write(f"{slot:%Y-%m-%d %H:%M}\n")


def _cmd_next(args: argparse.Namespace) -> None:
    plan = require_plan(args.plan)
    snapshot = build_demo_store().snapshot()
    dates = find_next_available(plan, snapshot, limit=args.limit)
    if not dates:
        sys.stdout.write("Nothing available within the booking window.\n")
        return
    for entry in dates:
        sys.stdout.write(
            f"{entry['date']} ({entry['weekday']}): {entry['slot_count']} slot(s), "
            f"first at {entry['first_slot']}\n"
        )


def main() -> None:
    parser = argparse.ArgumentParser(
        description=f"Browse bookable time slots for {settings.business_name}."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calendar = subparsers.add_parser("calendar", help="Show the hour summary grid.")
    calendar.add_argument("--date", type=str, default=None, help="First day (YYYY-MM-DD).")
    calendar.add_argument("--plan", type=str, default=None, help="Plan id (default: preview).")
    calendar.add_argument("--days", type=int, default=7, help="Number of days to show.")
    calendar.set_defaults(handler=_cmd_calendar)

    slots = subparsers.add_parser("slots", help="List bookable start times in one hour.")
    slots.add_argument("--date", type=str, required=True, help="Day (YYYY-MM-DD).")
    slots.add_argument("--hour", type=int, required=True, help="Hour of day (0-23).")
    slots.add_argument("--plan", type=str, required=True, help="Plan id.")
    slots.set_defaults(handler=_cmd_slots)

    nxt = subparsers.add_parser("next", help="List the next dates with open slots.")
    nxt.add_argument("--plan", type=str, required=True, help="Plan id.")
    nxt.add_argument("--limit", type=int, default=5, help="Maximum dates to list.")
    nxt.set_defaults(handler=_cmd_next)

    args = parser.parse_args()
    try:
        args.handler(args)
    except PlanNotFoundError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except ValueError as exc:
        logger.error("Invalid argument: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
