#!/usr/bin/env python3
"""Delete readings: all of them, or those before/after a date.
Usage: DATABASE_URL=... python scripts/cleanup.py --mode before-date --date 2026-01-01"""
import argparse
import asyncio
import sys
from datetime import datetime, timezone

from bp_tracker.db.session import async_session_maker
from bp_tracker.services.readings import clear_readings, delete_readings_after, delete_readings_before


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Remove stored readings")
    parser.add_argument("--mode", choices=["all", "before-date", "after-date"], default="all")
    parser.add_argument("--date", default="", help="Cutoff date (YYYY-MM-DD) for before-date/after-date")
    args = parser.parse_args(argv)

    cutoff = None
    if args.mode != "all":
        if not args.date:
            print("--date is required for before-date/after-date", file=sys.stderr)
            return 2
        try:
            cutoff = datetime.strptime(args.date, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            print(f"Invalid date {args.date!r}; use YYYY-MM-DD", file=sys.stderr)
            return 2

    async with async_session_maker() as session:
        if args.mode == "all":
            count = await clear_readings(session)
        elif args.mode == "before-date":
            count = await delete_readings_before(session, cutoff)
        else:
            count = await delete_readings_after(session, cutoff)
        await session.commit()
    print(f"Deleted {count} readings ({args.mode}{' ' + args.date if cutoff else ''})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
