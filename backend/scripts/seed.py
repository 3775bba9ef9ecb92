#!/usr/bin/env python3
"""Fill the database with random but plausible readings (1-3 per day).
Usage: DATABASE_URL=... python scripts/seed.py --days 60"""
import argparse
import asyncio
import random
from datetime import datetime, timedelta, timezone

from bp_tracker.db.session import async_session_maker, init_db
from bp_tracker.models.reading import Reading
from bp_tracker.services.classification import classify_bp
from bp_tracker.services.readings import seed_readings


def generate(days: int, now: datetime, rng: random.Random) -> list[Reading]:
    start = now - timedelta(days=days)
    out: list[Reading] = []
    for day in range(days):
        for i in range(rng.randint(1, 3)):
            systolic = 110 + rng.randrange(40)   # 110-149
            diastolic = 70 + rng.randrange(20)   # 70-89
            pulse = 60 + rng.randrange(30)       # 60-89
            out.append(
                Reading(
                    timestamp=start + timedelta(days=day, hours=4 * i),
                    systolic=systolic,
                    diastolic=diastolic,
                    pulse=pulse,
                    classification=classify_bp(systolic, diastolic).name,
                )
            )
    return out


async def main():
    parser = argparse.ArgumentParser(description="Generate sample blood pressure readings")
    parser.add_argument("--days", type=int, default=60, help="Number of days of data to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    await init_db()
    readings = generate(args.days, datetime.now(timezone.utc), random.Random(args.seed))
    async with async_session_maker() as session:
        await seed_readings(session, readings)
        await session.commit()
    print(f"Generated {len(readings)} readings over {args.days} days")


if __name__ == "__main__":
    asyncio.run(main())
