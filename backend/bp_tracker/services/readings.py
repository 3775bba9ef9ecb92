"""Reading storage and rolling-average statistics."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bp_tracker.models.reading import Reading
from bp_tracker.schemas.reading import AverageResponse, ReadingResponse, StatsResponse

logger = logging.getLogger(__name__)

SEVEN_DAYS = timedelta(days=7)
THIRTY_DAYS = timedelta(days=30)


class ReadingNotFoundError(LookupError):
    def __init__(self, reading_id: int):
        self.reading_id = reading_id
        super().__init__(f"no reading found with id {reading_id} to delete")


async def save_reading(
    session: AsyncSession,
    *,
    systolic: int,
    diastolic: int,
    pulse: int,
    classification: str,
    timestamp: datetime | None = None,
) -> Reading:
    row = Reading(
        timestamp=timestamp or datetime.now(timezone.utc),
        systolic=systolic,
        diastolic=diastolic,
        pulse=pulse,
        classification=classification,
    )
    session.add(row)
    await session.flush()
    return row


async def _average(
    session: AsyncSession,
    start: datetime | None = None,
    end: datetime | None = None,
) -> tuple[AverageResponse | None, int]:
    """Rounded averages over [start, end); (None, 0) when the window is empty."""
    q = select(
        func.round(func.avg(Reading.systolic)),
        func.round(func.avg(Reading.diastolic)),
        func.round(func.avg(Reading.pulse)),
        func.count(Reading.id),
    )
    if start is not None:
        q = q.where(Reading.timestamp >= start)
    if end is not None:
        q = q.where(Reading.timestamp < end)
    systolic, diastolic, pulse, count = (await session.execute(q)).one()
    if not count:
        return None, 0
    return AverageResponse(systolic=int(systolic), diastolic=int(diastolic), pulse=int(pulse)), count


async def get_stats(session: AsyncSession, now: datetime | None = None) -> StatsResponse:
    """
    Last reading plus 7-day, 30-day and all-time averages.
    Returns an empty StatsResponse when there are no readings at all.
    """
    r = await session.execute(select(Reading).order_by(Reading.timestamp.desc()).limit(1))
    last = r.scalar_one_or_none()
    if last is None:
        return StatsResponse()

    now = now or datetime.now(timezone.utc)
    seven_day_avg, seven_day_count = await _average(session, now - SEVEN_DAYS, now)
    thirty_day_avg, thirty_day_count = await _average(session, now - THIRTY_DAYS, now)
    all_time_avg, all_time_count = await _average(session)
    return StatsResponse(
        last_reading=ReadingResponse.model_validate(last),
        seven_day_avg=seven_day_avg,
        seven_day_count=seven_day_count,
        thirty_day_avg=thirty_day_avg,
        thirty_day_count=thirty_day_count,
        all_time_avg=all_time_avg,
        all_time_count=all_time_count,
    )


async def get_all_readings(session: AsyncSession) -> list[Reading]:
    """All readings, newest first."""
    r = await session.execute(select(Reading).order_by(Reading.timestamp.desc()))
    return list(r.scalars().all())


async def delete_reading(session: AsyncSession, reading_id: int) -> None:
    result = await session.execute(delete(Reading).where(Reading.id == reading_id))
    if not result.rowcount:
        raise ReadingNotFoundError(reading_id)
    logger.info("Deleted reading id=%s", reading_id)


async def clear_readings(session: AsyncSession) -> int:
    result = await session.execute(delete(Reading))
    logger.info("Cleared %s readings", result.rowcount)
    return result.rowcount or 0


async def delete_readings_before(session: AsyncSession, cutoff: datetime) -> int:
    result = await session.execute(
        delete(Reading).where(Reading.timestamp < cutoff).execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


async def delete_readings_after(session: AsyncSession, cutoff: datetime) -> int:
    result = await session.execute(
        delete(Reading).where(Reading.timestamp > cutoff).execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


async def seed_readings(session: AsyncSession, readings: list[Reading]) -> int:
    """Insert readings in one flush; the caller's transaction decides commit or rollback."""
    session.add_all(readings)
    await session.flush()
    logger.info("Seeded %s readings", len(readings))
    return len(readings)


def sample_readings(now: datetime | None = None) -> list[Reading]:
    """Fixed development data set spread over the last ~100 days (every window gets data)."""
    now = now or datetime.now(timezone.utc)
    samples = [
        # > 90 days ago
        (100, 125, 83, 70, "Hypertension Stage 1"),
        (95, 120, 79, 68, "Normal"),
        # 30-90 days ago
        (45, 133, 86, 74, "Hypertension Stage 1"),
        (35, 128, 82, 71, "Elevated"),
        # 7-30 days ago
        (25, 142, 91, 78, "Hypertension Stage 2"),
        (15, 138, 87, 76, "Hypertension Stage 1"),
        (10, 126, 83, 72, "Hypertension Stage 1"),
        (8, 121, 79, 69, "Normal"),
        # last 7 days
        (6, 118, 78, 65, "Normal"),
        (5, 122, 81, 70, "Elevated"),
        (3, 135, 88, 75, "Hypertension Stage 1"),
        (1, 141, 90, 76, "Hypertension Stage 2"),
    ]
    return [
        Reading(
            timestamp=now - timedelta(days=days_ago),
            systolic=systolic,
            diastolic=diastolic,
            pulse=pulse,
            classification=classification,
        )
        for days_ago, systolic, diastolic, pulse, classification in samples
    ]
