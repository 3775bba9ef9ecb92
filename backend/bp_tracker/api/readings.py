"""JSON API for external clients: readings list, stats, delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bp_tracker.db.session import get_db
from bp_tracker.schemas.reading import ReadingResponse, StatsResponse
from bp_tracker.services.readings import ReadingNotFoundError, delete_reading, get_all_readings, get_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["readings"])


@router.get("/readings", response_model=list[ReadingResponse], summary="All readings, newest first")
async def list_readings(session: Annotated[AsyncSession, Depends(get_db)]) -> list[ReadingResponse]:
    try:
        rows = await get_all_readings(session)
    except SQLAlchemyError:
        logger.exception("List readings failed")
        raise HTTPException(status_code=500, detail="Error fetching readings")
    logger.debug("Fetched %d readings", len(rows))
    return [ReadingResponse.model_validate(row) for row in rows]


@router.get("/stats", response_model=StatsResponse, summary="Last reading and rolling averages")
async def read_stats(session: Annotated[AsyncSession, Depends(get_db)]) -> StatsResponse:
    try:
        return await get_stats(session)
    except SQLAlchemyError:
        logger.exception("Fetch stats failed")
        raise HTTPException(status_code=500, detail="Error fetching statistics")


@router.delete(
    "/readings/{reading_id}",
    response_model=dict,
    summary="Delete one reading",
    responses={400: {"description": "Invalid id"}, 404: {"description": "Reading not found"}},
)
async def remove_reading(
    session: Annotated[AsyncSession, Depends(get_db)],
    reading_id: str,
) -> dict:
    try:
        rid = int(reading_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid reading ID format")
    try:
        await delete_reading(session, rid)
    except ReadingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return {"message": f"Successfully deleted reading {rid}"}
