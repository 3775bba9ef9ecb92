"""Tracker page, form submit and CSV export."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bp_tracker.db.session import get_db
from bp_tracker.schemas.reading import ClassificationResponse, ReadingInput, SubmitResponse
from bp_tracker.services.classification import classify_bp, get_recommendation
from bp_tracker.services.export import CSV_FILENAME, readings_to_csv
from bp_tracker.services.readings import get_all_readings, get_stats, save_reading
from bp_tracker.services.validation import ReadingValidationError, validate_readings
from bp_tracker.web.page import render_index

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(session: Annotated[AsyncSession, Depends(get_db)]) -> HTMLResponse:
    try:
        stats = await get_stats(session)
    except SQLAlchemyError:
        logger.exception("Home: fetching stats failed")
        raise HTTPException(status_code=500, detail="Error fetching statistics")
    return HTMLResponse(render_index(stats.model_dump(mode="json")))


@router.post(
    "/submit",
    response_model=SubmitResponse,
    summary="Save a three-measurement session",
    responses={400: {"description": "Invalid input or failed validation"}, 500: {"description": "Storage error"}},
)
async def submit_reading(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: ReadingInput,
) -> SubmitResponse:
    """Average the three measurements, classify, store, and return the classification with fresh stats."""
    try:
        validate_readings(body)
    except ReadingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    avg = body.average()
    category = classify_bp(avg.systolic, avg.diastolic)
    try:
        await save_reading(
            session,
            systolic=avg.systolic,
            diastolic=avg.diastolic,
            pulse=avg.pulse,
            classification=category.name,
        )
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Submit: saving reading failed")
        raise HTTPException(status_code=500, detail="Error saving reading")

    try:
        stats = await get_stats(session)
    except SQLAlchemyError:
        logger.exception("Submit: fetching stats after save failed")
        raise HTTPException(status_code=500, detail="Error fetching statistics after save")

    logger.info("Saved reading %s/%s pulse %s as %s", avg.systolic, avg.diastolic, avg.pulse, category.name)
    return SubmitResponse(
        message="Reading saved successfully",
        stats=stats,
        classification=ClassificationResponse(
            name=category.name,
            description=category.description,
            risk=category.risk,
        ),
        recommendation=get_recommendation(category),
    )


@router.get("/export/csv", summary="Download all readings as CSV")
async def export_csv(session: Annotated[AsyncSession, Depends(get_db)]) -> Response:
    try:
        readings = await get_all_readings(session)
    except SQLAlchemyError:
        logger.exception("Export: fetching readings failed")
        raise HTTPException(status_code=500, detail="Error fetching readings")
    return Response(
        content=readings_to_csv(readings),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )
