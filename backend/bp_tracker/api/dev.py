"""Development helpers: seed sample data, wipe all readings. Mounted only when ENABLE_DEV_ENDPOINTS is set."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bp_tracker.db.session import get_db
from bp_tracker.services.readings import clear_readings, sample_readings, seed_readings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dev", tags=["dev"])


@router.post("/seed", response_model=dict, summary="Insert the sample data set")
async def seed(session: Annotated[AsyncSession, Depends(get_db)]) -> dict:
    count = await seed_readings(session, sample_readings())
    await session.commit()
    return {"message": f"Successfully seeded {count} readings"}


@router.post("/clear", response_model=dict, summary="Delete every reading")
async def clear(session: Annotated[AsyncSession, Depends(get_db)]) -> dict:
    count = await clear_readings(session)
    await session.commit()
    logger.warning("Dev clear removed %s readings", count)
    return {"message": "Successfully cleared all readings"}
