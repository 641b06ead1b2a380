from typing import List

from fastapi import APIRouter, Depends

from bloomsync.api.dependencies import get_database
from bloomsync.collections.climate_record import get_climate_records
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.climate import ClimateRecord, ClimateSummary
from bloomsync.services.overlap_service import summarize_climate

router = APIRouter(prefix="/api", tags=["Climate"])


@router.get(
    "/climate-history",
    response_model=List[ClimateRecord],
    summary="Get the yearly climate and bloom history",
)
async def get_climate_history(database: MongoDatabase = Depends(get_database)):
    """
    Retrieve every climate record, oldest year first.
    """
    return await get_climate_records(database)


@router.get(
    "/climate-summary",
    response_model=ClimateSummary,
    summary="Get the current-season synchrony summary",
)
async def get_climate_summary(database: MongoDatabase = Depends(get_database)):
    """
    Temperature and bloom shifts across the history, and the bloom-pollinator
    synchrony index of the most recent year.
    """
    records = await get_climate_records(database)
    return summarize_climate(records)
