import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bloomsync.api.dependencies import get_advisory_client, get_database
from bloomsync.collections.climate_record import get_climate_records
from bloomsync.collections.farmer_input import get_farmer_input_from_id
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.advisory import AdvisoryRequest, AdvisoryResult
from bloomsync.services.risk_advisory_service import RiskAdvisoryClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pollination Analysis"])


@router.post(
    "/pollination-analysis",
    response_model=AdvisoryResult,
    summary="Assess pollination mismatch risk for a submission",
)
async def analyze_pollination_risk(
    request: AdvisoryRequest,
    database: MongoDatabase = Depends(get_database),
    advisory_client: RiskAdvisoryClient = Depends(get_advisory_client),
):
    """
    Run the AI advisor for a stored submission against the full climate
    history. Always answers with a result; when the advisor is unavailable
    the canned result for the requested language is returned.
    """
    submission = await get_farmer_input_from_id(database, request.submission_id)
    if not submission:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Farmer submission with ID '{request.submission_id}' not found.",
        )
    climate_history = await get_climate_records(database)
    outcome = await advisory_client.assess(submission, climate_history, request.language)
    logger.info(
        "Pollination analysis for submission %d finished in state %s",
        submission.id,
        outcome.state.value,
    )
    return outcome.result
