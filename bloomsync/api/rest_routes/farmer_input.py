from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from bloomsync.api.dependencies import get_database
from bloomsync.collections.farmer_input import (
    get_farmer_input_from_id,
    get_farmer_inputs,
    save_farmer_input,
)
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.farmer_input import FarmerInput, FarmerInputCreate, FarmerInputCreated

router = APIRouter(prefix="/api", tags=["Farmer Input"])


@router.post(
    "/farmer-input",
    response_model=FarmerInputCreated,
    summary="Submit crop and sowing details",
)
async def create_farmer_input(
    farmer_input: FarmerInputCreate,
    database: MongoDatabase = Depends(get_database),
):
    farmer_input_id = await save_farmer_input(database, farmer_input)
    return FarmerInputCreated(id=farmer_input_id)


@router.get(
    "/farmer-inputs",
    response_model=List[FarmerInput],
    summary="List farmer submissions, newest first",
)
async def list_farmer_inputs(database: MongoDatabase = Depends(get_database)):
    return await get_farmer_inputs(database)


@router.get(
    "/farmer-inputs/{farmer_input_id}",
    response_model=FarmerInput,
    summary="Get a farmer submission by its ID",
)
async def get_farmer_input(
    farmer_input_id: int, database: MongoDatabase = Depends(get_database)
):
    farmer_input = await get_farmer_input_from_id(database, farmer_input_id)
    if not farmer_input:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Farmer submission with ID '{farmer_input_id}' not found.",
        )
    return farmer_input
