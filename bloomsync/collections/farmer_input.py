import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from bloomsync.collections.counter import reserve_ids
from bloomsync.core.errors import StorageError, SubmissionValidationError
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.farmer_input import FarmerInput, FarmerInputCreate

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _now_millis() -> datetime:
    # Mongo keeps millisecond precision; truncate so stored and compared
    # timestamps agree.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _validate(farmer_input: Union[FarmerInputCreate, Mapping[str, Any]]) -> FarmerInputCreate:
    if isinstance(farmer_input, FarmerInputCreate):
        # Instances may come from model_construct, so validate them again.
        farmer_input = farmer_input.model_dump()
    try:
        return FarmerInputCreate.model_validate(farmer_input)
    except ValidationError as e:
        raise SubmissionValidationError(
            "Invalid farmer submission",
            errors=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


async def save_farmer_input(
    database: MongoDatabase,
    farmer_input: Union[FarmerInputCreate, Mapping[str, Any]],
) -> int:
    """
    Validate and store a farmer submission.

    Returns the id assigned to the submission. Ids and ``created_at`` are
    handed out under the database write lock, so a later id never carries
    an earlier timestamp.
    """
    farmer_input = _validate(farmer_input)
    collection: AsyncIOMotorCollection = database.get_farmer_input_collection()
    async with database.write_lock:
        try:
            latest = await collection.find_one(
                {}, sort=[("created_at", DESCENDING), ("_id", DESCENDING)]
            )
            created_at = _now_millis()
            if latest and _as_utc(latest["created_at"]) > created_at:
                created_at = _as_utc(latest["created_at"])

            (farmer_input_id,) = await reserve_ids(database, "farmer_inputs")
            payload = farmer_input.model_dump(mode="json")
            payload["_id"] = farmer_input_id
            payload["created_at"] = created_at
            await collection.insert_one(payload)
        except PyMongoError as e:
            raise StorageError(f"Error saving farmer submission: {e}") from e
    logger.info(
        "Stored farmer submission %d (%s at %s)",
        farmer_input_id,
        farmer_input.crop_name,
        farmer_input.location_name,
    )
    return farmer_input_id


async def get_farmer_inputs(database: MongoDatabase) -> List[FarmerInput]:
    collection: AsyncIOMotorCollection = database.get_farmer_input_collection()
    try:
        items = collection.find({}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
        return [FarmerInput.model_validate(item) async for item in items]
    except PyMongoError as e:
        raise StorageError(f"Error reading farmer submissions: {e}") from e


async def get_farmer_input_from_id(
    database: MongoDatabase, farmer_input_id: int
) -> Optional[FarmerInput]:
    collection: AsyncIOMotorCollection = database.get_farmer_input_collection()
    try:
        response = await collection.find_one({"_id": farmer_input_id})
        return FarmerInput.model_validate(response) if response else None
    except PyMongoError as e:
        raise StorageError(f"Error reading farmer submission {farmer_input_id}: {e}") from e
