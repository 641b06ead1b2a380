import logging
import math
import random
from typing import List

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from bloomsync.collections.counter import reserve_ids
from bloomsync.core.errors import StorageError
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.climate import ClimateRecord

logger = logging.getLogger(__name__)

SEED_YEARS = 20
BASE_TEMP_C = 24.0
WARMING_PER_YEAR_C = 0.1
TEMP_NOISE_C = 0.5
BLOOM_BASE_DAY = 100
BLOOM_DAYS_PER_DEGREE = 5
BLOOM_NOISE_DAYS = 2
POLLINATOR_BASE_DAY = 95
POLLINATOR_BAND_DAYS = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_climate_records(
    rng: random.Random, base_year: int, count: int = SEED_YEARS
) -> List[ClimateRecord]:
    """
    Build a synthetic warming history.

    Bloom moves earlier as the year gets warmer while pollinator activity
    stays in a narrow band that ignores temperature, so the two peaks drift
    apart over the series.
    """
    records = []
    for i in range(count):
        avg_temp = BASE_TEMP_C + i * WARMING_PER_YEAR_C + rng.random() * TEMP_NOISE_C
        peak_bloom_day = _round_half_up(
            BLOOM_BASE_DAY
            - (avg_temp - BASE_TEMP_C) * BLOOM_DAYS_PER_DEGREE
            + rng.random() * BLOOM_NOISE_DAYS
        )
        pollinator_peak_day = _round_half_up(
            POLLINATOR_BASE_DAY + rng.random() * POLLINATOR_BAND_DAYS
        )
        records.append(
            ClimateRecord(
                year=base_year + i,
                avg_temp=avg_temp,
                peak_bloom_day=peak_bloom_day,
                pollinator_peak_day=pollinator_peak_day,
            )
        )
    return records


async def seed_climate_records_if_empty(
    database: MongoDatabase, rng: random.Random, base_year: int
) -> int:
    collection: AsyncIOMotorCollection = database.get_climate_record_collection()
    try:
        await collection.create_index([("year", ASCENDING)], unique=True)
        if await collection.count_documents({}) > 0:
            return 0
        records = generate_climate_records(rng, base_year)
        ids = await reserve_ids(database, "climate_records", len(records))
        documents = []
        for record_id, record in zip(ids, records):
            payload = record.model_dump(mode="json", exclude={"id"})
            payload["_id"] = record_id
            documents.append(payload)
        await collection.insert_many(documents)
    except (BulkWriteError, DuplicateKeyError):
        # Another worker seeded between the count and the insert.
        logger.info("Climate history already seeded by another process")
        return 0
    except PyMongoError as e:
        raise StorageError(f"Error seeding climate history: {e}") from e
    logger.info(
        "Seeded %d climate records for %d-%d",
        len(documents),
        base_year,
        base_year + len(documents) - 1,
    )
    return len(documents)


async def get_climate_records(database: MongoDatabase) -> List[ClimateRecord]:
    collection: AsyncIOMotorCollection = database.get_climate_record_collection()
    try:
        items = collection.find({}).sort("year", ASCENDING)
        return [ClimateRecord.model_validate(item) async for item in items]
    except PyMongoError as e:
        raise StorageError(f"Error reading climate history: {e}") from e
