from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from bloomsync.core.mongodb import MongoDatabase


async def reserve_ids(database: MongoDatabase, name: str, count: int = 1) -> range:
    """Reserve ``count`` consecutive integer ids for the ``name`` sequence."""
    collection: AsyncIOMotorCollection = database.get_counter_collection()
    counter = await collection.find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": count}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    last_id = counter["seq"]
    return range(last_id - count + 1, last_id + 1)
