import asyncio
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from bloomsync.core.config import settings


class MongoDatabase:
    """Owns the Mongo client for the lifetime of the app.

    Submission writes must hold ``write_lock`` so ids and timestamps are
    handed out in the same order.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: Optional[str] = None,
    ) -> None:
        self._client = client
        self._database = client[database_name or settings.MONGO_DB_NAME]
        self.write_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls) -> "MongoDatabase":
        mongo_uri = settings.MONGO_DIRECT_URI or settings.MONGO_URI or None
        client = AsyncIOMotorClient(
            mongo_uri, uuidRepresentation="standard", tz_aware=True
        )
        return cls(client, settings.MONGO_DB_NAME)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None

    def _get_collection(self, collection_name: str) -> AsyncIOMotorCollection:
        return self._database[collection_name]

    def get_climate_record_collection(self) -> AsyncIOMotorCollection:
        return self._get_collection("climate_records")

    def get_farmer_input_collection(self) -> AsyncIOMotorCollection:
        return self._get_collection("farmer_inputs")

    def get_counter_collection(self) -> AsyncIOMotorCollection:
        return self._get_collection("counters")
