"""Tests for the farmer submission store."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

import pytest
from conftest import MANGO_SUBMISSION
from pymongo.errors import ServerSelectionTimeoutError

from bloomsync.collections.farmer_input import (
    get_farmer_input_from_id,
    get_farmer_inputs,
    save_farmer_input,
)
from bloomsync.core.errors import StorageError, SubmissionValidationError
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.farmer_input import CropCategory, FarmerInputCreate


class TestSaveFarmerInput:
    """Tests for save_farmer_input."""

    async def test_returns_positive_id_and_lists_first(self, database: MongoDatabase) -> None:
        await save_farmer_input(database, {**MANGO_SUBMISSION, "crop_name": "Sunflower"})

        farmer_input_id = await save_farmer_input(database, MANGO_SUBMISSION)
        inputs = await get_farmer_inputs(database)

        assert isinstance(farmer_input_id, int)
        assert farmer_input_id > 0
        assert inputs[0].id == farmer_input_id
        assert inputs[0].crop_name == "Mango"
        assert inputs[0].location_name == "Hyderabad"
        assert inputs[0].sowing_date == date(2024, 1, 15)
        assert inputs[0].crop_category == CropCategory.POLLINATOR_DEPENDENT

    async def test_ids_are_sequential(self, database: MongoDatabase) -> None:
        ids = [await save_farmer_input(database, MANGO_SUBMISSION) for _ in range(3)]
        assert ids == [1, 2, 3]

    async def test_category_defaults_to_pollinator_dependent(
        self, database: MongoDatabase
    ) -> None:
        payload = {k: v for k, v in MANGO_SUBMISSION.items() if k != "crop_category"}
        farmer_input_id = await save_farmer_input(database, payload)

        stored = await get_farmer_input_from_id(database, farmer_input_id)
        assert stored is not None
        assert stored.crop_category == CropCategory.POLLINATOR_DEPENDENT

    async def test_concurrent_writes_keep_timestamps_in_id_order(
        self, database: MongoDatabase
    ) -> None:
        await asyncio.gather(
            *[save_farmer_input(database, MANGO_SUBMISSION) for _ in range(10)]
        )
        inputs = await get_farmer_inputs(database)

        assert sorted(i.id for i in inputs) == list(range(1, 11))
        assert [i.id for i in inputs] == list(range(10, 0, -1))
        by_id = sorted(inputs, key=lambda i: i.id)
        assert all(a.created_at <= b.created_at for a, b in zip(by_id, by_id[1:]))

    @pytest.mark.parametrize(
        "override",
        [
            {"crop_name": ""},
            {"crop_name": "   "},
            {"location_name": None},
            {"sowing_date": ""},
            {"sowing_date": "15/01/2024"},
            {"latitude": "north"},
            {"latitude": "17.385"},
            {"longitude": None},
            {"sowing_date": 1705276800},
            {"sowing_date": "1705276800"},
            {"longitude": float("nan")},
            {"latitude": 123.0},
            {"crop_category": "wind-pollinated"},
        ],
    )
    async def test_rejects_malformed_submission(
        self, database: MongoDatabase, override: dict[str, Any]
    ) -> None:
        with pytest.raises(SubmissionValidationError) as exc_info:
            await save_farmer_input(database, {**MANGO_SUBMISSION, **override})

        assert exc_info.value.errors
        assert await get_farmer_inputs(database) == []

    async def test_revalidates_unchecked_instance(self, database: MongoDatabase) -> None:
        unchecked = FarmerInputCreate.model_construct(
            crop_name="",
            location_name="Hyderabad",
            latitude=17.385,
            longitude=78.4867,
            sowing_date=date(2024, 1, 15),
            crop_category=CropCategory.POLLINATOR_DEPENDENT,
        )

        with pytest.raises(SubmissionValidationError):
            await save_farmer_input(database, unchecked)
        assert await get_farmer_inputs(database) == []

    async def test_accepts_validated_instance(
        self, database: MongoDatabase, mango_submission: FarmerInputCreate
    ) -> None:
        farmer_input_id = await save_farmer_input(database, mango_submission)

        stored = await get_farmer_input_from_id(database, farmer_input_id)
        assert stored is not None
        assert stored.latitude == 17.385
        assert stored.sowing_date == date(2024, 1, 15)

    async def test_rejects_missing_field(self, database: MongoDatabase) -> None:
        payload = {k: v for k, v in MANGO_SUBMISSION.items() if k != "longitude"}
        with pytest.raises(SubmissionValidationError):
            await save_farmer_input(database, payload)

    async def test_storage_failure(self, database: MongoDatabase, monkeypatch) -> None:
        collection = database.get_farmer_input_collection()

        async def broken_insert(*args: Any, **kwargs: Any) -> None:
            raise ServerSelectionTimeoutError("no primary available")

        monkeypatch.setattr(
            database, "get_farmer_input_collection", lambda: _BrokenCollection(collection, broken_insert)
        )
        with pytest.raises(StorageError):
            await save_farmer_input(database, MANGO_SUBMISSION)


class _BrokenCollection:
    def __init__(self, collection: Any, insert_one: Any) -> None:
        self._collection = collection
        self.insert_one = insert_one

    def __getattr__(self, name: str) -> Any:
        return getattr(self._collection, name)


class TestGetFarmerInputs:
    async def test_empty_store(self, database: MongoDatabase) -> None:
        assert await get_farmer_inputs(database) == []

    async def test_unknown_id(self, database: MongoDatabase) -> None:
        assert await get_farmer_input_from_id(database, 404) is None
