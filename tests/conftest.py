"""Shared fixtures: an in-memory Mongo database and advisor test doubles."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
from langchain_core.messages import AIMessage
from mongomock_motor import AsyncMongoMockClient

from bloomsync.core.mongodb import MongoDatabase
from bloomsync.models.farmer_input import FarmerInputCreate

MANGO_SUBMISSION = {
    "crop_name": "Mango",
    "location_name": "Hyderabad",
    "latitude": 17.385,
    "longitude": 78.4867,
    "sowing_date": "2024-01-15",
    "crop_category": "pollinator-dependent",
}


class RecordingChatModel:
    """Chat model double that records prompts and answers with fixed content."""

    def __init__(self, content: Any) -> None:
        self.content = content
        self.calls: list[list[Any]] = []

    async def ainvoke(self, messages: list[Any], *args: Any, **kwargs: Any) -> AIMessage:
        self.calls.append(messages)
        return AIMessage(content=self.content)


class UnreachableChatModel:
    """Chat model double whose transport always fails."""

    def __init__(self) -> None:
        self.calls = 0

    async def ainvoke(self, messages: list[Any], *args: Any, **kwargs: Any) -> AIMessage:
        self.calls += 1
        raise httpx.ConnectError("generativelanguage.googleapis.com unreachable")


class SlowChatModel:
    """Chat model double that never answers in time."""

    async def ainvoke(self, messages: list[Any], *args: Any, **kwargs: Any) -> AIMessage:
        await asyncio.sleep(5)
        return AIMessage(content="{}")


class InMemoryDatabase(MongoDatabase):
    """MongoDatabase over mongomock; closing keeps the data for assertions."""

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def database() -> MongoDatabase:
    return InMemoryDatabase(AsyncMongoMockClient(), "bloomsync_test")


@pytest.fixture
def mango_submission() -> FarmerInputCreate:
    return FarmerInputCreate.model_validate(MANGO_SUBMISSION)
