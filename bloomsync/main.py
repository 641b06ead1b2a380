import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from bloomsync.api.rest_routes.climate import router as climate_router
from bloomsync.api.rest_routes.farmer_input import router as farmer_input_router
from bloomsync.api.rest_routes.pollination_analysis import (
    router as pollination_analysis_router,
)
from bloomsync.collections.climate_record import seed_climate_records_if_empty
from bloomsync.core.config import settings
from bloomsync.core.errors import register_exception_handlers
from bloomsync.core.mongodb import MongoDatabase
from bloomsync.services.risk_advisory_service import RiskAdvisoryClient

logger = logging.getLogger(__name__)


def create_app(
    database: Optional[MongoDatabase] = None,
    advisory_client: Optional[RiskAdvisoryClient] = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database = database or MongoDatabase.from_settings()
        app.state.advisory_client = advisory_client or RiskAdvisoryClient()
        await seed_climate_records_if_empty(
            app.state.database,
            rng=random.Random(settings.CLIMATE_SEED),
            base_year=settings.CLIMATE_BASE_YEAR,
        )
        yield
        app.state.database.close()

    app = FastAPI(title="BloomSync", lifespan=lifespan)
    register_exception_handlers(app)

    app.include_router(climate_router)
    app.include_router(farmer_input_router)
    app.include_router(pollination_analysis_router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to BloomSync pollination risk advisor!"}

    return app


logging.basicConfig(level=settings.LOG_LEVEL)

app = create_app()
