from fastapi import Request

from bloomsync.core.mongodb import MongoDatabase
from bloomsync.services.risk_advisory_service import RiskAdvisoryClient


def get_database(request: Request) -> MongoDatabase:
    return request.app.state.database


def get_advisory_client(request: Request) -> RiskAdvisoryClient:
    return request.app.state.advisory_client
