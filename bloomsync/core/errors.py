import logging
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BloomSyncError(Exception):
    """Base class for errors raised by the BloomSync core."""


class SubmissionValidationError(BloomSyncError):
    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class StorageError(BloomSyncError):
    """The database could not complete a read or write."""


class AdvisoryServiceError(BloomSyncError):
    """The generation service failed or answered with an unusable payload."""


class InvalidDayOfYearError(BloomSyncError, ValueError):
    """A day-of-year value was not a finite number."""


async def _submission_validation_handler(
    request: Request, exc: SubmissionValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "errors": exc.errors},
    )


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage is unavailable, please try again later."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SubmissionValidationError, _submission_validation_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
