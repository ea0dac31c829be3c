"""Mapping of domain errors onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ringside.errors import (
    AlreadyResolved,
    Conflict,
    InvalidParticipant,
    InvalidState,
    NotFound,
    RingsideError,
)

logger = structlog.get_logger(__name__)

STATUS_CODES: dict[type[RingsideError], int] = {
    NotFound: 404,
    Conflict: 409,
    AlreadyResolved: 409,
    InvalidState: 409,
    InvalidParticipant: 422,
}


def status_for(exc: RingsideError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


async def ringside_error_handler(request: Request, exc: RingsideError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        "request_rejected",
        path=request.url.path,
        kind=exc.kind,
        status_code=status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RingsideError, ringside_error_handler)
