"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text

from ringside.api.dependencies import get_store
from ringside.models import Store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime


class ReadyCheck(BaseModel):
    """Individual readiness check."""

    status: str
    message: str | None = None


class ReadyResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict[str, ReadyCheck]


@router.get("/health", response_model=HealthResponse)
async def health():
    """
    Basic health check.

    Returns healthy if the service is running.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready", response_model=ReadyResponse)
async def ready(store: Store = Depends(get_store)):
    """
    Readiness check.

    Checks that the store answers a trivial query.
    """
    checks: dict[str, ReadyCheck] = {}

    try:
        async with store.session() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = ReadyCheck(status="ok")
    except Exception as e:
        checks["database"] = ReadyCheck(status="error", message=str(e))

    return ReadyResponse(
        ready=all(check.status == "ok" for check in checks.values()),
        checks=checks,
    )
