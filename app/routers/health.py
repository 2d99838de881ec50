# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health        process is up, plus version and environment
# /health/live   liveness probe, never touches the database
# /health/ready  readiness probe, runs one cheap query and times it
#
# None of these require a token. Database errors are logged here and
# reported as "unhealthy"; the underlying message is never returned.
# =============================================================================

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str


class DatabaseCheck(BaseModel):
    """Result of the readiness query."""
    status: str
    latency_ms: float | None = None


class ReadinessResponse(BaseModel):
    status: str
    database: DatabaseCheck
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_database() -> DatabaseCheck:
    started = time.perf_counter()
    try:
        SupabaseClient.ping()
    except SupabaseClientError as e:
        logger.warning(f"Readiness check failed: {e}")
        return DatabaseCheck(status="unhealthy")
    latency = round((time.perf_counter() - started) * 1000, 2)
    return DatabaseCheck(status="healthy", latency_ms=latency)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        service="wtwr-api",
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        timestamp=_now(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Report whether the API can serve traffic.

    "ready" when the database answered, "degraded" otherwise. Always 200 so
    the body can be inspected; orchestrators should read `status`.
    """
    database = _check_database()
    return ReadinessResponse(
        status="ready" if database.status == "healthy" else "degraded",
        database=database,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
