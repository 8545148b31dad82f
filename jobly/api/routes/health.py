"""
Liveness and database reachability.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from jobly.core.config import settings
from jobly.core.database import connect
from jobly.core.logging import get_logger
from jobly.schemas.base import BaseSchema

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


class HealthResponse(BaseSchema):
    status: str
    version: str
    timestamp: str
    checks: Dict[str, str]


async def _database_status() -> str:
    # Opens its own connection: a dead pool must show up here, not as a 500.
    try:
        async with connect() as db:
            await db.query("SELECT 1")
    except Exception as e:
        logger.warning("health_check_failed", component="database", error=str(e))
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Always 200; ``status`` is "degraded" when the database is unreachable."""
    checks = {"database": await _database_status()}
    healthy = all(status == "healthy" for status in checks.values())

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
