import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ... import __version__


router = APIRouter()

class HealthStatus(BaseModel):
    status: str  # "healthy", "degraded"
    timestamp: datetime
    version: str
    uptime_seconds: float
    checks: Dict[str, Any]


# Track startup time for uptime calculation
_startup_time = time.time()

@router.get("/health", response_model=HealthStatus)
def health_check(request: Request):
    """
    Basic health check endpoint.

    Reports whether a draft service is wired up and how many players the
    catalog holds. An empty catalog still serves manual reads but every
    autodraft would fail, so it reports "degraded".
    """
    uptime = time.time() - _startup_time
    service = getattr(request.app.state, "draft_service", None)

    checks = {
        "api": "healthy",
        "draft_service": "healthy" if service is not None else "missing",
    }

    catalog_size = None
    if service is not None and hasattr(service.catalog, "__len__"):
        catalog_size = len(service.catalog)
        checks["catalog_players"] = catalog_size

    degraded = service is None or catalog_size == 0

    return HealthStatus(
        status="degraded" if degraded else "healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        uptime_seconds=uptime,
        checks=checks
    )
