"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends

from seatlock.api.deps import get_seat_registry, get_settings
from seatlock.config import Settings
from seatlock.schemas.response import HealthResponse
from seatlock.services.seat_registry import SeatRegistry

router = APIRouter()


@router.get("/live", response_model=HealthResponse)
async def liveness() -> Any:
    """
    Kubernetes liveness check
    """
    return HealthResponse(status="alive")


@router.get("/ready", response_model=HealthResponse)
async def readiness(
    registry: SeatRegistry = Depends(get_seat_registry),
    settings: Settings = Depends(get_settings)
) -> Any:
    """
    Kubernetes readiness check, reports the seat grid state
    """
    stats = registry.stats()
    return HealthResponse(
        status="ready",
        checks={
            "version": settings.APP_VERSION,
            "lock_ttl_seconds": registry.lock_ttl_seconds,
            "seats": {
                "total": stats.total,
                "available": stats.available,
                "locked": stats.locked,
                "booked": stats.booked
            }
        }
    )
