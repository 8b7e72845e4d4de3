"""
Admin maintenance endpoints
"""

import logging
from typing import Any
from fastapi import APIRouter, Depends

from seatlock.api.deps import get_seat_registry, get_settings
from seatlock.config import Settings
from seatlock.core.exceptions import ForbiddenError
from seatlock.schemas.response import MessageResponse
from seatlock.services.seat_registry import SeatRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


def require_reset_enabled(settings: Settings = Depends(get_settings)) -> None:
    """
    Dependency to refuse the destructive reset when it is switched off
    """
    if not settings.ADMIN_RESET_ENABLED:
        raise ForbiddenError("Seat reset is disabled in this environment")


@router.delete("/reset", response_model=MessageResponse, dependencies=[Depends(require_reset_enabled)])
async def reset_seats(
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    Reset all seats to available, bookings included (for testing)
    """
    cleared = registry.reset()
    logger.warning(f"Seat reset requested through the admin API, {cleared} seats cleared")
    return MessageResponse(message="All seats have been reset to available")
