"""
Booking endpoints
"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from seatlock.api.deps import get_seat_registry
from seatlock.schemas.booking import BookingListResponse, BookingResponse
from seatlock.services.seat_registry import SeatRegistry

router = APIRouter()


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    user_id: Optional[str] = Query(None),
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    Get all bookings, or the bookings of one user
    """
    bookings = registry.list_bookings(actor_id=user_id)
    return BookingListResponse(
        count=len(bookings),
        bookings=[BookingResponse.model_validate(b) for b in bookings]
    )
