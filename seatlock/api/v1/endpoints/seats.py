"""
Seat reservation endpoints
"""

from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query, Response, status

from seatlock.api.deps import get_seat_registry
from seatlock.models.seat import SeatStatus
from seatlock.schemas.booking import BookingConfirmation, BookingConfirmResponse
from seatlock.schemas.response import MessageResponse
from seatlock.schemas.seat import (
    SeatActionRequest,
    SeatDetail,
    SeatDetailResponse,
    SeatListResponse,
    SeatLockResponse,
    SeatStatsResponse,
    SeatSummary
)
from seatlock.services.seat_registry import SeatRegistry

router = APIRouter()


def _user_id(payload: Optional[SeatActionRequest]) -> Optional[str]:
    return payload.user_id if payload else None


@router.get("", response_model=SeatListResponse)
async def list_seats(
    status_filter: Optional[SeatStatus] = Query(None, alias="status"),
    user_id: Optional[str] = Query(None),
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    View all seats with their status, optionally filtered
    """
    listing = registry.list(status=status_filter, actor_id=user_id)
    return SeatListResponse(
        stats=SeatStatsResponse.model_validate(listing.stats),
        seats=[SeatSummary.model_validate(seat) for seat in listing.seats]
    )


@router.get("/{seat_id}", response_model=SeatDetailResponse)
async def get_seat(
    seat_id: str,
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    View a single seat
    """
    return SeatDetailResponse(seat=SeatDetail.model_validate(registry.get(seat_id)))


@router.post("/{seat_id}/lock", response_model=SeatLockResponse, status_code=status.HTTP_201_CREATED)
async def lock_seat(
    seat_id: str,
    response: Response,
    payload: Optional[SeatActionRequest] = Body(None),
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    Lock a seat temporarily, or extend the caller's own lock
    """
    result = registry.lock(seat_id, _user_id(payload))

    if result.extended:
        response.status_code = status.HTTP_200_OK
        message = f"Lock extended for seat {seat_id}"
    else:
        message = f"Seat {seat_id} locked successfully"

    return SeatLockResponse(
        message=message,
        extended=result.extended,
        lock_expires_in=registry.lock_ttl_seconds,
        seat=SeatDetail.model_validate(result.seat)
    )


@router.post("/{seat_id}/confirm", response_model=BookingConfirmResponse)
async def confirm_seat(
    seat_id: str,
    payload: Optional[SeatActionRequest] = Body(None),
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    Confirm the booking of a seat the caller has locked
    """
    booking = registry.confirm(seat_id, _user_id(payload))
    return BookingConfirmResponse(
        message=f"Seat {seat_id} booked successfully",
        booking=BookingConfirmation.model_validate(booking)
    )


@router.delete("/{seat_id}/unlock", response_model=MessageResponse)
async def unlock_seat(
    seat_id: str,
    payload: Optional[SeatActionRequest] = Body(None),
    registry: SeatRegistry = Depends(get_seat_registry)
) -> Any:
    """
    Release a seat the caller has locked
    """
    registry.release(seat_id, _user_id(payload))
    return MessageResponse(message=f"Seat {seat_id} unlocked successfully")
