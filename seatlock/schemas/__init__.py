"""
Pydantic schemas for request and response validation
"""

from seatlock.schemas.seat import (
    SeatActionRequest,
    SeatSummary,
    SeatDetail,
    SeatListResponse,
    SeatDetailResponse,
    SeatLockResponse
)
from seatlock.schemas.booking import (
    BookingResponse,
    BookingConfirmResponse,
    BookingListResponse
)
from seatlock.schemas.response import (
    ErrorResponse,
    MessageResponse,
    HealthResponse
)

__all__ = [
    "SeatActionRequest",
    "SeatSummary",
    "SeatDetail",
    "SeatListResponse",
    "SeatDetailResponse",
    "SeatLockResponse",
    "BookingResponse",
    "BookingConfirmResponse",
    "BookingListResponse",
    "ErrorResponse",
    "MessageResponse",
    "HealthResponse"
]
