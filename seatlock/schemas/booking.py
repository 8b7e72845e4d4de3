"""
Booking schemas
"""

from typing import List
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field

from seatlock.models.seat import SeatStatus
from seatlock.schemas.base import BaseSchema


class BookingResponse(BaseSchema):
    seat_id: str
    user_id: str = Field(..., validation_alias=AliasChoices("actor_id", "user_id"))
    booked_at: datetime


class BookingConfirmation(BookingResponse):
    status: SeatStatus = SeatStatus.BOOKED


class BookingConfirmResponse(BaseModel):
    success: bool = True
    message: str
    booking: BookingConfirmation


class BookingListResponse(BaseModel):
    success: bool = True
    count: int
    bookings: List[BookingResponse]
