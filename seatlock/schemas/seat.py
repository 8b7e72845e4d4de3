"""
Seat schemas for request/response models
"""

from typing import Optional, List
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field, field_validator

from seatlock.models.seat import SeatStatus
from seatlock.schemas.base import BaseSchema


class SeatActionRequest(BaseModel):
    """Body of lock, confirm and unlock requests"""
    user_id: Optional[str] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v):
        # ids are trusted as sent; numeric ids are kept as their text form
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class SeatSummary(BaseSchema):
    id: str
    row: int
    number: int
    status: SeatStatus
    locked_by: Optional[str] = None
    lock_expires_in: Optional[int] = None
    booked_by: Optional[str] = None


class SeatDetail(SeatSummary):
    locked_at: Optional[datetime] = Field(None, validation_alias=AliasChoices("lock_acquired_at", "locked_at"))
    booked_at: Optional[datetime] = None


class SeatStatsResponse(BaseSchema):
    total: int
    available: int
    locked: int
    booked: int


class SeatListResponse(BaseModel):
    success: bool = True
    stats: SeatStatsResponse
    seats: List[SeatSummary]


class SeatDetailResponse(BaseModel):
    success: bool = True
    seat: SeatDetail


class SeatLockResponse(BaseModel):
    success: bool = True
    message: str
    extended: bool
    lock_expires_in: int
    seat: SeatDetail
