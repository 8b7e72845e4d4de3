"""
Seat reservation models
"""

from seatlock.models.seat import (
    Seat,
    SeatStatus,
    SeatSnapshot,
    BookingRecord,
    seat_id_for
)

__all__ = [
    "Seat",
    "SeatStatus",
    "SeatSnapshot",
    "BookingRecord",
    "seat_id_for"
]
