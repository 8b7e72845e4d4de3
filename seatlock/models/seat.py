"""
Seat model
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
import enum
import math


class SeatStatus(str, enum.Enum):
    AVAILABLE = "available"
    LOCKED = "locked"
    BOOKED = "booked"


def seat_id_for(row: int, number: int) -> str:
    """Row 1 seat 1 is A1, row 10 seat 10 is J10"""
    return f"{chr(ord('A') + row - 1)}{number}"


@dataclass(frozen=True)
class SeatSnapshot:
    """
    Read-only view of a seat at a given instant
    """
    id: str
    row: int
    number: int
    status: SeatStatus
    holder: Optional[str]
    lock_acquired_at: Optional[datetime]
    lock_expires_at: Optional[datetime]
    booked_at: Optional[datetime]
    lock_expires_in: Optional[int]

    @property
    def locked_by(self) -> Optional[str]:
        return self.holder if self.status == SeatStatus.LOCKED else None

    @property
    def booked_by(self) -> Optional[str]:
        return self.holder if self.status == SeatStatus.BOOKED else None


@dataclass(frozen=True)
class BookingRecord:
    seat_id: str
    actor_id: str
    booked_at: datetime


class Seat:
    """
    Seat record with a mutable reservation state.

    Identity (id, row, number) is fixed at construction. Status, holder and
    timestamps only change through the transition methods below, which keep
    them consistent with each other:

    - available: no holder, no timestamps
    - locked: holder, lock_acquired_at and lock_expires_at set
    - booked: holder and booked_at set
    """

    __slots__ = (
        "_id", "_row", "_number",
        "status", "holder", "lock_acquired_at", "lock_expires_at", "booked_at"
    )

    def __init__(self, row: int, number: int):
        self._id = seat_id_for(row, number)
        self._row = row
        self._number = number
        self.status = SeatStatus.AVAILABLE
        self.holder: Optional[str] = None
        self.lock_acquired_at: Optional[datetime] = None
        self.lock_expires_at: Optional[datetime] = None
        self.booked_at: Optional[datetime] = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def row(self) -> int:
        return self._row

    @property
    def number(self) -> int:
        return self._number

    def is_lock_expired(self, now: datetime) -> bool:
        return self.status == SeatStatus.LOCKED and now >= self.lock_expires_at

    def lock_expires_in(self, now: datetime) -> Optional[int]:
        """Whole seconds left on the lock, rounded up"""
        if self.status != SeatStatus.LOCKED:
            return None
        remaining = (self.lock_expires_at - now).total_seconds()
        return max(0, math.ceil(remaining))

    def lock(self, actor_id: str, now: datetime, ttl: timedelta) -> None:
        self.status = SeatStatus.LOCKED
        self.holder = actor_id
        self.lock_acquired_at = now
        self.lock_expires_at = now + ttl
        self.booked_at = None

    def extend_lock(self, now: datetime, ttl: timedelta) -> None:
        # lock_acquired_at keeps the first acquisition time
        self.lock_expires_at = now + ttl

    def book(self, now: datetime) -> None:
        self.status = SeatStatus.BOOKED
        self.booked_at = now
        self.lock_acquired_at = None
        self.lock_expires_at = None

    def clear(self) -> None:
        self.status = SeatStatus.AVAILABLE
        self.holder = None
        self.lock_acquired_at = None
        self.lock_expires_at = None
        self.booked_at = None

    def snapshot(self, now: datetime) -> SeatSnapshot:
        return SeatSnapshot(
            id=self.id,
            row=self.row,
            number=self.number,
            status=self.status,
            holder=self.holder,
            lock_acquired_at=self.lock_acquired_at,
            lock_expires_at=self.lock_expires_at,
            booked_at=self.booked_at,
            lock_expires_in=self.lock_expires_in(now),
        )

    def booking_record(self) -> BookingRecord:
        return BookingRecord(seat_id=self.id, actor_id=self.holder, booked_at=self.booked_at)

    def __repr__(self):
        return f"<Seat(id={self.id}, status={self.status.value}, holder={self.holder})>"
