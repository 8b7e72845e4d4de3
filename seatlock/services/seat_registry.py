"""
Seat registry: the single authority over seat reservation state
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from seatlock.config import MAX_SEAT_ROWS, Settings
from seatlock.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    SeatBookedError,
    SeatLockedError,
    ValidationError,
)
from seatlock.core.metrics import record_seat_operation
from seatlock.models.seat import BookingRecord, Seat, SeatSnapshot, SeatStatus
from seatlock.services.expiry_sweeper import ExpirySweeper

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LockResult:
    seat: SeatSnapshot
    extended: bool


@dataclass(frozen=True)
class SeatStats:
    total: int
    available: int
    locked: int
    booked: int


@dataclass(frozen=True)
class SeatListing:
    seats: List[SeatSnapshot]
    stats: SeatStats


class SeatRegistry:
    """
    Owns a fixed grid of seats and every transition on them.

    All public operations run under one lock and start with the expiry sweep,
    so each one is a single atomic sweep-then-act step. Contention is never
    queued: a losing actor gets an immediate Conflict or Forbidden error.
    Errors are raised before any mutation.
    """

    def __init__(
        self,
        rows: int,
        seats_per_row: int,
        lock_ttl: timedelta,
        clock: Optional[Clock] = None,
        sweeper: Optional[ExpirySweeper] = None
    ):
        if not 1 <= rows <= MAX_SEAT_ROWS:
            raise ValueError(f"rows must be between 1 and {MAX_SEAT_ROWS}")
        if seats_per_row < 1:
            raise ValueError("seats_per_row must be at least 1")
        if lock_ttl <= timedelta(0):
            raise ValueError("lock_ttl must be positive")

        self.rows = rows
        self.seats_per_row = seats_per_row
        self.lock_ttl = lock_ttl
        self._clock = clock or utc_now
        self._sweeper = sweeper or ExpirySweeper()
        self._lock = threading.RLock()

        # dicts keep insertion order, which is grid order
        self._seats: Dict[str, Seat] = {}
        for row in range(1, rows + 1):
            for number in range(1, seats_per_row + 1):
                seat = Seat(row, number)
                self._seats[seat.id] = seat

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "SeatRegistry":
        return cls(
            rows=settings.SEAT_ROWS,
            seats_per_row=settings.SEATS_PER_ROW,
            lock_ttl=timedelta(seconds=settings.SEAT_LOCK_TTL_SECONDS),
            clock=clock
        )

    @property
    def total_seats(self) -> int:
        return len(self._seats)

    @property
    def lock_ttl_seconds(self) -> int:
        return int(self.lock_ttl.total_seconds())

    # Internal helpers, called with self._lock held

    def _sweep(self) -> datetime:
        now = self._clock()
        self._sweeper.sweep(self._seats.values(), now)
        return now

    def _find(self, seat_id: str, operation: str) -> Seat:
        seat = self._seats.get(seat_id)
        if seat is None:
            record_seat_operation(operation, "not_found")
            raise NotFoundError("Seat", seat_id)
        return seat

    @staticmethod
    def _require_actor(actor_id: Optional[str], operation: str) -> str:
        if actor_id is None or not str(actor_id).strip():
            record_seat_operation(operation, "invalid_argument")
            raise ValidationError("user_id is required", field="user_id")
        return actor_id

    def _stats(self) -> SeatStats:
        counts = {status: 0 for status in SeatStatus}
        for seat in self._seats.values():
            counts[seat.status] += 1
        return SeatStats(
            total=len(self._seats),
            available=counts[SeatStatus.AVAILABLE],
            locked=counts[SeatStatus.LOCKED],
            booked=counts[SeatStatus.BOOKED]
        )

    # Public operations

    def sweep_expired(self) -> List[str]:
        """Reclaim expired locks, returns the ids of the released seats"""
        with self._lock:
            now = self._clock()
            return self._sweeper.sweep(self._seats.values(), now)

    def lock(self, seat_id: str, actor_id: Optional[str]) -> LockResult:
        """
        Acquire a temporary hold on a seat, or extend the caller's own hold.
        """
        actor_id = self._require_actor(actor_id, "lock")
        with self._lock:
            now = self._sweep()
            seat = self._find(seat_id, "lock")

            if seat.status == SeatStatus.BOOKED:
                record_seat_operation("lock", "conflict")
                logger.debug(f"Lock on {seat_id} by {actor_id} rejected: seat booked")
                raise SeatBookedError(seat_id)

            if seat.status == SeatStatus.LOCKED and seat.holder != actor_id:
                record_seat_operation("lock", "conflict")
                logger.debug(f"Lock on {seat_id} by {actor_id} rejected: held by {seat.holder}")
                raise SeatLockedError(seat_id, seat.lock_expires_in(now))

            if seat.status == SeatStatus.LOCKED:
                seat.extend_lock(now, self.lock_ttl)
                record_seat_operation("lock", "extended")
                logger.info(f"Lock on seat {seat_id} extended for {actor_id}")
                return LockResult(seat=seat.snapshot(now), extended=True)

            seat.lock(actor_id, now, self.lock_ttl)
            record_seat_operation("lock", "locked")
            logger.info(f"Seat {seat_id} locked by {actor_id}")
            return LockResult(seat=seat.snapshot(now), extended=False)

    def confirm(self, seat_id: str, actor_id: Optional[str]) -> BookingRecord:
        """
        Turn the caller's lock into a permanent booking.
        """
        actor_id = self._require_actor(actor_id, "confirm")
        with self._lock:
            now = self._sweep()
            seat = self._find(seat_id, "confirm")

            if seat.status == SeatStatus.BOOKED:
                record_seat_operation("confirm", "conflict")
                raise SeatBookedError(seat_id)

            if seat.status == SeatStatus.AVAILABLE:
                record_seat_operation("confirm", "precondition_failed")
                raise PreconditionFailedError(
                    f"Seat {seat_id} must be locked before confirmation. Please lock it first.",
                    details={"seat_id": seat_id, "status": seat.status.value}
                )

            if seat.holder != actor_id:
                record_seat_operation("confirm", "forbidden")
                raise ForbiddenError(
                    f"Seat {seat_id} is locked by another user. Only the user who locked it can confirm.",
                    details={"seat_id": seat_id}
                )

            seat.book(now)
            record_seat_operation("confirm", "booked")
            logger.info(f"Seat {seat_id} booked by {actor_id}")
            return seat.booking_record()

    def release(self, seat_id: str, actor_id: Optional[str]) -> SeatSnapshot:
        """
        Give up the caller's lock before it expires.
        """
        actor_id = self._require_actor(actor_id, "release")
        with self._lock:
            now = self._sweep()
            seat = self._find(seat_id, "release")

            if seat.status != SeatStatus.LOCKED:
                record_seat_operation("release", "precondition_failed")
                raise PreconditionFailedError(
                    f"Seat {seat_id} is not locked",
                    details={"seat_id": seat_id, "status": seat.status.value}
                )

            if seat.holder != actor_id:
                record_seat_operation("release", "forbidden")
                raise ForbiddenError(
                    "You can only unlock seats that you have locked",
                    details={"seat_id": seat_id}
                )

            seat.clear()
            record_seat_operation("release", "released")
            logger.info(f"Seat {seat_id} released by {actor_id}")
            return seat.snapshot(now)

    def get(self, seat_id: str) -> SeatSnapshot:
        with self._lock:
            now = self._sweep()
            return self._find(seat_id, "get").snapshot(now)

    def list(
        self,
        status: Optional[SeatStatus] = None,
        actor_id: Optional[str] = None
    ) -> SeatListing:
        """
        Seats in grid order, optionally filtered by status and by the actor
        holding the lock or owning the booking. Stats always cover the grid.
        """
        with self._lock:
            now = self._sweep()
            seats = self._seats.values()
            if status is not None:
                seats = [s for s in seats if s.status == status]
            if actor_id:
                seats = [s for s in seats if s.holder == actor_id]
            return SeatListing(
                seats=[s.snapshot(now) for s in seats],
                stats=self._stats()
            )

    def list_bookings(self, actor_id: Optional[str] = None) -> List[BookingRecord]:
        with self._lock:
            self._sweep()
            return [
                seat.booking_record()
                for seat in self._seats.values()
                if seat.status == SeatStatus.BOOKED
                and (not actor_id or seat.holder == actor_id)
            ]

    def stats(self) -> SeatStats:
        with self._lock:
            self._sweep()
            return self._stats()

    def reset(self) -> int:
        """
        Force every seat back to available, bookings included. Destructive,
        meant for test and maintenance workflows. Returns how many seats
        changed state.
        """
        with self._lock:
            changed = 0
            for seat in self._seats.values():
                if seat.status != SeatStatus.AVAILABLE:
                    changed += 1
                seat.clear()
            record_seat_operation("reset", "reset")
            logger.warning(f"All seats reset to available ({changed} seats cleared)")
            return changed
