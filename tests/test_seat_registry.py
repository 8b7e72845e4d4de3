"""
Unit tests for the seat registry state machine
"""

import pytest
from datetime import timedelta

from seatlock.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    SeatBookedError,
    SeatLockedError,
    ValidationError,
)
from seatlock.models.seat import SeatStatus
from seatlock.services.seat_registry import SeatRegistry


@pytest.mark.unit
class TestRegistryConstruction:

    def test_grid_is_built_in_order(self, registry):
        listing = registry.list()
        ids = [seat.id for seat in listing.seats]

        assert registry.total_seats == 12
        assert ids[:5] == ["A1", "A2", "A3", "A4", "B1"]
        assert ids[-1] == "C4"
        assert all(seat.status == SeatStatus.AVAILABLE for seat in listing.seats)

    def test_default_grid_covers_a1_to_j10(self):
        registry = SeatRegistry(rows=10, seats_per_row=10, lock_ttl=timedelta(seconds=60))
        assert registry.total_seats == 100
        assert registry.get("J10").row == 10
        assert registry.lock_ttl_seconds == 60

    @pytest.mark.parametrize("rows,per_row,ttl", [
        (0, 10, 60),
        (27, 10, 60),
        (10, 0, 60),
        (10, 10, 0),
    ])
    def test_invalid_shape_rejected(self, rows, per_row, ttl):
        with pytest.raises(ValueError):
            SeatRegistry(rows=rows, seats_per_row=per_row, lock_ttl=timedelta(seconds=ttl))


@pytest.mark.unit
class TestLock:

    def test_lock_available_seat(self, registry, clock):
        result = registry.lock("A1", "u1")

        assert result.extended is False
        assert result.seat.status == SeatStatus.LOCKED
        assert result.seat.holder == "u1"
        assert result.seat.lock_acquired_at == clock.now
        assert result.seat.lock_expires_at == clock.now + timedelta(seconds=60)
        assert result.seat.lock_expires_in == 60

    def test_same_actor_relock_extends(self, registry, clock):
        first = registry.lock("A1", "u1")
        clock.advance(20)
        second = registry.lock("A1", "u1")

        assert second.extended is True
        assert second.seat.holder == "u1"
        assert second.seat.lock_acquired_at == first.seat.lock_acquired_at
        assert second.seat.lock_expires_at == clock.now + timedelta(seconds=60)

    def test_other_actor_conflicts_with_remaining_seconds(self, registry, clock):
        registry.lock("A1", "u1")
        clock.advance(1)

        with pytest.raises(SeatLockedError) as exc_info:
            registry.lock("A1", "u2")

        assert exc_info.value.status_code == 409
        assert exc_info.value.details["lock_expires_in"] == 59
        seat = registry.get("A1")
        assert seat.holder == "u1"
        assert seat.lock_expires_in == 59

    def test_booked_seat_conflicts(self, registry):
        registry.lock("A1", "u1")
        registry.confirm("A1", "u1")

        with pytest.raises(SeatBookedError):
            registry.lock("A1", "u2")
        with pytest.raises(SeatBookedError):
            registry.lock("A1", "u1")

    def test_unknown_seat(self, registry):
        with pytest.raises(NotFoundError) as exc_info:
            registry.lock("Z99", "u1")
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("actor", [None, "", "   "])
    def test_actor_required(self, registry, actor):
        with pytest.raises(ValidationError):
            registry.lock("A1", actor)
        assert registry.get("A1").status == SeatStatus.AVAILABLE

    def test_actor_checked_before_seat_lookup(self, registry):
        with pytest.raises(ValidationError):
            registry.lock("Z99", "")


@pytest.mark.unit
class TestConfirm:

    def test_confirm_own_lock(self, registry, clock):
        registry.lock("A1", "u1")
        clock.advance(2)
        booking = registry.confirm("A1", "u1")

        assert booking.seat_id == "A1"
        assert booking.actor_id == "u1"
        assert booking.booked_at == clock.now

        seat = registry.get("A1")
        assert seat.status == SeatStatus.BOOKED
        assert seat.holder == "u1"
        assert seat.booked_at == clock.now
        assert seat.lock_acquired_at is None
        assert seat.lock_expires_at is None

    def test_confirm_available_seat_requires_lock(self, registry):
        with pytest.raises(PreconditionFailedError):
            registry.confirm("A1", "u1")
        assert registry.get("A1").status == SeatStatus.AVAILABLE

    def test_confirm_someone_elses_lock(self, registry):
        registry.lock("A1", "u1")

        with pytest.raises(ForbiddenError):
            registry.confirm("A1", "u2")

        seat = registry.get("A1")
        assert seat.status == SeatStatus.LOCKED
        assert seat.holder == "u1"

    def test_reconfirm_is_conflict(self, registry):
        registry.lock("A1", "u1")
        registry.confirm("A1", "u1")

        with pytest.raises(ConflictError):
            registry.confirm("A1", "u1")

    def test_confirm_after_expiry_requires_new_lock(self, registry, clock):
        registry.lock("A1", "u1")
        clock.advance(60)

        with pytest.raises(PreconditionFailedError):
            registry.confirm("A1", "u1")

    def test_unknown_seat(self, registry):
        with pytest.raises(NotFoundError):
            registry.confirm("A0", "u1")


@pytest.mark.unit
class TestRelease:

    def test_release_own_lock(self, registry):
        registry.lock("B2", "u1")
        snapshot = registry.release("B2", "u1")

        assert snapshot.status == SeatStatus.AVAILABLE
        seat = registry.get("B2")
        assert seat.status == SeatStatus.AVAILABLE
        assert seat.holder is None
        assert seat.lock_acquired_at is None
        assert seat.lock_expires_at is None

    def test_release_by_other_actor_is_forbidden(self, registry):
        registry.lock("B2", "u1")

        with pytest.raises(ForbiddenError):
            registry.release("B2", "u2")

        assert registry.get("B2").holder == "u1"

    def test_release_unlocked_seat(self, registry):
        with pytest.raises(PreconditionFailedError):
            registry.release("B2", "u1")

    def test_release_booked_seat(self, registry):
        registry.lock("B2", "u1")
        registry.confirm("B2", "u1")

        with pytest.raises(PreconditionFailedError):
            registry.release("B2", "u1")
        assert registry.get("B2").status == SeatStatus.BOOKED

    def test_released_seat_can_be_locked_by_others(self, registry):
        registry.lock("B2", "u1")
        registry.release("B2", "u1")

        result = registry.lock("B2", "u2")
        assert result.extended is False
        assert result.seat.holder == "u2"


@pytest.mark.unit
class TestQueries:

    def test_get_unknown_seat(self, registry):
        with pytest.raises(NotFoundError):
            registry.get("a1")

    def test_list_filters_by_status(self, registry):
        registry.lock("A1", "u1")
        registry.lock("A2", "u2")
        registry.confirm("A2", "u2")

        locked = registry.list(status=SeatStatus.LOCKED)
        booked = registry.list(status=SeatStatus.BOOKED)

        assert [s.id for s in locked.seats] == ["A1"]
        assert [s.id for s in booked.seats] == ["A2"]

    def test_list_filters_by_actor_lock_or_booking(self, registry):
        registry.lock("A1", "u1")
        registry.lock("A2", "u1")
        registry.confirm("A2", "u1")
        registry.lock("A3", "u2")

        listing = registry.list(actor_id="u1")
        assert [s.id for s in listing.seats] == ["A1", "A2"]

        combined = registry.list(status=SeatStatus.BOOKED, actor_id="u1")
        assert [s.id for s in combined.seats] == ["A2"]

    def test_stats_cover_whole_grid(self, registry):
        registry.lock("A1", "u1")
        registry.lock("A2", "u2")
        registry.confirm("A2", "u2")

        listing = registry.list(actor_id="nobody")

        assert listing.seats == []
        assert listing.stats.total == 12
        assert listing.stats.available == 10
        assert listing.stats.locked == 1
        assert listing.stats.booked == 1

    def test_list_bookings(self, registry, clock):
        registry.lock("A1", "u1")
        registry.confirm("A1", "u1")
        registry.lock("C4", "u2")
        registry.confirm("C4", "u2")
        registry.lock("B1", "u1")

        bookings = registry.list_bookings()
        assert [(b.seat_id, b.actor_id) for b in bookings] == [("A1", "u1"), ("C4", "u2")]

        mine = registry.list_bookings(actor_id="u2")
        assert [b.seat_id for b in mine] == ["C4"]
        assert mine[0].booked_at == clock.now


@pytest.mark.unit
class TestReset:

    def test_reset_clears_everything(self, registry):
        registry.lock("A1", "u1")
        registry.lock("A2", "u2")
        registry.confirm("A2", "u2")

        changed = registry.reset()

        assert changed == 2
        for seat in registry.list().seats:
            assert seat.status == SeatStatus.AVAILABLE
            assert seat.holder is None
            assert seat.lock_acquired_at is None
            assert seat.lock_expires_at is None
            assert seat.booked_at is None
        assert registry.list_bookings() == []

    def test_reset_on_clean_grid(self, registry):
        assert registry.reset() == 0


@pytest.mark.unit
class TestScenarios:

    def test_contended_lock_then_booking(self, registry, clock):
        registry.lock("A1", "u1")
        assert registry.get("A1").status == SeatStatus.LOCKED

        clock.advance(1)
        with pytest.raises(SeatLockedError) as exc_info:
            registry.lock("A1", "u2")
        assert exc_info.value.lock_expires_in == 59

        clock.advance(1)
        registry.confirm("A1", "u1")
        assert registry.get("A1").status == SeatStatus.BOOKED

        clock.advance(1)
        with pytest.raises(SeatBookedError):
            registry.lock("A1", "u2")

    def test_unattended_lock_expires(self, registry, clock):
        registry.lock("B2", "u1")
        clock.advance(61)

        seat = registry.get("B2")
        assert seat.status == SeatStatus.AVAILABLE
        assert seat.holder is None
