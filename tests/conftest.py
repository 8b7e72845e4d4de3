"""
Test configuration and fixtures
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set test environment before the application modules read it
os.environ["APP_ENV"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from seatlock.config import Settings
from seatlock.main import create_app
from seatlock.services.seat_registry import SeatRegistry


LOCK_TTL_SECONDS = 60


class FakeClock:
    """Controllable clock for expiry tests"""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    return Settings(
        APP_ENV="testing",
        SEAT_ROWS=3,
        SEATS_PER_ROW=4,
        SEAT_LOCK_TTL_SECONDS=LOCK_TTL_SECONDS,
        LOG_LEVEL="WARNING",
        LOG_FILE=None,
        PROMETHEUS_ENABLED=True
    )


@pytest.fixture
def registry(test_settings, clock):
    """3 rows x 4 seats (A1-C4), 60 second locks, fake clock"""
    return SeatRegistry.from_settings(test_settings, clock=clock)


@pytest.fixture
def app(test_settings, registry):
    return create_app(test_settings, registry=registry)


@pytest_asyncio.fixture
async def client(app):
    """Create test client bound to the application"""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
