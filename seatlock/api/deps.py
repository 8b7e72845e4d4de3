"""
Shared endpoint dependencies
"""

from fastapi import Request

from seatlock.config import Settings
from seatlock.services.seat_registry import SeatRegistry


def get_seat_registry(request: Request) -> SeatRegistry:
    """
    The registry owned by the running application
    """
    return request.app.state.seat_registry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
