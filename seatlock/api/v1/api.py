"""
Main API Router
Aggregates all API endpoints for v1
"""

from fastapi import APIRouter
from seatlock.api.v1.endpoints import (
    admin,
    bookings,
    health,
    seats
)

api_router = APIRouter()

# Include all routers
api_router.include_router(seats.router, prefix="/seats", tags=["Seats"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
