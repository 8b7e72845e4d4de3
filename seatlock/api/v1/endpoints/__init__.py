"""
API endpoints module
"""

from . import admin, bookings, health, seats

__all__ = [
    "admin",
    "bookings",
    "health",
    "seats"
]
