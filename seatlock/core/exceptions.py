"""
Custom application exceptions
"""

from typing import Optional, Dict, Any


class SeatlockException(Exception):
    """Base exception for Seatlock application"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(SeatlockException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} {identifier} not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details={"resource": resource, "id": identifier} if identifier else None
        )


class ValidationError(SeatlockException):
    """Validation errors"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class ForbiddenError(SeatlockException):
    """Actor is not allowed to act on the resource"""

    def __init__(self, message: str = "Not allowed", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            details=details
        )


class PreconditionFailedError(SeatlockException):
    """Resource is not in the state the operation requires"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="PRECONDITION_FAILED",
            status_code=400,
            details=details
        )


class ConflictError(SeatlockException):
    """Resource conflict errors"""

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            details=details
        )


class SeatBookedError(ConflictError):
    """Seat already booked error"""

    def __init__(self, seat_id: str):
        super().__init__(
            message=f"Seat {seat_id} is already booked",
            code="SEAT_BOOKED",
            details={"seat_id": seat_id, "status": "booked"}
        )


class SeatLockedError(ConflictError):
    """Seat held by another actor"""

    def __init__(self, seat_id: str, lock_expires_in: int):
        super().__init__(
            message=f"Seat {seat_id} is currently locked by another user",
            code="SEAT_LOCKED",
            details={
                "seat_id": seat_id,
                "status": "locked",
                "lock_expires_in": lock_expires_in
            }
        )
        self.lock_expires_in = lock_expires_in
