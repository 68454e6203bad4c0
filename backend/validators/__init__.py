"""
Validators Module - Reservation data validation.
"""

from .reservation_validator import (
    ReservationValidator,
    validate_reservations,
    ValidationError
)

__all__ = [
    'ReservationValidator',
    'validate_reservations',
    'ValidationError',
]
