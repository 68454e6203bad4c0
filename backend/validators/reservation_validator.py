"""
Reservation Validator Module
Validates reservation summaries before they are grouped and rendered.
"""

import logging
from datetime import datetime
from models.reservation import ReservationSummary

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when a reservation cannot be placed in the report."""
    pass


class ReservationValidator:
    """
    Validates reservation data.

    A reservation without a usable event start cannot be assigned to a day,
    so every failure is fatal for the whole report.
    """

    def __init__(self):
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_event_start": 0,
            "invalid_name": 0,
            "invalid_quantity": 0
        }

    def validate_reservation(self, reservation: ReservationSummary) -> bool:
        """
        Validate a single reservation.

        Args:
            reservation: ReservationSummary to validate

        Returns:
            True if valid

        Raises:
            ValidationError: If the reservation is malformed
        """
        self.validation_stats["total_validated"] += 1

        if not isinstance(reservation, ReservationSummary):
            self.validation_stats["invalid"] += 1
            raise ValidationError(f"Expected ReservationSummary, got {type(reservation).__name__}")

        # Validate event start
        if not isinstance(reservation.event_start, datetime):
            self.validation_stats["invalid_event_start"] += 1
            self.validation_stats["invalid"] += 1
            msg = f"Reservation {reservation.id} has no event start"
            logger.error(msg)
            raise ValidationError(msg)

        # Validate name
        if reservation.name is None:
            self.validation_stats["invalid_name"] += 1
            self.validation_stats["invalid"] += 1
            msg = f"Reservation {reservation.id} has no name"
            logger.error(msg)
            raise ValidationError(msg)

        # Validate resource quantities
        for resource in reservation.resources:
            if resource.quantity < 0:
                self.validation_stats["invalid_quantity"] += 1
                self.validation_stats["invalid"] += 1
                msg = f"Reservation {reservation.id} requests negative quantity of {resource.name}"
                logger.error(msg)
                raise ValidationError(msg)

        self.validation_stats["valid"] += 1
        return True

    def validate_reservations(self, reservations: list[ReservationSummary]) -> list[ReservationSummary]:
        """
        Validate a list of reservations.

        Args:
            reservations: List of ReservationSummary objects

        Returns:
            The same reservations, as a list

        Raises:
            ValidationError: On the first malformed reservation
        """
        if reservations is None:
            raise ValidationError("reservations cannot be None")

        reservations = list(reservations)
        logger.debug(f"Validating {len(reservations)} reservations")

        for reservation in reservations:
            self.validate_reservation(reservation)

        logger.info(f"Validation passed: {self.validation_stats['valid']} reservations")
        return reservations

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()


def validate_reservations(reservations: list[ReservationSummary]) -> list[ReservationSummary]:
    """
    Convenience function to validate reservations.

    Args:
        reservations: List of reservations to validate

    Returns:
        Validated reservations

    Raises:
        ValidationError: If any reservation is malformed
    """
    validator = ReservationValidator()
    return validator.validate_reservations(reservations)
