"""
Day Grouper Module
Orders reservations chronologically and partitions them into calendar-day groups.
"""

import logging
from models.reservation import DayGroup, ReservationSummary
from validators.reservation_validator import validate_reservations

logger = logging.getLogger(__name__)


class ReservationGrouper:
    """Groups reservations by the calendar date of their event start."""

    @staticmethod
    def sort_by_event_start(reservations: list[ReservationSummary]) -> list[ReservationSummary]:
        """
        Sort reservations by event start, ascending.

        Timestamps are compared by their wall-clock value, ignoring any UTC
        offset, so the order agrees with the calendar date used for grouping
        and naive and aware starts can be mixed. Python's sort is stable, so
        ties keep their input order.

        Args:
            reservations: Validated reservations

        Returns:
            New sorted list
        """
        return sorted(reservations, key=lambda reservation: reservation.event_start.replace(tzinfo=None))

    @staticmethod
    def partition_by_day(sorted_reservations: list[ReservationSummary]) -> list[DayGroup]:
        """
        Split an already sorted list into maximal runs sharing a calendar date.

        Args:
            sorted_reservations: Reservations sorted by event start

        Returns:
            DayGroups in encountered order
        """
        groups = []
        current_date = None
        current_run = []

        for reservation in sorted_reservations:
            reservation_date = reservation.calendar_date
            if current_run and reservation_date != current_date:
                groups.append(DayGroup(date=current_date, reservations=tuple(current_run)))
                current_run = []
            current_date = reservation_date
            current_run.append(reservation)

        if current_run:
            groups.append(DayGroup(date=current_date, reservations=tuple(current_run)))

        return groups

    @staticmethod
    def group_by_day(reservations: list[ReservationSummary]) -> list[DayGroup]:
        """
        Validate, sort and partition reservations into day groups.

        Args:
            reservations: Reservations in any order

        Returns:
            DayGroups ordered by date, each ordered by event start

        Raises:
            ValidationError: If a reservation has no event start
        """
        valid = validate_reservations(reservations)
        ordered = ReservationGrouper.sort_by_event_start(valid)
        groups = ReservationGrouper.partition_by_day(ordered)

        logger.info(f"Grouped {len(valid)} reservations into {len(groups)} days")
        return groups


def group_reservations_by_day(reservations: list[ReservationSummary]) -> list[DayGroup]:
    """Convenience wrapper around ReservationGrouper.group_by_day."""
    return ReservationGrouper.group_by_day(reservations)
