"""
Grouping Module - Chronological ordering and per-day grouping.
"""

from .day_grouper import (
    ReservationGrouper,
    group_reservations_by_day
)

__all__ = [
    'ReservationGrouper',
    'group_reservations_by_day',
]
