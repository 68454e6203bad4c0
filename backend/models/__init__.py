"""
Models Module - Reservation summaries and day groupings.
"""

from .reservation import (
    ReservationApprovalState,
    AssignmentApprovalState,
    LocationAssignment,
    ResourceAssignment,
    ReservationSummary,
    DayGroup,
    describe_time_range
)

__all__ = [
    'ReservationApprovalState',
    'AssignmentApprovalState',
    'LocationAssignment',
    'ResourceAssignment',
    'ReservationSummary',
    'DayGroup',
    'describe_time_range',
]
