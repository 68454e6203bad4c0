"""
Reservation Model Module
Immutable views of reservation summaries and their location/resource assignments.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ReservationApprovalState(Enum):
    """Approval states a host may report for a reservation."""
    DRAFT = "Draft"
    PENDING_REVIEW = "PendingReview"
    UNAPPROVED = "Unapproved"
    CHANGES_NEEDED = "ChangesNeeded"
    PENDING_SPECIAL_APPROVAL = "PendingSpecialApproval"
    APPROVED = "Approved"
    DENIED = "Denied"
    CANCELLED = "Cancelled"


class AssignmentApprovalState(Enum):
    """Approval states of a single location or resource assignment."""
    UNAPPROVED = "Unapproved"
    APPROVED = "Approved"
    DENIED = "Denied"


def _state_label(state: Union[str, Enum, None]) -> str:
    """Normalize an approval state (enum member or label) to its label."""
    if state is None:
        return ""
    if isinstance(state, Enum):
        return str(state.value)
    return str(state)


def _parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; datetimes and None pass through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _format_clock(moment: datetime) -> str:
    """Format a time of day as '9:00 AM'."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def describe_time_range(start: Optional[datetime], end: Optional[datetime]) -> str:
    """
    Build a short human description of a time range.

    Args:
        start: Range start
        end: Range end (may be None)

    Returns:
        Description such as "9:00 AM - 10:00 AM", or "" when start is missing
    """
    if start is None:
        return ""
    if end is None:
        return _format_clock(start)
    return f"{_format_clock(start)} - {_format_clock(end)}"


@dataclass(frozen=True)
class LocationAssignment:
    """A location booked by a reservation, with its own approval state."""
    name: str
    approval_state: str = AssignmentApprovalState.UNAPPROVED.value

    def __post_init__(self):
        object.__setattr__(self, "approval_state", _state_label(self.approval_state))

    @property
    def is_approved(self) -> bool:
        return self.approval_state == AssignmentApprovalState.APPROVED.value

    @classmethod
    def from_dict(cls, data: dict) -> "LocationAssignment":
        return cls(
            name=data["name"],
            approval_state=data.get("approval_state", AssignmentApprovalState.UNAPPROVED.value),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "approval_state": self.approval_state}


@dataclass(frozen=True)
class ResourceAssignment:
    """A resource requested by a reservation, with quantity and approval state."""
    name: str
    quantity: int = 1
    approval_state: str = AssignmentApprovalState.UNAPPROVED.value

    def __post_init__(self):
        object.__setattr__(self, "approval_state", _state_label(self.approval_state))

    @property
    def is_approved(self) -> bool:
        return self.approval_state == AssignmentApprovalState.APPROVED.value

    @property
    def label(self) -> str:
        """Display text, e.g. 'Projector(2)'."""
        return f"{self.name}({self.quantity})"

    @classmethod
    def from_dict(cls, data: dict) -> "ResourceAssignment":
        return cls(
            name=data["name"],
            quantity=int(data.get("quantity", 1)),
            approval_state=data.get("approval_state", AssignmentApprovalState.UNAPPROVED.value),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "approval_state": self.approval_state,
        }


@dataclass(frozen=True)
class ReservationSummary:
    """
    Read-only summary of one reservation as supplied by the host.

    Only the presence of ``setup_photo_id`` matters to the report, and the
    approval state is kept as the host's label so unknown states still render.
    Missing time descriptions are derived from the matching start/end pair.
    """
    id: Any
    name: str
    event_start: Optional[datetime]
    approval_state: str = ReservationApprovalState.UNAPPROVED.value
    reservation_type: str = ""
    event_end: Optional[datetime] = None
    reservation_start: Optional[datetime] = None
    reservation_end: Optional[datetime] = None
    event_time_description: str = ""
    reservation_time_description: str = ""
    locations: tuple = field(default_factory=tuple)
    resources: tuple = field(default_factory=tuple)
    note: Optional[str] = None
    setup_photo_id: Any = None

    def __post_init__(self):
        object.__setattr__(self, "approval_state", _state_label(self.approval_state))
        object.__setattr__(self, "locations", tuple(self.locations))
        object.__setattr__(self, "resources", tuple(self.resources))

        if not self.event_time_description:
            object.__setattr__(
                self, "event_time_description",
                describe_time_range(self.event_start, self.event_end)
            )
        if not self.reservation_time_description:
            object.__setattr__(
                self, "reservation_time_description",
                describe_time_range(self.reservation_start, self.reservation_end)
            )

    @property
    def calendar_date(self) -> Optional[date]:
        """Calendar date of the event start (time of day dropped)."""
        if self.event_start is None:
            return None
        return self.event_start.date()

    @property
    def has_setup_photo(self) -> bool:
        return self.setup_photo_id is not None

    @property
    def has_note(self) -> bool:
        return bool(self.note and self.note.strip())

    @property
    def is_unapproved(self) -> bool:
        return self.approval_state == ReservationApprovalState.UNAPPROVED.value

    @classmethod
    def from_dict(cls, data: dict) -> "ReservationSummary":
        """
        Build a summary from a JSON-compatible dictionary.

        Args:
            data: Dictionary with snake_case keys and ISO-8601 timestamps

        Returns:
            ReservationSummary instance

        Raises:
            KeyError: If 'id' or 'name' is missing
            ValueError: If a timestamp cannot be parsed
        """
        return cls(
            id=data["id"],
            name=data["name"],
            reservation_type=data.get("reservation_type") or "",
            approval_state=data.get("approval_state") or ReservationApprovalState.UNAPPROVED.value,
            event_start=_parse_datetime(data.get("event_start")),
            event_end=_parse_datetime(data.get("event_end")),
            reservation_start=_parse_datetime(data.get("reservation_start")),
            reservation_end=_parse_datetime(data.get("reservation_end")),
            event_time_description=data.get("event_time_description") or "",
            reservation_time_description=data.get("reservation_time_description") or "",
            locations=tuple(LocationAssignment.from_dict(item) for item in data.get("locations") or []),
            resources=tuple(ResourceAssignment.from_dict(item) for item in data.get("resources") or []),
            note=data.get("note"),
            setup_photo_id=data.get("setup_photo_id"),
        )

    def to_dict(self) -> dict:
        """Convert summary to a JSON-compatible dictionary."""
        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            "id": self.id,
            "name": self.name,
            "reservation_type": self.reservation_type,
            "approval_state": self.approval_state,
            "event_start": _iso(self.event_start),
            "event_end": _iso(self.event_end),
            "reservation_start": _iso(self.reservation_start),
            "reservation_end": _iso(self.reservation_end),
            "event_time_description": self.event_time_description,
            "reservation_time_description": self.reservation_time_description,
            "locations": [location.to_dict() for location in self.locations],
            "resources": [resource.to_dict() for resource in self.resources],
            "note": self.note,
            "setup_photo_id": self.setup_photo_id,
        }

    def __repr__(self) -> str:
        return f"ReservationSummary(id={self.id}, name={self.name[:30]}, start={self.event_start})"


@dataclass(frozen=True)
class DayGroup:
    """Reservations whose event starts on the same calendar date, in start order."""
    date: date
    reservations: tuple

    @property
    def heading(self) -> str:
        """Long calendar date, e.g. 'Tuesday, March 5, 2024'."""
        return f"{self.date:%A}, {self.date:%B} {self.date.day}, {self.date.year}"

    def __len__(self) -> int:
        return len(self.reservations)
