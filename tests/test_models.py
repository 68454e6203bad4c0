"""Reservation data model tests."""
from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date, datetime

import pytest

from models.reservation import (
    AssignmentApprovalState,
    DayGroup,
    LocationAssignment,
    ReservationApprovalState,
    ReservationSummary,
    ResourceAssignment,
    describe_time_range,
)


def test_from_dict_parses_timestamps_and_assignments() -> None:
    summary = ReservationSummary.from_dict(
        {
            "id": "r-1",
            "name": "Youth Night",
            "approval_state": "Approved",
            "event_start": "2024-03-05T18:30:00",
            "event_end": "2024-03-05T20:00:00",
            "event_time_description": "6:30 PM - 8:00 PM",
            "locations": [{"name": "Gym", "approval_state": "Approved"}],
            "resources": [{"name": "Chairs", "quantity": "40"}],
        }
    )

    assert summary.event_start == datetime(2024, 3, 5, 18, 30)
    assert summary.calendar_date == date(2024, 3, 5)
    assert summary.locations == (LocationAssignment("Gym", "Approved"),)
    assert summary.resources[0].quantity == 40
    assert summary.resources[0].approval_state == "Unapproved"
    assert summary.reservation_start is None


def test_missing_descriptions_are_derived_from_times() -> None:
    summary = ReservationSummary(
        id=1,
        name="Lunch",
        event_start=datetime(2024, 3, 5, 12, 0),
        event_end=datetime(2024, 3, 5, 13, 30),
        reservation_start=datetime(2024, 3, 5, 11, 45),
    )

    assert summary.event_time_description == "12:00 PM - 1:30 PM"
    assert summary.reservation_time_description == "11:45 AM"


def test_precomputed_descriptions_are_kept() -> None:
    summary = ReservationSummary(
        id=1,
        name="Lunch",
        event_start=datetime(2024, 3, 5, 12, 0),
        event_time_description="All day",
    )
    assert summary.event_time_description == "All day"


def test_describe_time_range_midnight() -> None:
    assert describe_time_range(datetime(2024, 1, 1, 0, 5), None) == "12:05 AM"
    assert describe_time_range(None, None) == ""


def test_enum_states_normalize_to_labels() -> None:
    summary = ReservationSummary(
        id=1,
        name="Wedding",
        event_start=datetime(2024, 6, 1, 14, 0),
        approval_state=ReservationApprovalState.UNAPPROVED,
        locations=[LocationAssignment("Sanctuary", AssignmentApprovalState.APPROVED)],
    )

    assert summary.approval_state == "Unapproved"
    assert summary.is_unapproved
    assert summary.locations[0].is_approved
    assert isinstance(summary.locations, tuple)


def test_unknown_host_state_is_kept_verbatim() -> None:
    summary = ReservationSummary(id=1, name="x", event_start=datetime(2024, 1, 1), approval_state="OnHold")
    assert summary.approval_state == "OnHold"
    assert not summary.is_unapproved


@pytest.mark.parametrize(
    ("note", "expected"),
    [(None, False), ("", False), ("   \n\t", False), ("Doors open at 8", True)],
)
def test_has_note_ignores_whitespace(note: str | None, expected: bool) -> None:
    summary = ReservationSummary(id=1, name="x", event_start=datetime(2024, 1, 1), note=note)
    assert summary.has_note is expected


@pytest.mark.parametrize(("photo_id", "expected"), [(None, False), (0, True), (123, True), ("", True)])
def test_has_setup_photo_is_a_presence_check(photo_id, expected: bool) -> None:
    summary = ReservationSummary(id=1, name="x", event_start=datetime(2024, 1, 1), setup_photo_id=photo_id)
    assert summary.has_setup_photo is expected


def test_resource_label() -> None:
    assert ResourceAssignment("Projector", 2).label == "Projector(2)"


def test_summary_is_immutable(make_reservation) -> None:
    summary = make_reservation()
    with pytest.raises(FrozenInstanceError):
        summary.name = "Changed"


def test_to_dict_round_trips_through_from_dict(scenario_reservation) -> None:
    assert ReservationSummary.from_dict(scenario_reservation.to_dict()) == scenario_reservation


def test_day_group_heading() -> None:
    group = DayGroup(date=date(2024, 3, 5), reservations=())
    assert group.heading == "Tuesday, March 5, 2024"
    assert len(group) == 0
