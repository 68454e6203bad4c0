"""Day grouping and ordering tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from grouping.day_grouper import ReservationGrouper, group_reservations_by_day
from validators.reservation_validator import ValidationError


def test_empty_input_produces_no_groups() -> None:
    assert ReservationGrouper.group_by_day([]) == []


def test_groups_cover_distinct_dates_exactly(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 6, 9, 0)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 15, 0)),
        make_reservation(id=3, event_start=datetime(2024, 3, 7, 8, 0)),
        make_reservation(id=4, event_start=datetime(2024, 3, 5, 7, 0)),
        make_reservation(id=5, event_start=datetime(2024, 3, 6, 23, 59)),
    ]

    groups = group_reservations_by_day(reservations)

    assert len(groups) == len({r.event_start.date() for r in reservations})
    grouped_ids = [r.id for group in groups for r in group.reservations]
    assert sorted(grouped_ids) == [1, 2, 3, 4, 5]
    assert len(grouped_ids) == len(set(grouped_ids))


def test_groups_and_members_are_chronological(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 6, 9, 0)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 15, 0)),
        make_reservation(id=3, event_start=datetime(2024, 3, 5, 7, 0)),
    ]

    groups = ReservationGrouper.group_by_day(reservations)

    assert [group.date for group in groups] == sorted(group.date for group in groups)
    for group in groups:
        starts = [r.event_start for r in group.reservations]
        assert starts == sorted(starts)
        assert all(r.event_start.date() == group.date for r in group.reservations)
    assert [r.id for r in groups[0].reservations] == [3, 2]


def test_ties_keep_input_order(make_reservation) -> None:
    same_time = datetime(2024, 3, 5, 9, 0)
    reservations = [make_reservation(id=i, event_start=same_time) for i in (3, 1, 2)]

    groups = ReservationGrouper.group_by_day(reservations)

    assert len(groups) == 1
    assert [r.id for r in groups[0].reservations] == [3, 1, 2]


def test_time_of_day_does_not_split_a_day(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 5, 0, 0)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 23, 59)),
    ]
    assert len(ReservationGrouper.group_by_day(reservations)) == 1


def test_aware_timestamps_group_by_local_calendar_date(make_reservation) -> None:
    eastern = timezone(timedelta(hours=-5))
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 5, 22, 0, tzinfo=eastern)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 23, 0, tzinfo=eastern)),
    ]

    groups = ReservationGrouper.group_by_day(reservations)

    # Both are March 6 in UTC; the grouping uses the timestamps' own date
    assert [group.date.day for group in groups] == [5]
    assert len(groups[0]) == 2


def test_mixed_offsets_give_one_group_per_date_in_order(make_reservation) -> None:
    eastern = timezone(timedelta(hours=-5))
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 5, 23, 0, tzinfo=eastern)),
        make_reservation(id=2, event_start=datetime(2024, 3, 6, 1, 0, tzinfo=timezone.utc)),
        make_reservation(id=3, event_start=datetime(2024, 3, 6, 9, 0, tzinfo=timezone.utc)),
    ]

    groups = ReservationGrouper.group_by_day(reservations)

    assert [group.date.isoformat() for group in groups] == ["2024-03-05", "2024-03-06"]
    assert [[r.id for r in group.reservations] for group in groups] == [[1], [2, 3]]


def test_naive_and_aware_starts_can_be_mixed(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 6, 8, 0, tzinfo=timezone.utc)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 9, 0)),
        make_reservation(id=3, event_start=datetime(2024, 3, 6, 7, 0)),
    ]

    groups = ReservationGrouper.group_by_day(reservations)

    assert [group.date.day for group in groups] == [5, 6]
    assert [r.id for r in groups[1].reservations] == [3, 1]


def test_sort_does_not_mutate_input(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, event_start=datetime(2024, 3, 6)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5)),
    ]
    ReservationGrouper.sort_by_event_start(reservations)
    assert [r.id for r in reservations] == [1, 2]


def test_partition_of_sorted_runs(make_reservation) -> None:
    ordered = [
        make_reservation(id=1, event_start=datetime(2024, 3, 5, 8)),
        make_reservation(id=2, event_start=datetime(2024, 3, 5, 9)),
        make_reservation(id=3, event_start=datetime(2024, 3, 9, 9)),
    ]
    groups = ReservationGrouper.partition_by_day(ordered)
    assert [len(group) for group in groups] == [2, 1]


def test_missing_event_start_is_fatal(make_reservation) -> None:
    reservations = [make_reservation(id=1), make_reservation(id=2, event_start=None)]

    with pytest.raises(ValidationError, match="Reservation 2 has no event start"):
        ReservationGrouper.group_by_day(reservations)
