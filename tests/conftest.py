"""Test fixtures for the reservation report generator."""
from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from PIL import Image as PILImage

from models.reservation import LocationAssignment, ReservationSummary, ResourceAssignment


@pytest.fixture()
def make_reservation():
    """Factory for reservation summaries with sensible defaults."""

    def _make(
        id: int = 1,
        name: str = "Board Meeting",
        event_start: datetime | None = datetime(2024, 3, 5, 9, 0),
        **overrides,
    ) -> ReservationSummary:
        fields = {
            "id": id,
            "name": name,
            "event_start": event_start,
            "event_end": event_start + timedelta(hours=1) if event_start else None,
            "approval_state": "Approved",
            "reservation_type": "Meeting",
        }
        fields.update(overrides)
        return ReservationSummary(**fields)

    return _make


@pytest.fixture()
def scenario_reservation() -> ReservationSummary:
    """One approved reservation on Tuesday, March 5, 2024."""
    return ReservationSummary(
        id=42,
        name="Staff Retreat",
        reservation_type="Event",
        approval_state="Approved",
        event_start=datetime(2024, 3, 5, 9, 0),
        event_end=datetime(2024, 3, 5, 10, 0),
        reservation_start=datetime(2024, 3, 5, 8, 30),
        reservation_end=datetime(2024, 3, 5, 10, 15),
        event_time_description="9:00 AM–10:00 AM",
        reservation_time_description="8:30 AM–10:15 AM",
        locations=(LocationAssignment("Main Hall", "Approved"),),
        resources=(ResourceAssignment("Projector", 2, "Unapproved"),),
        note=None,
        setup_photo_id=None,
    )


@pytest.fixture()
def logo_png(tmp_path: Path) -> Path:
    """A 200x100 PNG logo on disk."""
    path = tmp_path / "logo.png"
    PILImage.new("RGB", (200, 100), color=(30, 90, 160)).save(path, format="PNG")
    return path


@pytest.fixture()
def reservations_json(tmp_path: Path) -> Path:
    """A reservations JSON file with two days of bookings."""
    payload = {
        "reservations": [
            {
                "id": 1,
                "name": "Choir Practice",
                "approval_state": "Unapproved",
                "event_start": "2024-03-06T19:00:00",
                "event_end": "2024-03-06T21:00:00",
                "locations": [{"name": "Chapel", "approval_state": "Approved"}],
                "resources": [{"name": "Piano", "quantity": 1, "approval_state": "Approved"}],
                "note": "Bring music stands",
            },
            {
                "id": 2,
                "name": "Staff Retreat",
                "approval_state": "Approved",
                "event_start": "2024-03-05T09:00:00",
                "event_end": "2024-03-05T10:00:00",
                "locations": [{"name": "Main Hall", "approval_state": "Approved"}],
                "resources": [],
                "setup_photo_id": 7,
            },
        ]
    }
    path = tmp_path / "reservations.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
