"""PDF rendering tests; generated documents are read back with PyMuPDF."""
from __future__ import annotations

from datetime import date, datetime, timedelta

import fitz
import pytest
from reportlab.platypus import SimpleDocTemplate

from loaders.pdf_loader import inspect_pdf
from output.writer import ReportGenerationError, ReservationReportWriter, generate_pdf_report
from validators.reservation_validator import ValidationError


def test_scenario_single_reservation(scenario_reservation) -> None:
    pdf_bytes = ReservationReportWriter().generate_report(
        [scenario_reservation],
        None,
        "Helvetica",
        date(2024, 3, 1),
        date(2024, 3, 31),
    )

    assert pdf_bytes.startswith(b"%PDF")
    report = inspect_pdf(pdf_bytes)
    assert report.page_count == 1
    assert "Reservations for: March 1 - March 31" in report.text
    assert report.text.count("Tuesday, March 5, 2024") == 1
    for expected in ("Staff Retreat", "Main Hall", "Projector(2)", "Approved", "Status", "Locations"):
        assert expected in report.text
    assert report.image_count == 0


def test_scenario_empty_list_renders_title_only() -> None:
    pdf_bytes = generate_pdf_report([], None, "Helvetica", date(2024, 1, 1), date(2024, 1, 31))

    report = inspect_pdf(pdf_bytes)
    assert report.page_count == 1
    assert "Reservations for: January 1 - January 31" in report.text
    assert "Event Time" not in report.text
    assert "Status" not in report.text


def test_scenario_unresolvable_logo_keeps_body(scenario_reservation, tmp_path) -> None:
    arguments = ([scenario_reservation], "Helvetica", date(2024, 3, 1), date(2024, 3, 31))

    plain = ReservationReportWriter().generate_report(arguments[0], None, *arguments[1:])
    writer = ReservationReportWriter()
    with_bad_logo = writer.generate_report(arguments[0], str(tmp_path / "nope.png"), *arguments[1:])

    assert inspect_pdf(with_bad_logo).text == inspect_pdf(plain).text
    assert inspect_pdf(with_bad_logo).image_count == 0
    assert len(writer.exceptions) == 1


def test_logo_is_embedded(scenario_reservation, logo_png) -> None:
    writer = ReservationReportWriter()
    pdf_bytes = writer.generate_report([scenario_reservation], str(logo_png), "Helvetica")

    assert inspect_pdf(pdf_bytes).image_count == 1
    assert writer.exceptions == []


def test_notes_and_unapproved_status_render(make_reservation) -> None:
    reservations = [
        make_reservation(id=1, name="Choir", approval_state="Unapproved", note="Bring music stands"),
        make_reservation(id=2, name="Ushers", note="   "),
    ]

    text = inspect_pdf(ReservationReportWriter().generate_report(reservations, None, "Times-Roman")).text

    assert "Bring music stands" in text
    assert "Unapproved" in text
    assert "Ushers" in text


def test_markup_characters_in_host_text(make_reservation) -> None:
    reservation = make_reservation(name="Tom & Jerry <Live>", note="Doors < 8pm & > 6pm")

    text = inspect_pdf(ReservationReportWriter().generate_report([reservation], None, "Helvetica")).text

    assert "Tom & Jerry" in text
    assert "<Live>" in text


def test_long_reports_paginate(make_reservation) -> None:
    start = datetime(2024, 3, 1, 9, 0)
    reservations = [
        make_reservation(id=i, name=f"Booking {i}", event_start=start + timedelta(days=i // 4, hours=i % 4))
        for i in range(160)
    ]

    report = inspect_pdf(ReservationReportWriter().generate_report(reservations, None, "Helvetica"))

    assert report.page_count > 1
    assert "Booking 159" in report.text


def test_missing_event_start_aborts_render(make_reservation) -> None:
    with pytest.raises(ValidationError):
        ReservationReportWriter().generate_report(
            [make_reservation(id=1), make_reservation(id=2, event_start=None)],
            None,
            "Helvetica",
        )


def test_none_reservations_rejected() -> None:
    with pytest.raises(ValueError):
        ReservationReportWriter().generate_report(None, None, "Helvetica")


def test_build_failure_is_fatal(scenario_reservation, monkeypatch) -> None:
    def broken_build(self, flowables, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(SimpleDocTemplate, "build", broken_build)

    with pytest.raises(ReportGenerationError, match="disk full"):
        ReservationReportWriter().generate_report([scenario_reservation], None, "Helvetica")


def test_calls_do_not_share_state(scenario_reservation, tmp_path) -> None:
    writer = ReservationReportWriter()
    writer.generate_report([scenario_reservation], str(tmp_path / "missing.png"), "Helvetica")
    assert len(writer.exceptions) == 1

    writer.generate_report([scenario_reservation], None, "Helvetica")
    assert writer.exceptions == []


def _text_spans(pdf_bytes: bytes) -> list[dict]:
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        return [
            span
            for page in doc
            for block in page.get_text("dict")["blocks"]
            for line in block.get("lines", [])
            for span in line["spans"]
            if span["text"].strip()
        ]
    finally:
        doc.close()


def test_checkmark_follows_only_approved_assignments(scenario_reservation) -> None:
    pdf_bytes = ReservationReportWriter().generate_report([scenario_reservation], None, "Helvetica")
    spans = _text_spans(pdf_bytes)

    checkmarks = [span for span in spans if "Dingbats" in span["font"]]
    main_hall = next(span for span in spans if "Main Hall" in span["text"])
    projector = next(span for span in spans if "Projector(2)" in span["text"])

    # Main Hall is approved, the projector is not
    assert len(checkmarks) == 1
    [checkmark] = checkmarks
    assert main_hall["bbox"][2] <= checkmark["bbox"][0] + 0.5
    assert checkmark["bbox"][2] <= projector["bbox"][0]
    assert abs(checkmark["origin"][1] - main_hall["origin"][1]) < 1
