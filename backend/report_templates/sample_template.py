"""
Sample Report Template
A day-by-day PDF listing of reservations with locations, resources and status.
"""

import logging
from datetime import date
from typing import Optional

from models.reservation import ReservationSummary
from output.writer import ReservationReportWriter
from report_templates.base import ReportTemplate

logger = logging.getLogger(__name__)

SAMPLE_TEMPLATE_ID = "A76C387A-96EA-475C-81D9-ABD73C049E01"
SAMPLE_TEMPLATE_NAME = "RockSolidChurch SampleExample Report Template"
SAMPLE_TEMPLATE_DESCRIPTION = "The sample report template"


class ReservationReportTemplate(ReportTemplate):
    """PDF report template grouping reservations by calendar day."""

    def __init__(self):
        self._exceptions: list[Exception] = []

    @property
    def exceptions(self) -> list[Exception]:
        return self._exceptions

    def generate_report(
        self,
        reservations: list[ReservationSummary],
        logo_reference: Optional[str],
        font: Optional[str],
        filter_start_date: Optional[date] = None,
        filter_end_date: Optional[date] = None
    ) -> bytes:
        writer = ReservationReportWriter()
        try:
            return writer.generate_report(
                reservations,
                logo_reference=logo_reference,
                font=font,
                filter_start_date=filter_start_date,
                filter_end_date=filter_end_date
            )
        finally:
            self._exceptions = list(writer.exceptions)
            if self._exceptions:
                logger.debug(f"{SAMPLE_TEMPLATE_NAME}: {len(self._exceptions)} non-fatal exceptions")
