"""
PDF Report Writer Module
Renders reservation summaries into a finalized in-memory PDF document.
"""

import io
import logging
from datetime import date
from typing import Optional
from reportlab.platypus import SimpleDocTemplate

from config import config
from grouping.day_grouper import ReservationGrouper
from models.reservation import ReservationSummary
from output.layout import ReservationReportLayout, format_report_title

logger = logging.getLogger(__name__)


class ReportGenerationError(Exception):
    """Raised when the PDF document cannot be built or finalized."""
    pass


class ReservationReportWriter:
    """Generates PDF reports from reservation summaries."""

    def __init__(self, page_size: Optional[tuple[float, float]] = None):
        """
        Initialize PDF writer.

        Args:
            page_size: Page size (default: configured page size)
        """
        self.page_size = page_size or config.get_page_size()
        self.exceptions: list[Exception] = []

    def generate_report(
        self,
        reservations: list[ReservationSummary],
        logo_reference: Optional[str] = None,
        font: Optional[str] = None,
        filter_start_date: Optional[date] = None,
        filter_end_date: Optional[date] = None,
        today: Optional[date] = None
    ) -> bytes:
        """
        Generate PDF report from reservation summaries.

        Args:
            reservations: Reservations to include, in any order
            logo_reference: Optional logo URL or file path
            font: Font family name (default: DEFAULT_FONT)
            filter_start_date: Start of the date window shown in the title
            filter_end_date: End of the date window shown in the title
            today: Reference date for the default window

        Returns:
            Complete PDF document as bytes

        Raises:
            ValidationError: If a reservation cannot be grouped
            ReportGenerationError: If PDF generation fails
        """
        # Input validation
        if reservations is None:
            logger.error("reservations cannot be None")
            raise ValueError("reservations cannot be None")

        self.exceptions = []
        day_groups = ReservationGrouper.group_by_day(reservations)

        logger.info(
            f"Generating reservation report: {len(day_groups)} days, "
            f"{sum(len(group) for group in day_groups)} reservations"
        )

        layout = ReservationReportLayout(font_family=font, page_size=self.page_size)
        buffer = io.BytesIO()

        try:
            doc = SimpleDocTemplate(
                buffer,
                pagesize=self.page_size,
                rightMargin=layout.margin,
                leftMargin=layout.margin,
                topMargin=layout.margin,
                bottomMargin=layout.margin,
                title=format_report_title(filter_start_date, filter_end_date, today),
                author=config.APP_NAME
            )

            story = layout.build_story(
                day_groups,
                logo_reference=logo_reference,
                filter_start_date=filter_start_date,
                filter_end_date=filter_end_date,
                today=today
            )

            logger.info("Building PDF document...")
            doc.build(story)

        except Exception as e:
            logger.error(f"Error building PDF content: {e}", exc_info=True)
            raise ReportGenerationError(f"Failed to build PDF report: {e}") from e

        finally:
            self.exceptions = list(layout.exceptions)

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"PDF report generated successfully ({len(pdf_bytes)} bytes)")
        return pdf_bytes


def generate_pdf_report(
    reservations: list[ReservationSummary],
    logo_reference: Optional[str] = None,
    font: Optional[str] = None,
    filter_start_date: Optional[date] = None,
    filter_end_date: Optional[date] = None
) -> bytes:
    """
    Convenience function to render a reservation report.

    Args:
        reservations: Reservations to include
        logo_reference: Optional logo URL or file path
        font: Font family name
        filter_start_date: Title window start
        filter_end_date: Title window end

    Returns:
        PDF document bytes
    """
    writer = ReservationReportWriter()
    return writer.generate_report(
        reservations,
        logo_reference,
        font,
        filter_start_date,
        filter_end_date
    )
