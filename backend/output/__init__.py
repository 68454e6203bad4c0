"""
Output Module - PDF report layout and generation.
"""

from .layout import (
    ReservationReportLayout,
    format_report_title
)

from .writer import (
    ReservationReportWriter,
    ReportGenerationError,
    generate_pdf_report
)

__all__ = [
    'ReservationReportLayout',
    'format_report_title',
    'ReservationReportWriter',
    'ReportGenerationError',
    'generate_pdf_report',
]
