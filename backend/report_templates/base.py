"""
Report Template Base Module
The contract every pluggable report template implements.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from models.reservation import ReservationSummary


class ReportTemplate(ABC):
    """
    Base class for report templates.

    Subclasses implement:
        - exceptions -> list: Non-fatal errors from the last generate_report call
        - generate_report(...) -> bytes: Render the reservations to a document

    Hosts create a fresh instance per report, so implementations may keep
    per-call state such as the collected exceptions.
    """

    @property
    @abstractmethod
    def exceptions(self) -> list[Exception]:
        """Non-fatal exceptions collected while generating the last report."""

    @abstractmethod
    def generate_report(
        self,
        reservations: list[ReservationSummary],
        logo_reference: Optional[str],
        font: Optional[str],
        filter_start_date: Optional[date] = None,
        filter_end_date: Optional[date] = None
    ) -> bytes:
        """
        Render reservations into a finished document.

        Args:
            reservations: Reservations to include
            logo_reference: Logo URL or path; may fail to resolve
            font: Font family name
            filter_start_date: Start of the date window shown in the title
            filter_end_date: End of the date window shown in the title

        Returns:
            Serialized document
        """
