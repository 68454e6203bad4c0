"""
Reservation Report Generator - Main Pipeline
Orchestrates loading, validation, grouping and PDF report generation.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from config import config
from grouping.day_grouper import ReservationGrouper
from loaders.pdf_loader import PDFLoadError, inspect_pdf
from loaders.reservation_loader import ReservationLoadError, load_reservations
from logging_config import setup_logging
from report_templates.registry import (
    TemplateInactiveError,
    TemplateNotFoundError,
    TemplateRegistry,
    create_default_registry,
)
from report_templates.sample_template import SAMPLE_TEMPLATE_ID
from validators.reservation_validator import ValidationError

logger = logging.getLogger(__name__)


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid date
    """
    if not value:
        return None
    return datetime.strptime(value, '%Y-%m-%d').date()


class ReservationReportPipeline:
    """Main orchestrator for the reservation report pipeline."""

    def __init__(self, registry: Optional[TemplateRegistry] = None):
        """
        Initialize pipeline.

        Args:
            registry: Template registry (default: built-in templates)
        """
        self.registry = registry or create_default_registry()
        self.stats = {
            "total_loaded": 0,
            "day_groups": 0,
            "pdf_pages": 0,
            "bytes_written": 0,
            "non_fatal_errors": 0
        }

    def _validate_inputs(
        self,
        input_path: str,
        output_path: str,
        filter_start_date: Optional[date],
        filter_end_date: Optional[date]
    ):
        """Validate all input parameters."""
        if not input_path or not isinstance(input_path, str):
            raise ValueError("input_path must be a non-empty string")

        if not Path(input_path).exists():
            raise ValueError(f"Reservation file not found: {input_path}")

        if not output_path or not isinstance(output_path, str):
            raise ValueError("output_path must be a non-empty string")

        if not output_path.endswith('.pdf'):
            raise ValueError("output_path must end with .pdf")

        if filter_start_date and filter_end_date and filter_start_date > filter_end_date:
            raise ValueError(
                f"start date ({filter_start_date}) must be <= end date ({filter_end_date})"
            )

        logger.info("Input validation passed")

    def process(
        self,
        input_path: str,
        output_path: str,
        logo_reference: Optional[str] = None,
        font: Optional[str] = None,
        filter_start_date: Optional[date] = None,
        filter_end_date: Optional[date] = None,
        template_id: str = SAMPLE_TEMPLATE_ID
    ) -> Path:
        """
        Load reservations from JSON and write the rendered report.

        Args:
            input_path: Path to reservations JSON
            output_path: Path for output PDF report
            logo_reference: Optional logo URL or path
            font: Font family name
            filter_start_date: Title window start
            filter_end_date: Title window end
            template_id: Registered template identifier

        Returns:
            Path of the written report

        Raises:
            ValueError: If inputs are invalid
            ReservationLoadError: If the reservations cannot be loaded
            ValidationError: If a reservation is malformed
            TemplateNotFoundError, TemplateInactiveError: For unusable templates
            ReportGenerationError: If the PDF cannot be built
        """
        logger.info("=" * 80)
        logger.info("Starting Reservation Report Pipeline")
        logger.info("=" * 80)

        # Input validation
        try:
            self._validate_inputs(input_path, output_path, filter_start_date, filter_end_date)
        except ValueError as e:
            logger.error(f"Input validation failed: {e}")
            raise

        # Step 1: Load reservations
        logger.info(f"Step 1: Loading reservations - {input_path}")
        try:
            reservations = load_reservations(input_path)
            self.stats["total_loaded"] = len(reservations)
        except ReservationLoadError as e:
            logger.error(f"Failed to load reservations: {e}")
            raise

        if not reservations:
            logger.warning("No reservations found; the report will contain only the title")

        # Step 2: Group for statistics (the template groups again while rendering)
        logger.info("Step 2: Grouping reservations by day")
        try:
            self.stats["day_groups"] = len(ReservationGrouper.group_by_day(reservations))
        except ValidationError as e:
            logger.error(f"Reservation validation failed: {e}")
            raise

        # Step 3: Render through the registered template
        logger.info(f"Step 3: Rendering with template {template_id}")
        try:
            template = self.registry.create(template_id)
        except (TemplateNotFoundError, TemplateInactiveError) as e:
            logger.error(f"Template unavailable: {e}")
            raise

        pdf_bytes = template.generate_report(
            reservations,
            logo_reference,
            font or config.DEFAULT_FONT,
            filter_start_date,
            filter_end_date
        )
        self.stats["non_fatal_errors"] = len(template.exceptions)

        # Step 4: Write output
        logger.info(f"Step 4: Writing report - {output_path}")
        report_path = Path(output_path)
        try:
            report_path.parent.mkdir(parents=True, exist_ok=True)
            report_path.write_bytes(pdf_bytes)
            self.stats["bytes_written"] = len(pdf_bytes)
        except PermissionError as e:
            logger.error(f"Permission denied writing to {output_path}: {e}")
            raise
        except OSError as e:
            logger.error(f"OS error writing PDF: {e}", exc_info=True)
            raise

        try:
            self.stats["pdf_pages"] = inspect_pdf(pdf_bytes).page_count
        except PDFLoadError as e:
            logger.warning(f"Could not read back generated report: {e}")

        self._print_summary()

        logger.info("=" * 80)
        logger.info("Pipeline completed successfully!")
        logger.info(f"Report saved to: {report_path}")
        logger.info("=" * 80)

        return report_path

    def _print_summary(self):
        """Log run summary."""
        logger.info("=" * 80)
        logger.info("REPORT SUMMARY")
        logger.info("=" * 80)
        logger.info(f"Reservations loaded:             {self.stats['total_loaded']}")
        logger.info(f"Day sections:                    {self.stats['day_groups']}")
        logger.info(f"Pages:                           {self.stats['pdf_pages']}")
        logger.info(f"Bytes written:                   {self.stats['bytes_written']}")
        logger.info(f"Non-fatal errors:                {self.stats['non_fatal_errors']}")
        logger.info("=" * 80)


def build_arg_parser() -> argparse.ArgumentParser:
    """Command line interface definition."""
    parser = argparse.ArgumentParser(
        prog="reservation-report",
        description="Render reservation summaries (JSON) into a day-by-day PDF report."
    )
    parser.add_argument("input", help="Path to reservations JSON file")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output PDF path (default: OUTPUT_DIR/reservation_report_<timestamp>.pdf)"
    )
    parser.add_argument("--logo", default=None, help="Logo URL or file path")
    parser.add_argument("--font", default=config.DEFAULT_FONT, help="Font family name")
    parser.add_argument("--start", default=None, help="Title window start (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Title window end (YYYY-MM-DD)")
    parser.add_argument("--template", default=SAMPLE_TEMPLATE_ID, help="Report template identifier")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file="reservation_report.log")

    try:
        filter_start_date = parse_date(args.start)
        filter_end_date = parse_date(args.end)
    except ValueError as e:
        logger.error(f"Invalid date: {e}")
        print(f"\n❌ Input Error: dates must be YYYY-MM-DD ({e})")
        return 1

    output_path = args.output
    if output_path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = str(config.get_output_path(f"reservation_report_{timestamp}.pdf"))

    pipeline = ReservationReportPipeline()

    try:
        report_path = pipeline.process(
            input_path=args.input,
            output_path=output_path,
            logo_reference=args.logo,
            font=args.font,
            filter_start_date=filter_start_date,
            filter_end_date=filter_end_date,
            template_id=args.template
        )

        print(f"\n✅ Success! Report generated: {report_path}")
        print(f"Reservations in report: {pipeline.stats['total_loaded']}")
        print(f"Days: {pipeline.stats['day_groups']}")
        return 0

    except (ValueError, ReservationLoadError, ValidationError) as e:
        logger.error(f"Invalid input: {e}")
        print(f"\n❌ Input Error: {e}")
        return 1

    except (TemplateNotFoundError, TemplateInactiveError) as e:
        logger.error(f"Template error: {e}")
        print(f"\n❌ Template Error: {e}")
        return 1

    except Exception as e:
        logger.error(f"Processing failed: {e}", exc_info=True)
        print(f"\n❌ Error: {e}")
        print("Check reservation_report.log for details.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
