"""
Report Layout Module
Composes the reportlab flowables for a reservation report: title block,
optional logo, per-day sections, reservation rows and note blocks.
"""

import calendar
import io
import logging
from datetime import date
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.fonts import tt2ps
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, ListFlowable, Paragraph, Spacer, Table, TableStyle

from config import config
from loaders.logo_loader import load_logo
from models.reservation import (
    DayGroup,
    LocationAssignment,
    ReservationSummary,
    ResourceAssignment,
)

logger = logging.getLogger(__name__)

FALLBACK_FONT = "Helvetica"

# ZapfDingbats "4" is the check mark glyph
CHECKMARK_MARKUP = '<font name="ZapfDingbats">4</font>'
BULLET = "•"

COLUMN_HEADERS = [
    "Name",
    "Event Time",
    "Reservation Time",
    "Locations",
    "Resources",
    "Has Layout?",
    "Status",
]

DARK_GRAY = colors.HexColor('#404040')
MUTED_GRAY = colors.HexColor('#808080')
ACCENT = colors.magenta


def resolve_font_names(font_family: Optional[str]) -> dict[str, str]:
    """
    Map a font family to concrete normal/bold/italic font names.

    Args:
        font_family: Family name such as "Helvetica", "Times-Roman" or a
                     family registered with registerFontFamily

    Returns:
        Dict with 'normal', 'bold' and 'italic' font names. Unknown
        families fall back to Helvetica.
    """
    family = font_family or FALLBACK_FONT
    try:
        return {
            'normal': tt2ps(family, 0, 0),
            'bold': tt2ps(family, 1, 0),
            'italic': tt2ps(family, 0, 1),
        }
    except ValueError:
        logger.warning(f"Unknown font family '{family}', falling back to {FALLBACK_FONT}")
        return resolve_font_names(FALLBACK_FONT)


def add_months(day: date, months: int) -> date:
    """
    Shift a date by whole calendar months, clamping the day to the month length.

    Args:
        day: Starting date (or datetime)
        months: Number of months to add

    Returns:
        Shifted date, e.g. Jan 31 + 1 month -> Feb 28/29
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def format_month_day(day: date) -> str:
    """Format a date as month name and day, e.g. 'January 1'."""
    return f"{day:%B} {day.day}"


def format_report_title(
    filter_start_date: Optional[date] = None,
    filter_end_date: Optional[date] = None,
    today: Optional[date] = None
) -> str:
    """
    Build the report title for the effective date window.

    Args:
        filter_start_date: Window start (default: today)
        filter_end_date: Window end (default: one month after today)
        today: Reference date (default: date.today())

    Returns:
        Title such as "Reservations for: January 1 - January 31"
    """
    today = today or date.today()
    start = filter_start_date or today
    end = filter_end_date or add_months(today, 1)
    return f"Reservations for: {format_month_day(start)} - {format_month_day(end)}"


def format_location(location: LocationAssignment) -> str:
    """Paragraph markup for one location bullet, with a check mark when approved."""
    text = escape(location.name)
    if location.is_approved:
        text = f"{text} {CHECKMARK_MARKUP}"
    return text


def format_resource(resource: ResourceAssignment) -> str:
    """Paragraph markup for one resource bullet, e.g. 'Projector(2)'."""
    text = escape(resource.label)
    if resource.is_approved:
        text = f"{text} {CHECKMARK_MARKUP}"
    return text


def format_has_layout(reservation: ReservationSummary) -> str:
    """'Yes' when a setup photo is attached, 'No' otherwise."""
    return "Yes" if reservation.has_setup_photo else "No"


def _markup(text: Optional[str]) -> str:
    """Escape host text for Paragraph markup and keep its line breaks."""
    return escape(text or "").replace("\n", "<br/>")


class ReservationReportLayout:
    """Builds the flowable story of a reservation report."""

    def __init__(
        self,
        font_family: Optional[str] = None,
        page_size: Optional[tuple[float, float]] = None,
        margin: Optional[float] = None
    ):
        """
        Initialize layout.

        Args:
            font_family: Font family for all text (default: DEFAULT_FONT)
            page_size: (width, height) in points (default: configured page size)
            margin: Uniform page margin in points (default: PAGE_MARGIN)
        """
        self.page_size = page_size or config.get_page_size()
        self.margin = config.PAGE_MARGIN if margin is None else margin
        self.fonts = resolve_font_names(font_family or config.DEFAULT_FONT)
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()
        self.exceptions: list[Exception] = []

    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""
        # Title style
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Normal'],
            fontName=self.fonts['bold'],
            fontSize=16,
            leading=20
        ))

        # Day header style
        self.styles.add(ParagraphStyle(
            name='DayHeader',
            parent=self.styles['Normal'],
            fontName=self.fonts['bold'],
            fontSize=12,
            leading=15,
            textColor=DARK_GRAY
        ))

        # Column header style
        self.styles.add(ParagraphStyle(
            name='ColumnHeader',
            parent=self.styles['Normal'],
            fontName=self.fonts['bold'],
            fontSize=10,
            leading=12,
            textColor=DARK_GRAY
        ))

        # Row text style
        self.styles.add(ParagraphStyle(
            name='ListItemNormal',
            parent=self.styles['Normal'],
            fontName=self.fonts['normal'],
            fontSize=8,
            leading=10
        ))

        # Unapproved status style
        self.styles.add(ParagraphStyle(
            name='ListItemUnapproved',
            parent=self.styles['Normal'],
            fontName=self.fonts['italic'],
            fontSize=8,
            leading=10,
            textColor=ACCENT
        ))

        # Note style
        self.styles.add(ParagraphStyle(
            name='Note',
            parent=self.styles['Normal'],
            fontName=self.fonts['normal'],
            fontSize=8,
            leading=10,
            textColor=MUTED_GRAY
        ))

    @property
    def usable_width(self) -> float:
        """Page width minus left and right margins."""
        return self.page_size[0] - 2 * self.margin

    def _column_widths(self) -> list[float]:
        return [self.usable_width / len(COLUMN_HEADERS)] * len(COLUMN_HEADERS)

    def build_story(
        self,
        day_groups: list[DayGroup],
        logo_reference: Optional[str] = None,
        filter_start_date: Optional[date] = None,
        filter_end_date: Optional[date] = None,
        today: Optional[date] = None
    ) -> list:
        """
        Compose the complete report.

        Args:
            day_groups: Ordered day groups
            logo_reference: Optional logo URL or path; failures are skipped
            filter_start_date: Title window start
            filter_end_date: Title window end
            today: Reference date for the default window

        Returns:
            List of reportlab flowables
        """
        story = []
        story.extend(self._create_header(logo_reference, filter_start_date, filter_end_date, today))

        for group in day_groups:
            logger.debug(f"Adding section for {group.date} with {len(group)} reservations")
            story.extend(self._create_day_section(group))

        return story

    def _create_header(
        self,
        logo_reference: Optional[str],
        filter_start_date: Optional[date],
        filter_end_date: Optional[date],
        today: Optional[date]
    ) -> list:
        """Create the logo and title block."""
        elements = []

        logo = self._create_logo(logo_reference)
        if logo is not None:
            elements.append(logo)

        title = format_report_title(filter_start_date, filter_end_date, today)
        elements.append(Paragraph(escape(title), self.styles['ReportTitle']))

        return elements

    def _create_logo(self, logo_reference: Optional[str]) -> Optional[Image]:
        """
        Load the logo and scale it to fit the logo box, right aligned.

        Returns:
            Image flowable, or None when there is no usable logo
        """
        if not logo_reference:
            return None

        try:
            data = load_logo(logo_reference)
            width, height = ImageReader(io.BytesIO(data)).getSize()
            scale = min(config.LOGO_MAX_WIDTH / width, config.LOGO_MAX_HEIGHT / height)

            logo = Image(io.BytesIO(data), width=width * scale, height=height * scale)
            logo.hAlign = 'RIGHT'
            return logo

        except Exception as e:
            # Branding is best effort; the report renders without it
            logger.warning(f"Logo skipped ({logo_reference}): {e}")
            self.exceptions.append(e)
            return None

    def _create_day_section(self, group: DayGroup) -> list:
        """
        Create a section for one day's reservations.

        Args:
            group: DayGroup to render

        Returns:
            List of reportlab elements
        """
        elements = [
            Spacer(1, 12),
            Paragraph(escape(group.heading), self.styles['DayHeader']),
            self._create_column_header_table(),
        ]

        for reservation in group.reservations:
            elements.append(self._create_reservation_table(reservation))
            if reservation.has_note:
                elements.append(self._create_note_table(reservation.note))

        return elements

    def _create_column_header_table(self) -> Table:
        """Create the seven column header row with a bottom border."""
        cells = [Paragraph(label, self.styles['ColumnHeader']) for label in COLUMN_HEADERS]

        table = Table(
            [cells],
            colWidths=self._column_widths(),
            hAlign='LEFT',
            spaceBefore=10,
            spaceAfter=0
        )
        table.setStyle(TableStyle([
            ('LINEBELOW', (0, 0), (-1, -1), 1, DARK_GRAY),
            ('VALIGN', (0, 0), (-1, -1), 'BOTTOM'),
        ]))
        return table

    def status_style(self, reservation: ReservationSummary) -> ParagraphStyle:
        """Italic accent style for unapproved reservations, normal otherwise."""
        if reservation.is_unapproved:
            return self.styles['ListItemUnapproved']
        return self.styles['ListItemNormal']

    def _create_bullet_list(self, items: list[str]):
        """Bulleted list of Paragraph markup items, or '' when there are none."""
        if not items:
            return ''

        return ListFlowable(
            [Paragraph(item, self.styles['ListItemNormal']) for item in items],
            bulletType='bullet',
            start=BULLET,
            leftIndent=8,
            bulletFontName=self.fonts['normal'],
            bulletFontSize=8
        )

    def build_row_cells(self, reservation: ReservationSummary) -> list:
        """
        Create the seven cells of one reservation row.

        Args:
            reservation: Reservation to render

        Returns:
            Cells in column order (Paragraphs and bullet lists)
        """
        normal = self.styles['ListItemNormal']

        return [
            Paragraph(_markup(reservation.name), normal),
            Paragraph(_markup(reservation.event_time_description), normal),
            Paragraph(_markup(reservation.reservation_time_description), normal),
            self._create_bullet_list([format_location(location) for location in reservation.locations]),
            self._create_bullet_list([format_resource(resource) for resource in reservation.resources]),
            Paragraph(format_has_layout(reservation), normal),
            Paragraph(_markup(reservation.approval_state), self.status_style(reservation)),
        ]

    def _create_reservation_table(self, reservation: ReservationSummary) -> Table:
        """Create the borderless full-width row for one reservation."""
        table = Table(
            [self.build_row_cells(reservation)],
            colWidths=self._column_widths(),
            hAlign='LEFT',
            spaceBefore=0,
            spaceAfter=1
        )
        table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('TOPPADDING', (3, 0), (4, 0), 1),
        ]))
        return table

    def _create_note_table(self, note: str) -> Table:
        """Create the centred, inset note block under a reservation row."""
        return Table(
            [[Paragraph(_markup(note), self.styles['Note'])]],
            colWidths=[self.usable_width - config.NOTE_INSET],
            hAlign='CENTER',
            spaceBefore=0,
            spaceAfter=1
        )
