"""
Reservation Report Generator - Streamlit Frontend
Upload reservation summaries and download a day-by-day PDF report
"""

import streamlit as st
import json
import sys
from pathlib import Path
from datetime import date, datetime

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from grouping.day_grouper import ReservationGrouper
from logging_config import get_logger, setup_logging
from loaders.pdf_loader import PDFLoadError, inspect_pdf
from loaders.reservation_loader import ReservationLoadError, parse_reservations
from output.layout import add_months
from output.writer import ReportGenerationError
from report_templates.registry import create_default_registry
from validators.reservation_validator import ValidationError

# Setup logging
setup_logging()
logger = get_logger(__name__)

STANDARD_FONTS = ["Helvetica", "Times-Roman", "Courier"]

# Page configuration
st.set_page_config(
    page_title="Reservation Reports",
    page_icon="📅",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #404040;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #808080;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state
if 'pdf_bytes' not in st.session_state:
    st.session_state.pdf_bytes = None
if 'day_groups' not in st.session_state:
    st.session_state.day_groups = None


@st.cache_resource
def get_registry():
    """Template registry shared by all sessions (read-only after startup)."""
    return create_default_registry()


def main():
    """Main application function."""

    # Header
    st.markdown('<div class="main-header">📅 Reservation Report Generator</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Turn reservation summaries into a printable day-by-day report</div>', unsafe_allow_html=True)

    registry = get_registry()
    templates = registry.active_templates()

    # Sidebar - Input Configuration
    with st.sidebar:
        st.header("📋 Configuration")

        st.subheader("1. Upload Reservations")
        uploaded_file = st.file_uploader(
            "Reservations JSON",
            type=['json'],
            help="A list of reservation summaries, or an object with a 'reservations' list"
        )

        st.divider()

        st.subheader("2. Report Options")
        template = st.selectbox(
            "Report template",
            options=templates,
            format_func=lambda descriptor: descriptor.name,
            disabled=not templates
        )
        font = st.selectbox(
            "Font",
            options=STANDARD_FONTS,
            index=STANDARD_FONTS.index(config.DEFAULT_FONT) if config.DEFAULT_FONT in STANDARD_FONTS else 0
        )
        logo_url = st.text_input("Logo URL or path", value="", help="Optional; skipped if it cannot be loaded")

        st.divider()

        st.subheader("3. Date Range")
        today = date.today()
        col1, col2 = st.columns(2)

        with col1:
            start_date = st.date_input("Start", value=today)

        with col2:
            end_date = st.date_input("End", value=add_months(today, 1))

        st.divider()

        generate_btn = st.button(
            "🚀 Generate Report",
            type="primary",
            use_container_width=True,
            disabled=not uploaded_file or template is None
        )

    if not templates:
        st.warning("No report templates are active.")
        return

    if not uploaded_file:
        st.info("👈 Upload a reservations JSON file from the sidebar to get started")
        return

    if generate_btn:
        generate_report(uploaded_file, template, font, logo_url, start_date, end_date)

    if st.session_state.pdf_bytes:
        display_results()


def generate_report(uploaded_file, template_descriptor, font, logo_url, start_date, end_date):
    """Render the uploaded reservations and keep the result in session state."""

    if start_date > end_date:
        st.error("❌ Start date must be on or before the end date")
        return

    try:
        with st.spinner("Rendering report..."):
            payload = json.loads(uploaded_file.getvalue().decode("utf-8"))
            reservations = parse_reservations(payload)

            template = template_descriptor.factory()
            pdf_bytes = template.generate_report(
                reservations,
                logo_url or None,
                font,
                start_date,
                end_date
            )

            st.session_state.pdf_bytes = pdf_bytes
            st.session_state.day_groups = ReservationGrouper.group_by_day(reservations)

            for exception in template.exceptions:
                st.warning(f"⚠️ {exception}")

        st.success(f"✅ Report generated for {len(reservations)} reservation(s)")

    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        st.error(f"❌ The uploaded file is not valid JSON: {e}")
    except (ReservationLoadError, ValidationError) as e:
        st.error(f"❌ Invalid reservations: {e}")
    except ReportGenerationError as e:
        logger.error(f"Report generation failed: {e}", exc_info=True)
        st.error(f"❌ Report generation failed: {e}")


def display_results():
    """Show the grouped days and offer the PDF for download."""
    pdf_bytes = st.session_state.pdf_bytes
    day_groups = st.session_state.day_groups or []

    col1, col2, col3 = st.columns(3)
    col1.metric("Days", len(day_groups))
    col2.metric("Reservations", sum(len(group) for group in day_groups))

    try:
        col3.metric("Pages", inspect_pdf(pdf_bytes).page_count)
    except PDFLoadError as e:
        logger.warning(f"Could not inspect generated PDF: {e}")

    for group in day_groups:
        with st.expander(f"{group.heading} ({len(group)})"):
            st.table([
                {
                    "Name": reservation.name,
                    "Event Time": reservation.event_time_description,
                    "Status": reservation.approval_state,
                }
                for reservation in group.reservations
            ])

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    st.download_button(
        "📥 Download PDF Report",
        data=pdf_bytes,
        file_name=f"reservation_report_{timestamp}.pdf",
        mime="application/pdf",
        use_container_width=True
    )


if __name__ == "__main__":
    main()
