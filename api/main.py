"""
FastAPI Backend for Reservation Report Generator
RESTful API endpoints for rendering reservation reports
"""

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from pathlib import Path
from datetime import date, datetime
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import get_logger, setup_logging
from grouping.day_grouper import ReservationGrouper
from models.reservation import LocationAssignment, ResourceAssignment, ReservationSummary
from output.writer import ReportGenerationError
from report_templates.registry import (
    TemplateInactiveError,
    TemplateNotFoundError,
    create_default_registry,
)
from report_templates.sample_template import SAMPLE_TEMPLATE_ID
from validators.reservation_validator import ValidationError

# Setup logging
setup_logging()
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Reservation Report API",
    description="Render reservation summaries into day-by-day PDF reports",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Template registry, populated once at startup
registry = create_default_registry()

# Create output directory
OUTPUT_DIR = config.OUTPUT_DIR / "api_reports"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


class LocationIn(BaseModel):
    name: str
    approval_state: str = "Unapproved"


class ResourceIn(BaseModel):
    name: str
    quantity: int = Field(1, ge=0)
    approval_state: str = "Unapproved"


class ReservationIn(BaseModel):
    id: Any
    name: str
    reservation_type: str = ""
    approval_state: str = "Unapproved"
    event_start: Optional[datetime] = None
    event_end: Optional[datetime] = None
    reservation_start: Optional[datetime] = None
    reservation_end: Optional[datetime] = None
    event_time_description: str = ""
    reservation_time_description: str = ""
    locations: List[LocationIn] = []
    resources: List[ResourceIn] = []
    note: Optional[str] = None
    setup_photo_id: Optional[Any] = None

    def to_summary(self) -> ReservationSummary:
        return ReservationSummary(
            id=self.id,
            name=self.name,
            reservation_type=self.reservation_type,
            approval_state=self.approval_state,
            event_start=self.event_start,
            event_end=self.event_end,
            reservation_start=self.reservation_start,
            reservation_end=self.reservation_end,
            event_time_description=self.event_time_description,
            reservation_time_description=self.reservation_time_description,
            locations=tuple(
                LocationAssignment(location.name, location.approval_state) for location in self.locations
            ),
            resources=tuple(
                ResourceAssignment(resource.name, resource.quantity, resource.approval_state)
                for resource in self.resources
            ),
            note=self.note,
            setup_photo_id=self.setup_photo_id,
        )


class ReportRequest(BaseModel):
    reservations: List[ReservationIn] = []
    template_id: str = SAMPLE_TEMPLATE_ID
    logo_url: Optional[str] = None
    font: str = config.DEFAULT_FONT
    filter_start_date: Optional[date] = None
    filter_end_date: Optional[date] = None


def _render(request: ReportRequest) -> tuple[bytes, list[ReservationSummary]]:
    """
    Render a report request through the registry.

    Raises:
        HTTPException: 404 unknown template, 400 inactive template,
                       422 malformed reservations, 500 render failure
    """
    try:
        template = registry.create(request.template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TemplateInactiveError as e:
        raise HTTPException(status_code=400, detail=str(e))

    summaries = [reservation.to_summary() for reservation in request.reservations]

    try:
        pdf_bytes = template.generate_report(
            summaries,
            request.logo_url,
            request.font,
            request.filter_start_date,
            request.filter_end_date
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ReportGenerationError as e:
        logger.error(f"Report generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Report generation failed: {str(e)}")

    if template.exceptions:
        logger.info(f"Report rendered with {len(template.exceptions)} non-fatal exception(s)")

    return pdf_bytes, summaries


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": "Reservation Report API",
        "version": config.VERSION,
        "endpoints": {
            "GET /templates": "List active report templates",
            "POST /reports/render": "Render a report and return the PDF",
            "POST /process": "Render a report and store it for download",
            "GET /health": "Health check",
            "GET /reports/{filename}": "Download generated report"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/templates")
async def list_templates():
    """List report templates the host currently offers"""
    templates = [descriptor.to_dict() for descriptor in registry.active_templates()]
    return {
        "total_templates": len(templates),
        "templates": templates
    }


@app.post("/reports/render")
def render_report(request: ReportRequest):
    """
    Render reservations and return the PDF document directly.

    - **reservations**: Reservation summaries to include
    - **template_id**: Registered template identifier
    - **logo_url**: Optional logo URL or path (failures are ignored)
    - **filter_start_date** / **filter_end_date**: Date window shown in the title
    """
    logger.info(f"Rendering report for {len(request.reservations)} reservation(s)")
    pdf_bytes, _ = _render(request)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="reservation_report.pdf"'}
    )


@app.post("/process")
def process_reservations(request: ReportRequest):
    """
    Render reservations and store the report for later download.

    Returns a JSON response with report details and download link.
    """
    logger.info(f"Processing {len(request.reservations)} reservation(s)")
    pdf_bytes, summaries = _render(request)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    report_filename = f"reservation_report_{timestamp}.pdf"
    report_path = OUTPUT_DIR / report_filename

    try:
        OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        report_path.write_bytes(pdf_bytes)
    except OSError as e:
        logger.error(f"Error writing report {report_path}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error writing report: {str(e)}")

    logger.info(f"Report generated: {report_filename}")

    day_groups = ReservationGrouper.group_by_day(summaries)

    return {
        "status": "success",
        "message": "Report generated successfully",
        "report": {
            "filename": report_filename,
            "download_url": f"/reports/{report_filename}",
            "size_bytes": len(pdf_bytes),
            "generated_at": datetime.now().isoformat()
        },
        "summary": {
            "total_reservations": len(summaries),
            "total_days": len(day_groups),
            "days": [
                {"date": group.date.isoformat(), "reservations": len(group)}
                for group in day_groups
            ]
        }
    }


@app.get("/reports/{filename}")
async def download_report(filename: str):
    """
    Download a generated PDF report.

    - **filename**: Name of the report file to download
    """
    report_path = OUTPUT_DIR / Path(filename).name

    if not report_path.exists():
        raise HTTPException(status_code=404, detail="Report not found")

    return FileResponse(
        path=str(report_path),
        media_type="application/pdf",
        filename=report_path.name
    )


@app.get("/reports")
async def list_reports():
    """List all available reports"""
    reports = []

    for report_file in OUTPUT_DIR.glob("*.pdf"):
        reports.append({
            "filename": report_file.name,
            "created_at": datetime.fromtimestamp(report_file.stat().st_ctime).isoformat(),
            "size_bytes": report_file.stat().st_size,
            "download_url": f"/reports/{report_file.name}"
        })

    # Sort by creation time (newest first)
    reports.sort(key=lambda x: x['created_at'], reverse=True)

    return {
        "total_reports": len(reports),
        "reports": reports
    }


@app.delete("/reports/{filename}")
async def delete_report(filename: str):
    """
    Delete a report file.

    - **filename**: Name of the report file to delete
    """
    report_path = OUTPUT_DIR / Path(filename).name

    if not report_path.exists():
        raise HTTPException(status_code=404, detail="Report not found")

    try:
        report_path.unlink()
        return {
            "status": "success",
            "message": f"Report {filename} deleted successfully"
        }
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Error deleting report: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
