"""
PDF Loader Module
Reads rendered reports back using PyMuPDF (fitz) for previews and run statistics.
"""

import fitz  # PyMuPDF
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class PDFLoadError(Exception):
    """Custom exception for PDF loading errors."""
    pass


@dataclass
class ReportInspection:
    """What a rendered report contains, as seen by a PDF reader."""
    page_count: int
    text: str
    image_count: int


def inspect_pdf(pdf_bytes: bytes) -> ReportInspection:
    """
    Open a PDF held in memory and extract its text and image count.

    Args:
        pdf_bytes: Complete PDF document

    Returns:
        ReportInspection with page count, combined page text and
        the number of embedded images

    Raises:
        PDFLoadError: If the bytes are not a readable PDF
    """
    if not pdf_bytes:
        raise PDFLoadError("PDF content is empty")

    doc = None
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")

        if doc.page_count == 0:
            raise PDFLoadError("PDF has no pages")

        text_chunks = []
        image_count = 0

        for page_num in range(doc.page_count):
            page = doc[page_num]
            text_chunks.append(page.get_text())
            image_count += len(page.get_images(full=True))

        combined_text = "\n".join(text_chunks)
        logger.debug(
            f"Inspected PDF: {doc.page_count} pages, {len(combined_text)} characters, "
            f"{image_count} images"
        )

        return ReportInspection(
            page_count=doc.page_count,
            text=combined_text,
            image_count=image_count
        )

    except fitz.FileDataError as e:
        logger.error("Invalid or corrupted PDF content", exc_info=True)
        raise PDFLoadError("Invalid or corrupted PDF content") from e

    except PDFLoadError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error reading PDF: {e}", exc_info=True)
        raise PDFLoadError(f"Failed to read PDF: {str(e)}") from e

    finally:
        if doc is not None:
            doc.close()
