"""
Loaders Module - Reservation input, logo resolution and PDF read-back.
"""

from .reservation_loader import (
    load_reservations,
    parse_reservations,
    ReservationLoadError
)

from .logo_loader import (
    load_logo,
    LogoLoadError
)

from .pdf_loader import (
    inspect_pdf,
    ReportInspection,
    PDFLoadError
)

__all__ = [
    'load_reservations',
    'parse_reservations',
    'ReservationLoadError',
    'load_logo',
    'LogoLoadError',
    'inspect_pdf',
    'ReportInspection',
    'PDFLoadError',
]
