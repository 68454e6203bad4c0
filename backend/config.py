"""
Configuration settings for the Reservation Report Generator.
Centralized configuration management for the application.
"""

import os
from pathlib import Path

from reportlab.lib.pagesizes import A4, letter


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Reservation Report Generator"
    VERSION = "1.0.0"

    # Page Settings (points)
    PAGE_SIZE_NAME: str = os.getenv("PAGE_SIZE", "A4").upper()
    PAGE_MARGIN: float = float(os.getenv("PAGE_MARGIN", "25"))
    NOTE_INSET: float = float(os.getenv("NOTE_INSET", "50"))

    # Logo Settings
    LOGO_MAX_WIDTH: float = float(os.getenv("LOGO_MAX_WIDTH", "100"))
    LOGO_MAX_HEIGHT: float = float(os.getenv("LOGO_MAX_HEIGHT", "55"))
    LOGO_TIMEOUT_SECONDS: float = float(os.getenv("LOGO_TIMEOUT_SECONDS", "10"))

    # Font Settings
    DEFAULT_FONT: str = os.getenv("DEFAULT_FONT", "Helvetica")

    # Template Settings
    SAMPLE_TEMPLATE_ACTIVE: bool = os.getenv("SAMPLE_TEMPLATE_ACTIVE", "true").lower() == "true"

    # Output Settings
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", "./output"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Frontend Settings
    FRONTEND_HOST: str = os.getenv("FRONTEND_HOST", "0.0.0.0")
    FRONTEND_PORT: int = int(os.getenv("FRONTEND_PORT", "8501"))

    PAGE_SIZES = {
        "A4": A4,
        "LETTER": letter,
    }

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_output_path(cls, filename: str) -> Path:
        """Get full path for output file."""
        cls.ensure_directories()
        return cls.OUTPUT_DIR / filename

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def get_page_size(cls) -> tuple[float, float]:
        """
        Resolve the configured page size.

        Returns:
            (width, height) in points. Unknown names fall back to A4.
        """
        return cls.PAGE_SIZES.get(cls.PAGE_SIZE_NAME, A4)

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "page_size": cls.PAGE_SIZE_NAME,
            "page_margin": cls.PAGE_MARGIN,
            "note_inset": cls.NOTE_INSET,
            "logo_max_width": cls.LOGO_MAX_WIDTH,
            "logo_max_height": cls.LOGO_MAX_HEIGHT,
            "default_font": cls.DEFAULT_FONT,
            "output_dir": str(cls.OUTPUT_DIR),
            "log_dir": str(cls.LOG_DIR),
            "log_level": cls.LOG_LEVEL,
        }


# Create a singleton instance
config = Config()
