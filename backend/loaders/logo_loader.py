"""
Logo Loader Module
Resolves a logo reference (http(s) URL or file path) to raw image bytes.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from config import config

logger = logging.getLogger(__name__)


class LogoLoadError(Exception):
    """Custom exception for logo loading errors."""
    pass


def load_logo(reference: Optional[str], timeout: Optional[float] = None) -> bytes:
    """
    Fetch the raw bytes of a logo image.

    Args:
        reference: URL (http/https) or filesystem path of the image
        timeout: Request timeout in seconds (default: LOGO_TIMEOUT_SECONDS)

    Returns:
        Image bytes

    Raises:
        LogoLoadError: If the reference is empty or cannot be read
    """
    if not reference or not reference.strip():
        raise LogoLoadError("No logo reference given")

    reference = reference.strip()

    if timeout is None:
        timeout = config.LOGO_TIMEOUT_SECONDS

    if reference.lower().startswith(("http://", "https://")):
        try:
            response = requests.get(reference, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LogoLoadError(f"Cannot fetch logo {reference}: {e}") from e

        if not response.content:
            raise LogoLoadError(f"Logo response was empty: {reference}")

        logger.debug(f"Fetched logo {reference} ({len(response.content)} bytes)")
        return response.content

    logo_path = Path(reference)
    if not logo_path.is_file():
        raise LogoLoadError(f"Logo file not found: {reference}")

    try:
        data = logo_path.read_bytes()
    except OSError as e:
        raise LogoLoadError(f"Cannot read logo {reference}: {e}") from e

    if not data:
        raise LogoLoadError(f"Logo file is empty: {reference}")

    logger.debug(f"Read logo {reference} ({len(data)} bytes)")
    return data
