"""
Reservation Loader Module
Reads reservation summaries from JSON files or already-decoded payloads.
"""

import json
import logging
from pathlib import Path
from typing import Any
from models.reservation import ReservationSummary

logger = logging.getLogger(__name__)


class ReservationLoadError(Exception):
    """Custom exception for reservation loading errors."""
    pass


def parse_reservations(payload: Any) -> list[ReservationSummary]:
    """
    Convert a decoded JSON payload into reservation summaries.

    Args:
        payload: Either a list of reservation dicts or an object
                 with a "reservations" list

    Returns:
        List of ReservationSummary in payload order

    Raises:
        ReservationLoadError: If the payload shape or a record is invalid
    """
    if isinstance(payload, dict):
        payload = payload.get("reservations")

    if not isinstance(payload, list):
        raise ReservationLoadError("Expected a list of reservations or an object with a 'reservations' list")

    reservations = []
    for index, record in enumerate(payload):
        if not isinstance(record, dict):
            raise ReservationLoadError(f"Reservation #{index} is not an object")
        try:
            reservations.append(ReservationSummary.from_dict(record))
        except KeyError as e:
            raise ReservationLoadError(f"Reservation #{index} is missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise ReservationLoadError(f"Reservation #{index} is malformed: {e}") from e

    logger.info(f"Parsed {len(reservations)} reservations")
    return reservations


def load_reservations(file_path: str) -> list[ReservationSummary]:
    """
    Load reservation summaries from a JSON file.

    Args:
        file_path: Path to the JSON file

    Returns:
        List of ReservationSummary

    Raises:
        ReservationLoadError: If the file cannot be read or parsed
    """
    json_path = Path(file_path)
    if not json_path.exists():
        logger.error(f"Reservation file not found: {file_path}")
        raise ReservationLoadError(f"Reservation file not found: {file_path}")

    logger.info(f"Loading reservations: {file_path}")

    try:
        with open(json_path, encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {file_path}: {e}")
        raise ReservationLoadError(f"Invalid JSON in {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Cannot read {file_path}: {e}")
        raise ReservationLoadError(f"Cannot read {file_path}: {e}") from e

    return parse_reservations(payload)
