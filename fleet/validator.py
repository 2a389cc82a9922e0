"""
Format checks for user-entered vehicle and rental fields.

All checks are stateless and raise an InvalidInputError subclass with a
message ready to show the user.
"""

import math
import re
from typing import Iterable

from .errors import DuplicateIdError, InvalidFormatError, InvalidRentalDateError
from .record import FleetRecord

VEHICLE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{3,6}$")
MODEL_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9 ]+$")
PRICE_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")
DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")
STATUS_PATTERN = re.compile(r"^(available|rented)$", re.IGNORECASE)


def validate_vehicle_id(vehicle_id: str) -> None:
    if not VEHICLE_ID_PATTERN.match(vehicle_id or ""):
        raise InvalidFormatError(
            "Invalid Vehicle ID. It must be 3-6 alphanumeric characters."
        )


def validate_model_name(model: str) -> None:
    if not MODEL_NAME_PATTERN.match(model or ""):
        raise InvalidFormatError(
            "Invalid model name. Only letters, numbers, and spaces are allowed."
        )


def validate_price(price: str) -> None:
    """Positive number with at most two decimal places."""
    if not PRICE_PATTERN.match(price or "") or float(price) <= 0:
        raise InvalidFormatError(
            "Invalid price. Must be a positive number with up to 2 decimal places."
        )


def validate_date(date: str) -> None:
    """Literal dd/mm/yyyy shape only; 31/02/2024 passes."""
    if not DATE_PATTERN.match(date or ""):
        raise InvalidRentalDateError(
            "Invalid date format. Must be in the format dd/MM/yyyy."
        )


def validate_status(status: str) -> None:
    if not STATUS_PATTERN.match(status or ""):
        raise InvalidFormatError("Invalid status. Must be 'available' or 'rented'.")


def validate_unique_vehicle_id(vehicle_id: str, records: Iterable[FleetRecord]) -> None:
    for record in records:
        if record.vehicle_id == vehicle_id:
            raise DuplicateIdError(
                f"Vehicle with ID {vehicle_id} already exists."
            )


def parse_positive_int(text: str, error_message: str = "") -> int:
    """Parse menu input as a positive integer."""
    try:
        value = int(text.strip())
    except (AttributeError, ValueError):
        raise InvalidFormatError(f"Invalid input. {error_message}".strip()) from None
    if value <= 0:
        raise InvalidFormatError(f"Invalid input. {error_message}".strip())
    return value


def parse_positive_float(text: str, error_message: str = "") -> float:
    """Parse menu input as a positive number."""
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        raise InvalidFormatError(f"Invalid input. {error_message}".strip()) from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidFormatError(f"Invalid input. {error_message}".strip())
    return value
