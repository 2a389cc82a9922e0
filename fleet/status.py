"""Status enums for vehicles, rentals, live records and sorting."""

from enum import Enum


class VehicleStatus(Enum):
    """Vehicle availability. Values are the strings written to vehicles.txt."""

    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"

    @classmethod
    def parse(cls, text: str) -> "VehicleStatus":
        """Case-insensitive lookup by stored value."""
        for status in cls:
            if status.value.lower() == text.strip().lower():
                return status
        raise ValueError(f"Unknown vehicle status: {text!r}")


class RentalStatus(Enum):
    """Rental lifecycle as stored in rentals.txt."""

    ACTIVE = "Active"
    COMPLETED = "Completed"


class RecordKind(Enum):
    """Shape of a live fleet record."""

    PLAIN = "plain"
    ACTIVE_RENTAL = "active_rental"


class SortKey(Enum):
    """Comparison key for search-and-sort."""

    PRICE = "price"
    YEAR = "year"
