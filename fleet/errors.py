"""
Exception hierarchy for fleet operations.

Every error carries a human-readable ``message`` so callers can report it
and return to the menu instead of crashing.
"""


class FleetError(Exception):
    """Base class for all recoverable fleet errors."""

    default_message = "Error: fleet operation failed"

    def __init__(self, message: str = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidInputError(FleetError):
    """Raised for format or range violations in user input."""

    default_message = "Invalid input."


class InvalidFormatError(InvalidInputError):
    """Raised when a field does not match its expected format."""


class DuplicateIdError(InvalidInputError):
    """Raised when a vehicle ID is already present in the fleet."""

    default_message = "Vehicle ID already exists."


class InvalidRentalDateError(InvalidInputError):
    """Raised when a rental date is not in dd/mm/yyyy form."""

    default_message = "Invalid date format. Must be in the format dd/MM/yyyy."


class VehicleNotFoundError(FleetError):
    """Raised when a vehicle ID cannot be found in the fleet."""

    default_message = "Error: vehicle not found."


class ConfigError(FleetError):
    """Raised when the configuration file is unreadable or fails the schema."""

    default_message = "Error: invalid configuration."
