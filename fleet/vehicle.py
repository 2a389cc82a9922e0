"""Vehicle class for fleet identification and pricing."""

from dataclasses import dataclass

from .status import VehicleStatus


@dataclass
class Vehicle:
    """A rentable vehicle. Price and status change over its life; the rest is fixed."""

    id: str
    model: str
    year: int
    rental_price: float
    status: VehicleStatus = VehicleStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE

    def age_in(self, current_year: int) -> int:
        """Whole years between manufacture and ``current_year``."""
        return current_year - self.year

    def copy(self, status: VehicleStatus = None) -> "Vehicle":
        """Return a fresh record with the same identity, optionally with a new status."""
        return Vehicle(
            self.id,
            self.model,
            self.year,
            self.rental_price,
            status if status is not None else self.status,
        )

    def __str__(self) -> str:
        return (
            f"ID: {self.id}, Model: {self.model}, Year: {self.year}, "
            f"Price: {self.rental_price}, Status: {self.status.value}"
        )
