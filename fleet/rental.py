"""Rental class for rental history records."""

from dataclasses import dataclass
from typing import Optional

from .status import RentalStatus
from .vehicle import Vehicle


@dataclass
class Rental:
    """
    A rental of one vehicle by one user.

    Holds a snapshot of the vehicle (id, model, year, price) taken when the
    rental started. ``end_date`` stays None and ``total_cost`` stays 0 while
    the rental is active.
    """

    vehicle_id: str
    model: str
    year: int
    rental_price: float
    user_id: str
    start_date: str
    end_date: Optional[str] = None
    total_cost: float = 0.0

    @classmethod
    def start(cls, vehicle: Vehicle, user_id: str, start_date: str) -> "Rental":
        """Open a new active rental for ``vehicle``."""
        return cls(
            vehicle.id,
            vehicle.model,
            vehicle.year,
            vehicle.rental_price,
            user_id,
            start_date,
        )

    @property
    def is_active(self) -> bool:
        return self.end_date is None

    @property
    def status(self) -> RentalStatus:
        return RentalStatus.ACTIVE if self.is_active else RentalStatus.COMPLETED

    def complete(self, end_date: str, total_cost: float) -> None:
        """Close the rental. It becomes immutable history after this."""
        self.end_date = end_date
        self.total_cost = total_cost
