"""FleetRecord dataclass for entries of the live fleet list."""

from dataclasses import dataclass
from typing import Optional

from .status import RecordKind, VehicleStatus
from .vehicle import Vehicle


@dataclass
class FleetRecord:
    """
    One live fleet entry: either a plain vehicle or a vehicle on an active rental.

    Callers branch on ``kind``. ``renter_id`` and ``start_date`` are set only
    for ACTIVE_RENTAL records.
    """

    kind: RecordKind
    vehicle: Vehicle
    renter_id: Optional[str] = None
    start_date: Optional[str] = None

    @classmethod
    def plain(cls, vehicle: Vehicle) -> "FleetRecord":
        return cls(RecordKind.PLAIN, vehicle)

    @classmethod
    def active_rental(
        cls,
        vehicle: Vehicle,
        renter_id: str,
        start_date: str,
        status: VehicleStatus = VehicleStatus.RENTED,
    ) -> "FleetRecord":
        """Wrap a copy of ``vehicle`` as rented. A rented vehicle may also be in maintenance."""
        rented = vehicle.copy(status=status)
        return cls(RecordKind.ACTIVE_RENTAL, rented, renter_id, start_date)

    @property
    def is_rental(self) -> bool:
        return self.kind == RecordKind.ACTIVE_RENTAL

    @property
    def vehicle_id(self) -> str:
        return self.vehicle.id

    @property
    def status(self) -> VehicleStatus:
        return self.vehicle.status
