"""FleetManager class - owns the live fleet, rental history and revenue."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from . import storage
from .calculations import (
    ALLOWED_RENTAL_DAYS,
    LATE_FEE_PER_DAY,
    calc_days,
    calc_late_fee,
    calc_total_cost,
)
from .config import Config
from .errors import InvalidRentalDateError, VehicleNotFoundError
from .formatting import format_cost
from .record import FleetRecord
from .rental import Rental
from .status import SortKey, VehicleStatus
from .validator import validate_unique_vehicle_id
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

OLD_VEHICLE_AGE = 10


@dataclass
class FleetStatistics:
    """Snapshot of fleet counts and pricing."""

    available: int
    rented: int
    maintenance: int
    total_ever_rented: int
    average_price: float
    most_expensive: Optional[Vehicle] = None


@dataclass
class LateFee:
    """Late fee owed on a completed rental."""

    rental: Rental
    days: int
    fee: float


class FleetManager:
    """
    Vehicle fleet with rental lifecycle and flat-file persistence.

    The live list holds one FleetRecord per vehicle ID. Renting swaps the
    plain record for an ACTIVE_RENTAL record and appends an active Rental to
    history; returning completes that Rental and swaps the plain record back.
    Every mutation rewrites both files.
    """

    def __init__(
        self,
        vehicle_file: Union[str, Path],
        rental_file: Union[str, Path],
        late_fee_per_day: float = LATE_FEE_PER_DAY,
        allowed_days: int = ALLOWED_RENTAL_DAYS,
        bill_late_fees: bool = False,
        load: bool = True,
    ):
        self.vehicle_file = Path(vehicle_file)
        self.rental_file = Path(rental_file)
        self.late_fee_per_day = late_fee_per_day
        self.allowed_days = allowed_days
        self.bill_late_fees = bill_late_fees
        self.records: List[FleetRecord] = []
        self.history: List[Rental] = []
        self.total_revenue = 0.0
        if load:
            self.load()

    @classmethod
    def from_config(cls, config: Config) -> "FleetManager":
        return cls(
            config.vehicle_path,
            config.rental_path,
            late_fee_per_day=config.late_fee_per_day,
            allowed_days=config.allowed_days,
            bill_late_fees=config.bill_late_fees,
        )

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> None:
        """
        Read both files, preloading the default fleet when there are no vehicles.

        A file that cannot be read is logged and treated as empty.
        """
        try:
            vehicles = storage.load_vehicles(self.vehicle_file)
        except (OSError, csv.Error) as e:
            logger.error("Failed to load vehicle data: %s", e)
            vehicles = []
        try:
            self.history = storage.load_rentals(self.rental_file)
        except (OSError, csv.Error) as e:
            logger.error("Failed to load rental data: %s", e)
            self.history = []
        self.records = storage.build_live_records(vehicles, self.history)
        self.total_revenue = sum(r.total_cost for r in self.history)
        if not self.records:
            logger.debug("No vehicle data found. Starting with default vehicles.")
            self.records = [FleetRecord.plain(v) for v in storage.default_vehicles()]
            self.save()

    def save(self) -> bool:
        """
        Rewrite both files. Failures are logged, never raised.

        Returns True when both files were written.
        """
        ok = True
        try:
            storage.save_vehicles(self.vehicle_file, self.records)
        except OSError as e:
            logger.error("Error saving vehicles: %s", e)
            ok = False
        try:
            storage.save_rentals(self.rental_file, self.history)
        except OSError as e:
            logger.error("Error saving rentals: %s", e)
            ok = False
        return ok

    # =========================================================================
    # Lookup
    # =========================================================================

    def find_record(self, vehicle_id: str) -> FleetRecord:
        for record in self.records:
            if record.vehicle_id == vehicle_id:
                return record
        raise VehicleNotFoundError(f"Vehicle with ID {vehicle_id} not found.")

    def find_vehicle(self, vehicle_id: str) -> Vehicle:
        return self.find_record(vehicle_id).vehicle

    def _index_of(self, vehicle_id: str) -> int:
        for i, record in enumerate(self.records):
            if record.vehicle_id == vehicle_id:
                return i
        raise VehicleNotFoundError(f"Vehicle with ID {vehicle_id} not found.")

    def _active_rental_for(self, record: FleetRecord) -> Rental:
        """History entry backing an ACTIVE_RENTAL record, created if missing."""
        for rental in reversed(self.history):
            if (
                rental.is_active
                and rental.vehicle_id == record.vehicle_id
                and rental.user_id == record.renter_id
            ):
                return rental
        rental = Rental.start(record.vehicle, record.renter_id, record.start_date)
        self.history.append(rental)
        return rental

    def _drop_active_rentals(self, vehicle_ids: List[str]) -> None:
        """Forget open rentals of removed vehicles. They would be re-added on load."""
        dropped = [
            r for r in self.history if r.is_active and r.vehicle_id in vehicle_ids
        ]
        if not dropped:
            return
        self.history = [
            r for r in self.history if not (r.is_active and r.vehicle_id in vehicle_ids)
        ]
        for rental in dropped:
            logger.info(
                "Open rental of Vehicle %s by User %s dropped.",
                rental.vehicle_id,
                rental.user_id,
            )

    # =========================================================================
    # Fleet maintenance
    # =========================================================================

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """
        Add a vehicle to the live fleet.

        Raises:
            DuplicateIdError: a record with the same ID already exists.
        """
        validate_unique_vehicle_id(vehicle.id, self.records)
        self.records.append(FleetRecord.plain(vehicle))
        logger.info("Vehicle %s added: %s", vehicle.id, vehicle.model)
        self.save()

    def remove_vehicle(self, vehicle_id: str) -> Vehicle:
        """
        Remove a vehicle from the live fleet.

        An open rental of the vehicle is dropped from history so the removal
        survives a reload. Completed rentals are kept.

        Raises:
            VehicleNotFoundError: no record with this ID.
        """
        try:
            index = self._index_of(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            raise
        record = self.records.pop(index)
        self._drop_active_rentals([vehicle_id])
        logger.info("Vehicle %s removed.", vehicle_id)
        self.save()
        return record.vehicle

    def update_vehicle(self, vehicle_id: str, price: float) -> bool:
        """Set a new rental price. The caller validates ``price``."""
        try:
            vehicle = self.find_vehicle(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            return False
        vehicle.rental_price = price
        logger.info("Vehicle %s price updated to %s", vehicle_id, price)
        self.save()
        return True

    def remove_old(self, current_year: int) -> List[Vehicle]:
        """Drop every vehicle more than 10 years old in ``current_year``."""
        removed = [
            r.vehicle for r in self.records
            if r.vehicle.age_in(current_year) > OLD_VEHICLE_AGE
        ]
        self.records = [
            r for r in self.records
            if r.vehicle.age_in(current_year) <= OLD_VEHICLE_AGE
        ]
        self._drop_active_rentals([v.id for v in removed])
        if removed:
            logger.info(
                "Removed %d old vehicles: %s",
                len(removed),
                ", ".join(v.id for v in removed),
            )
        self.save()
        return removed

    def send_to_maintenance(self, vehicle_id: str) -> Tuple[bool, str]:
        try:
            record = self.find_record(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            return False, e.message
        if record.status == VehicleStatus.MAINTENANCE:
            return False, "Vehicle is already under maintenance."
        record.vehicle.status = VehicleStatus.MAINTENANCE
        logger.info("Vehicle %s sent to maintenance.", vehicle_id)
        self.save()
        return True, "Vehicle sent to maintenance."

    def restore_vehicle(self, vehicle_id: str) -> Tuple[bool, str]:
        """Take a vehicle out of maintenance. Rented vehicles go back to Rented."""
        try:
            record = self.find_record(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            return False, e.message
        if record.status != VehicleStatus.MAINTENANCE:
            return False, "Vehicle is not under maintenance."
        if record.is_rental:
            record.vehicle.status = VehicleStatus.RENTED
        else:
            record.vehicle.status = VehicleStatus.AVAILABLE
        logger.info("Vehicle %s restored.", vehicle_id)
        self.save()
        return True, "Vehicle restored from maintenance."

    # =========================================================================
    # Rentals
    # =========================================================================

    def rent_vehicle(
        self, vehicle_id: str, user_id: str, start_date: str
    ) -> Tuple[bool, str]:
        """Rent an Available vehicle. Leaves state untouched on failure."""
        try:
            index = self._index_of(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            return False, e.message

        record = self.records[index]
        if record.is_rental or not record.vehicle.is_available:
            return False, "Vehicle is not available."

        rental = Rental.start(record.vehicle, user_id, start_date)
        self.records[index] = FleetRecord.active_rental(
            record.vehicle, user_id, start_date
        )
        self.history.append(rental)
        logger.info("Vehicle rented: %s by User: %s", vehicle_id, user_id)
        self.save()
        return True, "Vehicle rented successfully."

    def return_vehicle(
        self, vehicle_id: str, user_id: str, return_date: str
    ) -> Tuple[bool, str]:
        """
        Return a rented vehicle and bill the rental.

        The late fee is reported in the message; it is added to the stored
        total only when ``bill_late_fees`` is set. Leaves state untouched on
        failure.
        """
        try:
            index = self._index_of(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error(e.message)
            return False, e.message

        record = self.records[index]
        if not record.is_rental:
            return False, "Error: Vehicle is not rented."
        if record.renter_id != user_id:
            return False, "Error: Vehicle not rented by this user."

        try:
            days = self.calculate_days(record.start_date, return_date)
        except InvalidRentalDateError as e:
            logger.error(e.message)
            return False, e.message

        total_cost = self.calculate_total_cost(record.vehicle.rental_price, days)
        late_fee = self.calculate_late_fee(days)
        if self.bill_late_fees:
            total_cost += late_fee

        rental = self._active_rental_for(record)
        rental.rental_price = record.vehicle.rental_price
        rental.complete(return_date, total_cost)
        self.total_revenue += total_cost

        restored_status = (
            VehicleStatus.MAINTENANCE
            if record.status == VehicleStatus.MAINTENANCE
            else VehicleStatus.AVAILABLE
        )
        self.records[index] = FleetRecord.plain(record.vehicle.copy(restored_status))

        logger.info(
            "Vehicle returned: %s, User: %s, Cost: %.2f", vehicle_id, user_id, total_cost
        )
        self.save()

        message = f"Vehicle returned successfully. Total cost: {format_cost(total_cost)}"
        if late_fee > 0:
            if self.bill_late_fees:
                message += f" (includes late fee: {format_cost(late_fee)})"
            else:
                message += f" Late fee: {format_cost(late_fee)}"
        return True, message

    def calculate_days(self, start_date: str, end_date: str) -> int:
        return calc_days(start_date, end_date)

    def calculate_total_cost(self, rental_price: float, rental_days: int) -> float:
        return calc_total_cost(rental_days, rental_price)

    def calculate_late_fee(self, rental_days: int) -> float:
        return calc_late_fee(rental_days, self.late_fee_per_day, self.allowed_days)

    # =========================================================================
    # Queries and reports
    # =========================================================================

    def _with_status(self, status: VehicleStatus) -> List[FleetRecord]:
        return [r for r in self.records if r.status == status]

    def available_vehicles(self) -> List[FleetRecord]:
        return self._with_status(VehicleStatus.AVAILABLE)

    def rented_vehicles(self) -> List[FleetRecord]:
        return self._with_status(VehicleStatus.RENTED)

    def maintenance_vehicles(self) -> List[FleetRecord]:
        return self._with_status(VehicleStatus.MAINTENANCE)

    def top_newest(self, count: int = 3) -> List[FleetRecord]:
        """Newest vehicles first. Ties keep fleet order."""
        return sorted(self.records, key=lambda r: r.vehicle.year, reverse=True)[:count]

    def find_by_year(self, start_year: int, end_year: int) -> List[FleetRecord]:
        """Vehicles built between the two years, inclusive."""
        return [
            r for r in self.records if start_year <= r.vehicle.year <= end_year
        ]

    def search_and_sort(
        self, sort_key: SortKey = SortKey.PRICE, descending: bool = False
    ) -> List[FleetRecord]:
        """Available vehicles ordered by ``sort_key``."""
        available = self.available_vehicles()
        if sort_key == SortKey.YEAR:
            return sorted(available, key=lambda r: r.vehicle.year, reverse=descending)
        return sorted(
            available, key=lambda r: r.vehicle.rental_price, reverse=descending
        )

    def user_total_cost(self, user_id: str) -> float:
        return sum(r.total_cost for r in self.history if r.user_id == user_id)

    def statistics(self) -> FleetStatistics:
        prices = [r.vehicle.rental_price for r in self.records]
        most_expensive = None
        for record in self.records:
            if most_expensive is None or record.vehicle.rental_price > most_expensive.rental_price:
                most_expensive = record.vehicle
        return FleetStatistics(
            available=len(self.available_vehicles()),
            rented=len(self.rented_vehicles()),
            maintenance=len(self.maintenance_vehicles()),
            total_ever_rented=len(self.history),
            average_price=sum(prices) / len(prices) if prices else 0.0,
            most_expensive=most_expensive,
        )

    def earnings(self) -> float:
        """Total revenue, recomputed from history if the accumulator was never fed."""
        if self.total_revenue == 0 and self.history:
            self.total_revenue = sum(r.total_cost for r in self.history)
        logger.info("Displayed earnings report: Total Revenue = %.2f", self.total_revenue)
        return self.total_revenue

    def completed_rentals(self) -> List[Rental]:
        return [r for r in self.history if not r.is_active]

    def late_fees(self) -> List[LateFee]:
        """Completed rentals that ran past the allowance."""
        fees = []
        for rental in self.completed_rentals():
            try:
                days = self.calculate_days(rental.start_date, rental.end_date)
            except InvalidRentalDateError as e:
                logger.warning("Skipping late fee for %s: %s", rental.vehicle_id, e.message)
                continue
            fee = self.calculate_late_fee(days)
            if fee > 0:
                fees.append(LateFee(rental, days, fee))
        return fees
