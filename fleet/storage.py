"""
Flat-file persistence for the fleet.

vehicles.txt holds one ``id,model,year,price,status`` line per live record.
rentals.txt holds one line per rental, active or completed:
``userId,vehicleId,model,year,price,startDate,endDate,totalCost,status``
with ``Not returned`` as the end date of an active rental.
"""

import csv
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .record import FleetRecord
from .rental import Rental
from .status import RentalStatus, VehicleStatus
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

NOT_RETURNED = "Not returned"
VEHICLE_FIELDS = 5
RENTAL_FIELDS = 9


def default_vehicles() -> List[Vehicle]:
    """The fleet a fresh install starts with."""
    return [
        Vehicle("V01", "Audi A1", 2013, 120.0),
        Vehicle("V02", "Mercedes GLC", 2015, 150.0),
        Vehicle("V03", "BMW X5", 2018, 200.0),
        Vehicle("V04", "Toyota Corolla", 2020, 90.0),
        Vehicle("V05", "Ford Focus", 2016, 80.0),
        Vehicle("V06", "Honda Civic", 2017, 85.0),
        Vehicle("V07", "Nissan J32", 2019, 110.0),
        Vehicle("V08", "Volkswagen Golf", 2014, 95.0),
        Vehicle("V09", "Hyundai Elantra", 2012, 70.0),
        Vehicle("V10", "Chevrolet Malibu", 2011, 65.0),
    ]


# =============================================================================
# Row conversion
# =============================================================================


def vehicle_to_row(vehicle: Vehicle) -> List[str]:
    return [
        vehicle.id,
        vehicle.model,
        str(vehicle.year),
        str(float(vehicle.rental_price)),
        vehicle.status.value,
    ]


def parse_vehicle_row(row: Sequence[str]) -> Vehicle:
    """Build a Vehicle from a vehicles.txt row. Raises ValueError if malformed."""
    if len(row) < VEHICLE_FIELDS:
        raise ValueError(f"expected {VEHICLE_FIELDS} fields, got {len(row)}")
    return Vehicle(
        row[0],
        row[1],
        int(row[2]),
        float(row[3]),
        VehicleStatus.parse(row[4]),
    )


def rental_to_row(rental: Rental) -> List[str]:
    return [
        rental.user_id,
        rental.vehicle_id,
        rental.model,
        str(rental.year),
        str(float(rental.rental_price)),
        rental.start_date,
        rental.end_date if rental.end_date is not None else NOT_RETURNED,
        str(float(rental.total_cost)),
        rental.status.value,
    ]


def parse_rental_row(row: Sequence[str]) -> Rental:
    """Build a Rental from a rentals.txt row. Raises ValueError if malformed."""
    if len(row) < RENTAL_FIELDS:
        raise ValueError(f"expected {RENTAL_FIELDS} fields, got {len(row)}")
    end_date: Optional[str] = row[6]
    if end_date == NOT_RETURNED:
        end_date = None
    status = RentalStatus(row[8])
    if (status == RentalStatus.ACTIVE) != (end_date is None):
        raise ValueError(f"status {status.value} does not match end date {row[6]!r}")
    return Rental(
        vehicle_id=row[1],
        model=row[2],
        year=int(row[3]),
        rental_price=float(row[4]),
        user_id=row[0],
        start_date=row[5],
        end_date=end_date,
        total_cost=float(row[7]),
    )


# =============================================================================
# Loading
# =============================================================================


def _read_rows(filename: Union[str, Path]) -> List[List[str]]:
    # Undecodable bytes become U+FFFD so one bad line cannot fail the whole file.
    with open(filename, newline="", encoding="utf-8", errors="replace") as fp:
        return [row for row in csv.reader(fp) if row]


def load_vehicles(filename: Union[str, Path]) -> List[Vehicle]:
    """
    Load vehicles.txt. A missing file yields an empty list.

    Malformed lines are skipped with a warning.
    """
    if not Path(filename).exists():
        logger.debug("No vehicle data found at %s.", filename)
        return []

    vehicles = []
    for row in _read_rows(filename):
        try:
            vehicles.append(parse_vehicle_row(row))
        except ValueError as e:
            logger.warning("Skipping invalid line in vehicle file: %s (%s)", ",".join(row), e)
    logger.info("Vehicle data loaded from file.")
    return vehicles


def load_rentals(filename: Union[str, Path]) -> List[Rental]:
    """
    Load rentals.txt. A missing file yields an empty list.

    Malformed lines are skipped with a warning.
    """
    if not Path(filename).exists():
        logger.debug("No rental data found at %s.", filename)
        return []

    rentals = []
    for row in _read_rows(filename):
        try:
            rentals.append(parse_rental_row(row))
        except ValueError as e:
            logger.warning("Skipping invalid line in rental file: %s (%s)", ",".join(row), e)
    logger.info("Rental data loaded from file.")
    return rentals


def build_live_records(
    vehicles: Sequence[Vehicle], history: Sequence[Rental]
) -> List[FleetRecord]:
    """
    Rebuild the live fleet list from both files.

    Each active rental replaces the plain record with the same vehicle ID,
    or is appended when the vehicle file has no such record.
    """
    records = [FleetRecord.plain(v) for v in vehicles]
    for rental in history:
        if not rental.is_active:
            continue
        snapshot = Vehicle(
            rental.vehicle_id, rental.model, rental.year, rental.rental_price
        )
        index = next(
            (i for i, r in enumerate(records) if r.vehicle_id == rental.vehicle_id),
            None,
        )
        if index is None:
            records.append(
                FleetRecord.active_rental(snapshot, rental.user_id, rental.start_date)
            )
            continue
        existing = records[index].vehicle
        snapshot.rental_price = existing.rental_price
        status = (
            VehicleStatus.MAINTENANCE
            if existing.status == VehicleStatus.MAINTENANCE
            else VehicleStatus.RENTED
        )
        records[index] = FleetRecord.active_rental(
            snapshot, rental.user_id, rental.start_date, status
        )
    return records


# =============================================================================
# Saving
# =============================================================================


def _write_rows(filename: Union[str, Path], rows: List[List[str]]) -> None:
    with open(filename, "w", newline="", encoding="utf-8") as fp:
        writer = csv.writer(fp, lineterminator="\n")
        writer.writerows(rows)


def save_vehicles(filename: Union[str, Path], records: Sequence[FleetRecord]) -> None:
    """Overwrite vehicles.txt with the live list. Raises OSError on failure."""
    _write_rows(filename, [vehicle_to_row(r.vehicle) for r in records])
    logger.info("Vehicle data saved to file.")


def save_rentals(filename: Union[str, Path], history: Sequence[Rental]) -> None:
    """Overwrite rentals.txt with the full history. Raises OSError on failure."""
    _write_rows(filename, [rental_to_row(r) for r in history])
    logger.info("Rental data saved to file.")
