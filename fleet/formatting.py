"""Display helpers shared by the role facades and the menu loop."""

from typing import List, Optional, Sequence

from tabulate import tabulate

from .record import FleetRecord
from .rental import Rental

CURRENCY = "₪"

VEHICLE_HEADERS = ["ID", "Model", "Year", "Price", "Status", "Renter", "Since"]
RENTAL_HEADERS = ["Vehicle", "User", "Model", "Start", "End", "Total", "Status"]


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"{CURRENCY}{cost:,.2f}" if cost is not None else "-"


def make_vehicle_table(records: Sequence[FleetRecord]) -> List[List[str]]:
    """Convert live fleet records to table rows."""
    rows = []
    for record in records:
        vehicle = record.vehicle
        rows.append(
            [
                vehicle.id,
                vehicle.model,
                str(vehicle.year),
                format_cost(vehicle.rental_price),
                vehicle.status.value,
                record.renter_id or "-",
                record.start_date or "-",
            ]
        )
    return rows


def make_rental_table(rentals: Sequence[Rental]) -> List[List[str]]:
    """Convert rental history entries to table rows."""
    rows = []
    for rental in rentals:
        rows.append(
            [
                rental.vehicle_id,
                rental.user_id,
                rental.model,
                rental.start_date,
                rental.end_date or "Not returned",
                format_cost(rental.total_cost) if not rental.is_active else "-",
                rental.status.value,
            ]
        )
    return rows


def render_vehicles(records: Sequence[FleetRecord], empty: str) -> str:
    if not records:
        return empty
    return tabulate(make_vehicle_table(records), headers=VEHICLE_HEADERS, tablefmt="simple")


def render_rentals(rentals: Sequence[Rental], empty: str = "No rentals recorded.") -> str:
    if not rentals:
        return empty
    return tabulate(make_rental_table(rentals), headers=RENTAL_HEADERS, tablefmt="simple")


def render_rows(rows: List[List[str]], headers: List[str]) -> str:
    return tabulate(rows, headers=headers, tablefmt="simple")
