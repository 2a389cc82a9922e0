"""
Role facades over the fleet manager.

AdminUser manages the fleet and reads reports; RegularUser rents, returns and
searches. Both validate input before delegating and return text for the menu
to print. Neither keeps state beyond its identity and the shared manager.
"""

import logging
from typing import List

from .errors import FleetError, InvalidInputError, VehicleNotFoundError
from .formatting import format_cost, render_rentals, render_rows, render_vehicles
from .manager import FleetManager
from .status import SortKey
from .validator import (
    validate_date,
    validate_model_name,
    validate_price,
    validate_vehicle_id,
)
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class User:
    """A person using the system, with access to one fleet manager."""

    title = "User Menu"
    options: List[str] = []

    def __init__(self, id: str, name: str, manager: FleetManager):
        self.id = id
        self.name = name
        self.manager = manager

    @property
    def label(self) -> str:
        return f"{self.name} (ID: {self.id})"

    def menu_options(self) -> List[str]:
        """Numbered menu lines for this role."""
        return [f"{i}. {text}" for i, text in enumerate(self.options, start=1)]

    def available_vehicles(self) -> str:
        return "=== Available Vehicles ===\n" + render_vehicles(
            self.manager.available_vehicles(), "No available vehicles found."
        )


class AdminUser(User):
    """Fleet administration: vehicles, maintenance, statistics and reports."""

    title = "Admin Menu"
    options = [
        "Manage Vehicles",
        "View Statistics",
        "Check Maintenance",
        "Generate Report",
        "View User Rental Cost",
        "Exit",
    ]

    # =========================================================================
    # Vehicle management
    # =========================================================================

    def add_vehicle(self, vehicle_id: str, model: str, year: int, price: str) -> str:
        """Validate the fields, then add an Available vehicle."""
        try:
            validate_vehicle_id(vehicle_id)
            validate_model_name(model)
            validate_price(price)
            if year <= 0:
                raise InvalidInputError("Invalid input. Year must be a positive number.")
            vehicle = Vehicle(vehicle_id, model.strip(), year, float(price))
            self.manager.add_vehicle(vehicle)
        except InvalidInputError as e:
            return f"Error: {e.message}"
        logger.info("%s added Vehicle: ID = %s", self.label, vehicle_id)
        return "Vehicle added successfully."

    def remove_vehicle(self, vehicle_id: str) -> str:
        try:
            self.manager.remove_vehicle(vehicle_id)
        except VehicleNotFoundError as e:
            logger.error("%s failed to remove Vehicle: ID = %s", self.label, vehicle_id)
            return e.message
        logger.info("%s removed Vehicle: ID = %s", self.label, vehicle_id)
        return "Vehicle removed successfully."

    def remove_old_vehicles(self, current_year: int) -> str:
        removed = self.manager.remove_old(current_year)
        if not removed:
            return "No old vehicles to remove."
        ids = ", ".join(v.id for v in removed)
        return f"Old vehicles removed successfully: {ids}"

    def update_vehicle(self, vehicle_id: str, price: float) -> str:
        if price <= 0:
            return "Error: Price must be a positive number."
        if not self.manager.update_vehicle(vehicle_id, price):
            return f"Vehicle with ID {vehicle_id} not found."
        return "Vehicle price updated successfully."

    def rented_vehicles(self) -> str:
        return "--- Rented Vehicles ---\n" + render_vehicles(
            self.manager.rented_vehicles(), "No rented vehicles found."
        )

    def newest_vehicles(self, count: int = 3) -> str:
        return f"=== Top {count} Newest Vehicles ===\n" + render_vehicles(
            self.manager.top_newest(count), "No vehicles found."
        )

    # =========================================================================
    # Maintenance
    # =========================================================================

    def maintenance_report(self) -> str:
        return "=== Vehicles Under Maintenance ===\n" + render_vehicles(
            self.manager.maintenance_vehicles(), "No vehicles are under maintenance."
        )

    def send_to_maintenance(self, vehicle_id: str) -> str:
        _, message = self.manager.send_to_maintenance(vehicle_id)
        return message

    def restore_vehicle(self, vehicle_id: str) -> str:
        _, message = self.manager.restore_vehicle(vehicle_id)
        return message

    # =========================================================================
    # Reports
    # =========================================================================

    def view_statistics(self) -> str:
        stats = self.manager.statistics()
        rows = [
            ["Available Vehicles", str(stats.available)],
            ["Rented Vehicles", str(stats.rented)],
            ["Under Maintenance", str(stats.maintenance)],
            ["Total Rented Vehicles", str(stats.total_ever_rented)],
            ["Average Rental Price", format_cost(stats.average_price)],
        ]
        if stats.most_expensive is not None:
            rows.append(["Most Expensive Vehicle", str(stats.most_expensive)])
        return "=== Vehicle Statistics ===\n" + render_rows(rows, ["Statistic", "Value"])

    def late_fee_report(self) -> str:
        fees = self.manager.late_fees()
        if not fees:
            return "--- Late Return Fees ---\nNo late returns."
        rows = [
            [f.rental.vehicle_id, f.rental.user_id, str(f.days), format_cost(f.fee)]
            for f in fees
        ]
        return "--- Late Return Fees ---\n" + render_rows(
            rows, ["Vehicle", "User", "Days", "Late Fee"]
        )

    def generate_rental_report(self) -> str:
        """Rented vehicles, full history, then late fees."""
        return "\n\n".join(
            [
                "=== Rental Report ===",
                self.rented_vehicles(),
                "--- Rental History ---\n" + render_rentals(self.manager.history),
                self.late_fee_report(),
            ]
        )

    def earnings_report(self) -> str:
        total = self.manager.earnings()
        completed = self.manager.completed_rentals()
        rows = [[r.vehicle_id, r.user_id, format_cost(r.total_cost)] for r in completed]
        body = f"Total Earnings: {format_cost(total)}"
        if rows:
            body += "\n" + render_rows(rows, ["Vehicle", "User", "Total Cost"])
        return "=== Earnings Report ===\n" + body

    def generate_report(self) -> str:
        """Rental report, earnings, and total revenue."""
        return "\n\n".join(
            [
                self.generate_rental_report(),
                self.earnings_report(),
                f"Total Rental Revenue: {format_cost(self.manager.total_revenue)}",
            ]
        )

    def user_total_cost(self, user_id: str) -> str:
        total = self.manager.user_total_cost(user_id)
        return f"=== Total Rental Cost for User ID: {user_id} ===\n{format_cost(total)}"


class RegularUser(User):
    """Renting, returning and searching for vehicles."""

    title = "Regular User Menu"
    options = [
        "Rent Vehicle",
        "Return Vehicle",
        "Search and Sort Vehicles",
        "Exit",
    ]

    def rent_vehicle(self, user_id: str, vehicle_id: str, start_date: str) -> str:
        try:
            validate_date(start_date)
        except FleetError as e:
            return f"Error: {e.message}"
        _, message = self.manager.rent_vehicle(vehicle_id, user_id, start_date)
        return message

    def return_vehicle(self, user_id: str, vehicle_id: str, return_date: str) -> str:
        try:
            validate_date(return_date)
        except FleetError as e:
            return f"Error: {e.message}"
        _, message = self.manager.return_vehicle(vehicle_id, user_id, return_date)
        return message

    def search_and_sort(self, sort_key: SortKey) -> str:
        return "=== Available Vehicles (Sorted) ===\n" + render_vehicles(
            self.manager.search_and_sort(sort_key), "No available vehicles found."
        )

    def find_by_year(self, start_year: int, end_year: int) -> str:
        return f"=== Vehicles from {start_year} to {end_year} ===\n" + render_vehicles(
            self.manager.find_by_year(start_year, end_year), "No vehicles found."
        )
