#!/usr/bin/env python3
"""
Interactive console for the vehicle rental fleet.

Menus:
  Admin - manage vehicles, statistics, maintenance, reports, user costs
  User  - rent, return, search and sort vehicles

Data lives in vehicles.txt and rentals.txt; actions are logged to system.log.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from fleet import (
    AdminUser,
    ConfigError,
    FleetManager,
    InvalidInputError,
    RegularUser,
    SortKey,
    load_config,
    setup_logging,
)
from fleet.validator import parse_positive_float, parse_positive_int

# =============================================================================
# Menu loop
# =============================================================================


class Menu:
    """Nested numbered menus over the admin and user facades."""

    def __init__(
        self,
        admin: AdminUser,
        user: RegularUser,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.admin = admin
        self.user = user
        self.input_func = input_func
        self.output = output

    def prompt(self, text: str) -> str:
        return self.input_func(text).strip()

    def read_choice(self) -> Optional[int]:
        """Read a menu choice. Prints a notice and returns None if not a number."""
        try:
            return parse_positive_int(self.prompt("Enter your choice: "))
        except InvalidInputError:
            self.output("Invalid choice. Please try again.")
            return None

    def read_positive_int(self, text: str, error_message: str) -> int:
        return parse_positive_int(self.prompt(text), error_message)

    def run_menu(
        self, title: str, options: List[str], actions: Dict[int, Callable[[], None]]
    ) -> None:
        """
        Show ``options`` until the last one (Back/Exit) is picked.

        ``actions`` maps a choice number to its handler. Input errors raised by
        a handler are printed and the menu is shown again.
        """
        while True:
            self.output(f"\n=== {title} ===")
            for i, text in enumerate(options, start=1):
                self.output(f"{i}. {text}")
            choice = self.read_choice()
            if choice is None:
                continue
            if choice == len(options):
                return
            action = actions.get(choice)
            if action is None:
                self.output("Invalid choice. Please try again.")
                continue
            try:
                action()
            except InvalidInputError as e:
                self.output(e.message)

    def run(self) -> None:
        """Main menu. End of input leaves like the Exit option."""
        try:
            self.run_menu(
                "Main Menu",
                ["Admin Menu", "User Menu", "Exit"],
                {1: self.admin_menu, 2: self.user_menu},
            )
        except (EOFError, KeyboardInterrupt):
            self.output("")
        self.output("Exiting the system. Goodbye!")

    # =========================================================================
    # Admin menus
    # =========================================================================

    def admin_menu(self) -> None:
        self.run_menu(
            self.admin.title,
            self.admin.options,
            {
                1: self.manage_vehicles_menu,
                2: lambda: self.output(self.admin.view_statistics()),
                3: self.maintenance_menu,
                4: lambda: self.output(self.admin.generate_report()),
                5: self.user_cost,
            },
        )

    def manage_vehicles_menu(self) -> None:
        self.run_menu(
            "Manage Vehicles",
            [
                "Add Vehicle",
                "Remove Vehicle",
                "Update Vehicle Price",
                "Search Vehicles",
                "Back to Admin Menu",
            ],
            {
                1: self.add_vehicle,
                2: self.remove_vehicle_menu,
                3: self.update_price,
                4: self.search_vehicles_menu,
            },
        )

    def remove_vehicle_menu(self) -> None:
        self.run_menu(
            "Remove Vehicle",
            ["Remove by ID", "Remove Old Vehicles", "Back"],
            {1: self.remove_by_id, 2: self.remove_old},
        )

    def search_vehicles_menu(self) -> None:
        self.run_menu(
            "Search Vehicles",
            [
                "Show Available Vehicles",
                "Show Rented Vehicles",
                "Show Top 3 Newest Vehicles",
                "Back to Manage Vehicles Menu",
            ],
            {
                1: lambda: self.output(self.admin.available_vehicles()),
                2: lambda: self.output(self.admin.rented_vehicles()),
                3: lambda: self.output(self.admin.newest_vehicles()),
            },
        )

    def maintenance_menu(self) -> None:
        self.run_menu(
            "Manage Maintenance",
            [
                "View Vehicles Under Maintenance",
                "Send Vehicle to Maintenance",
                "Restore Vehicle from Maintenance",
                "Back to Admin Menu",
            ],
            {
                1: lambda: self.output(self.admin.maintenance_report()),
                2: lambda: self.output(
                    self.admin.send_to_maintenance(
                        self.prompt("Enter Vehicle ID to send to maintenance: ")
                    )
                ),
                3: lambda: self.output(
                    self.admin.restore_vehicle(
                        self.prompt("Enter Vehicle ID to restore from maintenance: ")
                    )
                ),
            },
        )

    def add_vehicle(self) -> None:
        vehicle_id = self.prompt("Enter Vehicle ID: ")
        model = self.prompt("Enter Vehicle Model: ")
        while True:
            try:
                year = self.read_positive_int(
                    "Enter Vehicle Year: ", "Year must be a positive number."
                )
                break
            except InvalidInputError as e:
                self.output(e.message)
        while True:
            price = self.prompt("Enter Rental Price: ")
            try:
                parse_positive_float(price, "Price must be a positive number.")
                break
            except InvalidInputError as e:
                self.output(e.message)
        self.output(self.admin.add_vehicle(vehicle_id, model, year, price))

    def remove_by_id(self) -> None:
        vehicle_id = self.prompt("Enter Vehicle ID to remove: ")
        self.output(self.admin.remove_vehicle(vehicle_id))

    def remove_old(self) -> None:
        year = self.read_positive_int(
            "Enter the current year: ", "Year must be a positive number."
        )
        self.output(self.admin.remove_old_vehicles(year))

    def update_price(self) -> None:
        vehicle_id = self.prompt("Enter Vehicle ID to update: ")
        price = parse_positive_float(
            self.prompt("Enter new Rental Price: "), "Price must be a positive number."
        )
        self.output(self.admin.update_vehicle(vehicle_id, price))

    def user_cost(self) -> None:
        user_id = self.prompt("Enter User ID: ")
        self.output(self.admin.user_total_cost(user_id))

    # =========================================================================
    # User menus
    # =========================================================================

    def user_menu(self) -> None:
        self.run_menu(
            self.user.title,
            self.user.options,
            {
                1: self.rent_vehicle,
                2: self.return_vehicle,
                3: self.search_and_sort_menu,
            },
        )

    def search_and_sort_menu(self) -> None:
        self.run_menu(
            "Search and Sort Vehicles",
            [
                "Show Available Vehicles",
                "Sort by year",
                "Sort by price",
                "Search by Year Range",
                "Back to User Menu",
            ],
            {
                1: lambda: self.output(self.user.available_vehicles()),
                2: lambda: self.output(self.user.search_and_sort(SortKey.YEAR)),
                3: lambda: self.output(self.user.search_and_sort(SortKey.PRICE)),
                4: self.year_range,
            },
        )

    def rent_vehicle(self) -> None:
        user_id = self.prompt("Enter your User ID: ")
        vehicle_id = self.prompt("Enter Vehicle ID to rent: ")
        start_date = self.prompt("Enter rental start date (dd/MM/yyyy): ")
        self.output(self.user.rent_vehicle(user_id, vehicle_id, start_date))

    def return_vehicle(self) -> None:
        user_id = self.prompt("Enter your User ID: ")
        vehicle_id = self.prompt("Enter Vehicle ID to return: ")
        return_date = self.prompt("Enter return date (dd/MM/yyyy): ")
        self.output(self.user.return_vehicle(user_id, vehicle_id, return_date))

    def year_range(self) -> None:
        start = self.read_positive_int("Enter start year: ", "Year must be a positive number.")
        end = self.read_positive_int("Enter end year: ", "Year must be a positive number.")
        self.output(self.user.find_by_year(start, end))


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Vehicle rental fleet manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --data-dir ~/rentals
  %(prog)s --config rental.yaml
""",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding vehicles.txt, rentals.txt and system.log",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, data_dir=args.data_dir)
    except ConfigError as e:
        print(e.message)
        return 1

    if not config.data_dir.is_dir():
        print(f"Error: Data directory not found: {config.data_dir}")
        return 1

    setup_logging(config.log_path)
    manager = FleetManager.from_config(config)
    admin = AdminUser("1", "Admin", manager)
    user = RegularUser("2", "User", manager)
    Menu(admin, user).run()
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
