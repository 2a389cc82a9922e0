"""
Vehicle rental fleet models.

This package provides the pieces of the rental system:
- VehicleStatus, RentalStatus, RecordKind, SortKey: enums
- Vehicle: a rentable vehicle
- Rental: a rental history record
- FleetRecord: a live fleet entry, plain or on an active rental
- FleetManager: the fleet aggregate with rent/return and reports
- AdminUser, RegularUser: role facades used by the menu
"""

from .status import VehicleStatus, RentalStatus, RecordKind, SortKey
from .errors import (
    FleetError,
    InvalidInputError,
    InvalidFormatError,
    DuplicateIdError,
    InvalidRentalDateError,
    VehicleNotFoundError,
    ConfigError,
)
from .vehicle import Vehicle
from .rental import Rental
from .record import FleetRecord
from .calculations import calc_days, calc_total_cost, calc_late_fee
from .config import Config, load_config
from .manager import FleetManager, FleetStatistics, LateFee
from .users import User, AdminUser, RegularUser
from .log import setup_logging

__all__ = [
    "VehicleStatus",
    "RentalStatus",
    "RecordKind",
    "SortKey",
    "FleetError",
    "InvalidInputError",
    "InvalidFormatError",
    "DuplicateIdError",
    "InvalidRentalDateError",
    "VehicleNotFoundError",
    "ConfigError",
    "Vehicle",
    "Rental",
    "FleetRecord",
    "calc_days",
    "calc_total_cost",
    "calc_late_fee",
    "Config",
    "load_config",
    "FleetManager",
    "FleetStatistics",
    "LateFee",
    "User",
    "AdminUser",
    "RegularUser",
    "setup_logging",
]
