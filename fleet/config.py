"""YAML configuration loading and schema validation."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from jsonschema import Draft202012Validator

from .calculations import ALLOWED_RENTAL_DAYS, LATE_FEE_PER_DAY
from .errors import ConfigError

DATA_DIR_ENV = "RENTAL_DATA_DIR"


@dataclass
class Config:
    """Where the fleet files live and how late fees are charged."""

    data_dir: Path = Path(".")
    vehicle_file: str = "vehicles.txt"
    rental_file: str = "rentals.txt"
    log_file: str = "system.log"
    late_fee_per_day: float = LATE_FEE_PER_DAY
    allowed_days: int = ALLOWED_RENTAL_DAYS
    bill_late_fees: bool = False

    @property
    def vehicle_path(self) -> Path:
        return self.data_dir / self.vehicle_file

    @property
    def rental_path(self) -> Path:
        return self.data_dir / self.rental_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_file


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_config_data(data: Any, schema: dict) -> List[str]:
    """Validate parsed config data. Returns list of errors."""
    errors = []
    validator = Draft202012Validator(schema)
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        location = ".".join(str(p) for p in error.path)
        if location:
            errors.append(f"{location}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def _from_dict(data: Dict[str, Any]) -> Config:
    late_fee = data.get("lateFee") or {}
    config = Config()
    if "dataDir" in data:
        config.data_dir = Path(data["dataDir"])
    config.vehicle_file = data.get("vehicleFile", config.vehicle_file)
    config.rental_file = data.get("rentalFile", config.rental_file)
    config.log_file = data.get("logFile", config.log_file)
    config.late_fee_per_day = float(late_fee.get("perDay", config.late_fee_per_day))
    config.allowed_days = late_fee.get("allowedDays", config.allowed_days)
    config.bill_late_fees = late_fee.get("billed", config.bill_late_fees)
    return config


def load_config(
    filename: Optional[Union[str, Path]] = None,
    data_dir: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Build the runtime configuration.

    Precedence for the data directory: ``data_dir`` argument, then the
    RENTAL_DATA_DIR environment variable, then ``dataDir`` from the file.
    A missing ``filename`` gives the defaults.

    Raises:
        ConfigError: the file cannot be parsed or does not match the schema.
    """
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    if filename is not None:
        try:
            with open(filename) as fp:
                data = yaml.safe_load(fp) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {filename}") from None
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {filename}: {e}") from None

        errors = validate_config_data(data, load_schema())
        if errors:
            raise ConfigError(
                f"Invalid config {filename}: " + "; ".join(errors)
            )

    config = _from_dict(data)
    if environ.get(DATA_DIR_ENV):
        config.data_dir = Path(environ[DATA_DIR_ENV])
    if data_dir is not None:
        config.data_dir = Path(data_dir)
    return config
