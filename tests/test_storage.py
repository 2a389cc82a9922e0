#!/usr/bin/env python3
"""Tests for vehicles.txt / rentals.txt loading and saving."""

import pytest

from fleet import FleetRecord, RecordKind, Rental, Vehicle, VehicleStatus
from fleet.storage import (
    build_live_records,
    default_vehicles,
    load_rentals,
    load_vehicles,
    parse_rental_row,
    parse_vehicle_row,
    rental_to_row,
    save_rentals,
    save_vehicles,
    vehicle_to_row,
)

# =============================================================================
# Row conversion
# =============================================================================


class TestVehicleRows:
    """Tests for vehicle row conversion."""

    def test_vehicle_to_row(self):
        vehicle = Vehicle("V01", "Audi A1", 2013, 120)
        assert vehicle_to_row(vehicle) == ["V01", "Audi A1", "2013", "120.0", "Available"]

    def test_parse_vehicle_row(self):
        vehicle = parse_vehicle_row(["V03", "BMW X5", "2018", "200.0", "Maintenance"])
        assert vehicle == Vehicle("V03", "BMW X5", 2018, 200.0, VehicleStatus.MAINTENANCE)

    def test_parse_vehicle_row_too_short(self):
        with pytest.raises(ValueError):
            parse_vehicle_row(["V03", "BMW X5", "2018"])

    def test_parse_vehicle_row_bad_year(self):
        with pytest.raises(ValueError):
            parse_vehicle_row(["V03", "BMW X5", "new", "200.0", "Available"])

    def test_parse_vehicle_row_bad_status(self):
        with pytest.raises(ValueError):
            parse_vehicle_row(["V03", "BMW X5", "2018", "200.0", "Sold"])


class TestRentalRows:
    """Tests for rental row conversion."""

    def test_active_rental_to_row(self):
        rental = Rental("V11", "Kia Rio", 2021, 60.0, "U1", "01/01/2023")
        assert rental_to_row(rental) == [
            "U1", "V11", "Kia Rio", "2021", "60.0", "01/01/2023",
            "Not returned", "0.0", "Active",
        ]

    def test_completed_rental_to_row(self):
        rental = Rental("V11", "Kia Rio", 2021, 60.0, "U1", "01/01/2023", "04/01/2023", 180.0)
        row = rental_to_row(rental)
        assert row[6:] == ["04/01/2023", "180.0", "Completed"]

    def test_parse_active_row(self):
        rental = parse_rental_row(
            ["U1", "V11", "Kia Rio", "2021", "60.0", "01/01/2023", "Not returned", "0.0", "Active"]
        )
        assert rental.is_active
        assert rental.end_date is None
        assert rental.user_id == "U1"
        assert rental.vehicle_id == "V11"

    def test_parse_completed_row(self):
        rental = parse_rental_row(
            ["U1", "V11", "Kia Rio", "2021", "60.0", "01/01/2023", "04/01/2023", "180.0", "Completed"]
        )
        assert rental.end_date == "04/01/2023"
        assert rental.total_cost == 180.0

    def test_parse_row_too_short(self):
        with pytest.raises(ValueError):
            parse_rental_row(["U1", "V11", "Kia Rio"])

    def test_parse_row_status_mismatch(self):
        with pytest.raises(ValueError):
            parse_rental_row(
                ["U1", "V11", "Kia Rio", "2021", "60.0", "01/01/2023", "Not returned", "0.0", "Completed"]
            )

    def test_parse_row_unknown_status(self):
        with pytest.raises(ValueError):
            parse_rental_row(
                ["U1", "V11", "Kia Rio", "2021", "60.0", "01/01/2023", "04/01/2023", "180.0", "Done"]
            )


# =============================================================================
# Files
# =============================================================================


class TestLoadVehicles:
    """Tests for load_vehicles."""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_vehicles(tmp_path / "vehicles.txt") == []

    def test_loads_lines(self, tmp_path):
        path = tmp_path / "vehicles.txt"
        path.write_text("V01,Audi A1,2013,120.0,Available\nV02,Mercedes GLC,2015,150.0,Rented\n")
        vehicles = load_vehicles(path)
        assert [v.id for v in vehicles] == ["V01", "V02"]
        assert vehicles[1].status == VehicleStatus.RENTED

    def test_skips_malformed_lines(self, tmp_path):
        path = tmp_path / "vehicles.txt"
        path.write_text(
            "V01,Audi A1,2013,120.0,Available\n"
            "garbage\n"
            "\n"
            "V02,Mercedes GLC,twenty,150.0,Available\n"
            "V03,BMW X5,2018,200.0,Available\n"
        )
        assert [v.id for v in load_vehicles(path)] == ["V01", "V03"]


class TestLoadRentals:
    """Tests for load_rentals."""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_rentals(tmp_path / "rentals.txt") == []

    def test_skips_malformed_lines(self, tmp_path):
        path = tmp_path / "rentals.txt"
        path.write_text(
            "U1,V11,Kia Rio,2021,60.0,01/01/2023,04/01/2023,180.0,Completed\n"
            "U2,V03,BMW X5\n"
            "U2,V03,BMW X5,2018,abc,01/01/2023,Not returned,0.0,Active\n"
            "U3,V04,Toyota Corolla,2020,90.0,05/01/2023,Not returned,0.0,Active\n"
        )
        rentals = load_rentals(path)
        assert [(r.user_id, r.vehicle_id) for r in rentals] == [("U1", "V11"), ("U3", "V04")]


class TestSaveAndLoad:
    """Round trips through the two files."""

    def test_vehicle_file_format(self, tmp_path):
        path = tmp_path / "vehicles.txt"
        records = [
            FleetRecord.plain(Vehicle("V01", "Audi A1", 2013, 120.0)),
            FleetRecord.active_rental(Vehicle("V02", "Mercedes GLC", 2015, 150.0), "U1", "01/01/2023"),
        ]
        save_vehicles(path, records)
        assert path.read_text() == (
            "V01,Audi A1,2013,120.0,Available\n"
            "V02,Mercedes GLC,2015,150.0,Rented\n"
        )

    def test_rental_file_format(self, tmp_path):
        path = tmp_path / "rentals.txt"
        save_rentals(
            path,
            [
                Rental("V11", "Kia Rio", 2021, 60.0, "U1", "01/01/2023", "04/01/2023", 180.0),
                Rental("V02", "Mercedes GLC", 2015, 150.0, "U2", "02/01/2023"),
            ],
        )
        assert path.read_text() == (
            "U1,V11,Kia Rio,2021,60.0,01/01/2023,04/01/2023,180.0,Completed\n"
            "U2,V02,Mercedes GLC,2015,150.0,02/01/2023,Not returned,0.0,Active\n"
        )

    def test_round_trip(self, tmp_path):
        vehicles = default_vehicles()
        vehicles[2].status = VehicleStatus.MAINTENANCE
        history = [
            Rental("V11", "Kia Rio", 2021, 60.0, "U1", "01/01/2023", "04/01/2023", 180.0),
            Rental("V04", "Toyota Corolla", 2020, 90.0, "U2", "01/03/2023", "11/03/2023", 900.0),
        ]
        save_vehicles(tmp_path / "vehicles.txt", [FleetRecord.plain(v) for v in vehicles])
        save_rentals(tmp_path / "rentals.txt", history)

        assert load_vehicles(tmp_path / "vehicles.txt") == vehicles
        assert load_rentals(tmp_path / "rentals.txt") == history


class TestBuildLiveRecords:
    """Tests for rebuilding the live list from both files."""

    def test_plain_records_only(self):
        records = build_live_records(default_vehicles(), [])
        assert len(records) == 10
        assert all(r.kind == RecordKind.PLAIN for r in records)

    def test_active_rental_replaces_plain_record(self):
        vehicles = [
            Vehicle("V01", "Audi A1", 2013, 120.0),
            Vehicle("V02", "Mercedes GLC", 2015, 150.0, VehicleStatus.RENTED),
        ]
        history = [Rental("V02", "Mercedes GLC", 2015, 150.0, "U1", "01/01/2023")]
        records = build_live_records(vehicles, history)
        assert [r.vehicle_id for r in records] == ["V01", "V02"]
        assert records[1].kind == RecordKind.ACTIVE_RENTAL
        assert records[1].renter_id == "U1"
        assert records[1].start_date == "01/01/2023"
        assert records[1].status == VehicleStatus.RENTED

    def test_completed_rentals_are_ignored(self):
        vehicles = [Vehicle("V01", "Audi A1", 2013, 120.0)]
        history = [Rental("V01", "Audi A1", 2013, 120.0, "U1", "01/01/2023", "03/01/2023", 240.0)]
        records = build_live_records(vehicles, history)
        assert records[0].kind == RecordKind.PLAIN

    def test_active_rental_without_vehicle_is_appended(self):
        history = [Rental("V11", "Kia Rio", 2021, 60.0, "U1", "01/01/2023")]
        records = build_live_records([Vehicle("V01", "Audi A1", 2013, 120.0)], history)
        assert [r.vehicle_id for r in records] == ["V01", "V11"]
        assert records[1].is_rental

    def test_keeps_current_price_and_maintenance_flag(self):
        vehicles = [Vehicle("V02", "Mercedes GLC", 2015, 175.0, VehicleStatus.MAINTENANCE)]
        history = [Rental("V02", "Mercedes GLC", 2015, 150.0, "U1", "01/01/2023")]
        record = build_live_records(vehicles, history)[0]
        assert record.is_rental
        assert record.vehicle.rental_price == 175.0
        assert record.status == VehicleStatus.MAINTENANCE


class TestDefaultVehicles:
    """Tests for the preloaded fleet."""

    def test_ten_available_vehicles(self):
        vehicles = default_vehicles()
        assert [v.id for v in vehicles] == [f"V{i:02d}" for i in range(1, 11)]
        assert all(v.status == VehicleStatus.AVAILABLE for v in vehicles)

    def test_fresh_list_each_call(self):
        first = default_vehicles()
        first[0].rental_price = 1.0
        assert default_vehicles()[0].rental_price == 120.0
