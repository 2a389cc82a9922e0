#!/usr/bin/env python3
"""Tests for the rent console menus and entry point."""

import logging

import pytest

from fleet import AdminUser, FleetManager, RegularUser
from fleet.log import LOGGER_NAME
from rent import Menu, main


def scripted(lines):
    """An input function that replays ``lines`` then signals end of input."""
    it = iter(lines)

    def read(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


@pytest.fixture
def manager(tmp_path):
    return FleetManager(tmp_path / "vehicles.txt", tmp_path / "rentals.txt")


def run_menu(manager, lines):
    output = []
    menu = Menu(
        AdminUser("1", "Admin", manager),
        RegularUser("2", "User", manager),
        input_func=scripted(lines),
        output=output.append,
    )
    menu.run()
    return output


@pytest.fixture
def fleet_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Menu
# =============================================================================


class TestMainMenu:
    """Tests for the top-level loop."""

    def test_exit(self, manager):
        output = run_menu(manager, ["3"])
        assert "=== Main Menu ===" in output
        assert output[-1] == "Exiting the system. Goodbye!"

    def test_end_of_input_exits(self, manager):
        output = run_menu(manager, [])
        assert output[-1] == "Exiting the system. Goodbye!"

    def test_invalid_choice(self, manager):
        output = run_menu(manager, ["x", "9", "3"])
        assert output.count("Invalid choice. Please try again.") == 2
        assert output[-1] == "Exiting the system. Goodbye!"


class TestUserMenu:
    """Tests for the regular user flows."""

    def test_rent_and_return(self, manager):
        output = run_menu(
            manager,
            [
                "2",
                "1", "U1", "V01", "01/01/2023",
                "2", "U1", "V01", "04/01/2023",
                "4",
                "3",
            ],
        )
        assert "Vehicle rented successfully." in output
        assert "Vehicle returned successfully. Total cost: ₪360.00" in output
        assert manager.history[0].total_cost == 360.0

    def test_bad_date(self, manager):
        output = run_menu(manager, ["2", "1", "U1", "V01", "tomorrow", "4", "3"])
        assert "Error: Invalid date format. Must be in the format dd/MM/yyyy." in output
        assert manager.history == []

    def test_year_range_bad_input(self, manager):
        output = run_menu(manager, ["2", "3", "4", "abc", "5", "4", "3"])
        assert "Invalid input. Year must be a positive number." in output


class TestAdminMenu:
    """Tests for the admin flows."""

    def test_add_vehicle_retries_year(self, manager):
        output = run_menu(
            manager,
            [
                "1", "1",
                "1", "V11", "Kia Rio", "abc", "2021", "60",
                "5", "6", "3",
            ],
        )
        assert "Invalid input. Year must be a positive number." in output
        assert "Vehicle added successfully." in output
        assert manager.find_vehicle("V11").year == 2021

    def test_remove_old(self, manager):
        output = run_menu(manager, ["1", "1", "2", "2", "2024", "3", "5", "6", "3"])
        assert "Old vehicles removed successfully: V01, V09, V10" in output
        assert len(manager.records) == 7

    def test_view_statistics(self, manager):
        output = run_menu(manager, ["1", "2", "6", "3"])
        assert any(line.startswith("=== Vehicle Statistics ===") for line in output)


# =============================================================================
# Entry point
# =============================================================================


class TestMain:
    """Tests for main()."""

    def test_missing_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "Config file not found" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / "rental.yaml"
        config.write_text("lateFee:\n  perDay: -1\n")
        assert main(["--config", str(config)]) == 1
        assert "Invalid config" in capsys.readouterr().out

    def test_missing_data_dir(self, tmp_path, capsys):
        assert main(["--data-dir", str(tmp_path / "nope")]) == 1
        assert "Data directory not found" in capsys.readouterr().out

    def test_runs_menu(self, tmp_path, monkeypatch, fleet_logger):
        calls = []
        monkeypatch.setattr(Menu, "run", lambda self: calls.append(self))
        assert main(["--data-dir", str(tmp_path)]) == 0
        assert len(calls) == 1
        assert len((tmp_path / "vehicles.txt").read_text().splitlines()) == 10
        assert "ACTION: Vehicle data saved to file." in (tmp_path / "system.log").read_text()
