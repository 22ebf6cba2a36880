#!/usr/bin/env python3
"""Tests for the rental CLI: formatting helpers, tables and commands."""

from fleet import (
    MaintenanceStatus,
    Reservation,
    ReservationStatus,
    ReservationType,
    TransitionResult,
    VehicleStatus,
    load_fleet,
)
from rental import (
    format_date,
    format_price,
    main,
    make_reservation_table,
    make_status_table,
    report,
    truncate,
)

from conftest import TODAY


class TestFormatDate:
    """Tests for format_date."""

    def test_date_unchanged(self):
        assert format_date("2025-03-10") == "2025-03-10"

    def test_none_returns_dash(self):
        assert format_date(None) == "-"


class TestFormatPrice:
    """Tests for format_price."""

    def test_formats_number(self):
        assert format_price(45) == "€45.00"
        assert format_price(1234.5) == "€1,234.50"

    def test_none_returns_dash(self):
        assert format_price(None) == "-"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        result = truncate("a" * 40)
        assert len(result) == 30
        assert result.endswith("...")

    def test_custom_max_len(self):
        assert truncate("Bakkerij Smit BV", 10) == "Bakkeri..."


class TestReport:
    """Tests for report."""

    def test_denied(self, capsys):
        assert report(TransitionResult.deny("nope")) == 1
        assert capsys.readouterr().out == "Error: nope\n"

    def test_warning_and_dry_run(self, capsys):
        result = TransitionResult.allow(VehicleStatus.NEEDS_FIXING, warning="careful")
        assert report(result, dry_run=True) == 0
        out = capsys.readouterr().out
        assert "Warning: careful" in out
        assert "New status: Needs Fixing" in out
        assert "(dry run - no changes made)" in out

    def test_allowed_without_warning(self, capsys):
        assert report(TransitionResult.allow(VehicleStatus.AVAILABLE)) == 0
        assert capsys.readouterr().out == "New status: Available\n"


class TestMakeStatusTable:
    """Tests for make_status_table."""

    def test_rows_in_id_order(self, fleet_file):
        rows = make_status_table(load_fleet(fleet_file), TODAY)
        assert [row[0] for row in rows] == ["1", "2", "3", "4", "5"]
        assert rows[0] == [
            "1", "Toyota Corolla (GX-412-K)", "Rented", "Rented", "", "1", "€45.00",
        ]

    def test_drift_marker(self, fleet_file):
        rows = make_status_table(load_fleet(fleet_file), "2025-03-20")
        by_id = {row[0]: row for row in rows}
        assert by_id["4"][2:5] == ["Available", "Scheduled", "*"]
        assert by_id["5"][4] == ""


class TestMakeReservationTable:
    """Tests for make_reservation_table."""

    def test_converts_entries_to_rows(self):
        entries = [
            Reservation(7, 2, "2025-03-05", customer="Bakkerij Smit BV"),
            Reservation(
                8, 3, "2025-03-03", "2025-03-12",
                type=ReservationType.MAINTENANCE_BLOCK,
                maintenance_status=MaintenanceStatus.IN,
            ),
        ]
        rows = make_reservation_table(entries)
        assert rows[0] == [
            "7", "2", "Bakkerij Smit BV", "2025-03-05", "-", "booked", "standard", "-",
        ]
        assert rows[1][2] == "-"
        assert rows[1][5:] == ["booked", "maintenance_block", "in"]


class TestCommands:
    """End-to-end tests through main()."""

    def run(self, fleet_file, *args):
        return main([str(fleet_file), "--date", TODAY, *args])

    def test_status(self, fleet_file, capsys):
        assert self.run(fleet_file, "status") == 0
        out = capsys.readouterr().out
        assert "Fleet: 5 vehicles (as of 2025-03-10)" in out
        assert "Toyota Corolla (GX-412-K)" in out

    def test_status_single_vehicle(self, fleet_file, capsys):
        assert self.run(fleet_file, "status", "--vehicle", "3") == 0
        out = capsys.readouterr().out
        assert "Fleet: 1 vehicles" in out
        assert "Renault Clio" in out
        assert "Toyota" not in out

    def test_reservations_active(self, fleet_file, capsys):
        assert self.run(fleet_file, "reservations", "--active") == 0
        out = capsys.readouterr().out
        assert "J. de Vries" in out
        assert "A. Yilmaz" not in out
        assert "K. Peters" not in out

    def test_reservations_none(self, fleet_file, capsys):
        assert self.run(fleet_file, "reservations", "--vehicle", "5") == 0
        assert "No reservations found." in capsys.readouterr().out

    def test_set_status_denied(self, fleet_file, capsys):
        assert self.run(fleet_file, "set-status", "4", "rented") == 1
        assert 'Cannot manually set vehicle to "rented"' in capsys.readouterr().out
        assert load_fleet(fleet_file).get_vehicle(4).availability_status is VehicleStatus.AVAILABLE

    def test_set_status_dry_run(self, fleet_file, capsys):
        assert self.run(fleet_file, "set-status", "4", "not_for_rental", "--dry-run") == 0
        out = capsys.readouterr().out
        assert "New status: Not for Rental" in out
        assert "(dry run - no changes made)" in out
        assert load_fleet(fleet_file).get_vehicle(4).availability_status is VehicleStatus.AVAILABLE

    def test_return(self, fleet_file, capsys):
        assert self.run(fleet_file, "return", "1") == 0
        assert "New status: Available" in capsys.readouterr().out
        fleet = load_fleet(fleet_file)
        assert fleet.get_reservation(1).status is ReservationStatus.RETURNED

    def test_maintenance_start(self, fleet_file, capsys):
        assert self.run(fleet_file, "maintenance-start", "4", "--notes", "brakes") == 0
        assert "New status: Needs Fixing" in capsys.readouterr().out
        assert load_fleet(fleet_file).get_reservation(6).notes == "brakes"

    def test_cancel(self, fleet_file, capsys):
        assert self.run(fleet_file, "cancel", "2") == 0
        assert "New status: Available" in capsys.readouterr().out

    def test_invalid_event_reports_error(self, fleet_file, capsys):
        assert self.run(fleet_file, "pickup", "3") == 1
        assert capsys.readouterr().out == "Error: Reservation 3 is a maintenance block\n"

    def test_unknown_reservation(self, fleet_file, capsys):
        assert self.run(fleet_file, "pickup", "99") == 1
        assert capsys.readouterr().out == "Error: Unknown reservation id 99\n"

    def test_reconcile(self, fleet_file, capsys):
        assert self.run(fleet_file, "reconcile") == 0
        assert "All vehicle statuses match their reservations." in capsys.readouterr().out

        assert main([str(fleet_file), "--date", "2025-03-20", "reconcile"]) == 0
        assert "out of sync (use --apply to fix)" in capsys.readouterr().out

        assert main([str(fleet_file), "--date", "2025-03-20", "reconcile", "--apply"]) == 0
        assert "Updated 2 vehicle(s)." in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.yaml"), "status"]) == 1
        assert "Error: File not found" in capsys.readouterr().out

    def test_invalid_date(self, fleet_file, capsys):
        assert main([str(fleet_file), "--date", "soon", "status"]) == 1
        assert "Error: Invalid date 'soon'" in capsys.readouterr().out
