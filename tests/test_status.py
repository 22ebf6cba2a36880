#!/usr/bin/env python3
"""Tests for status enums."""

from fleet import MaintenanceStatus, ReservationStatus, ReservationType, VehicleStatus


class TestVehicleStatus:
    """Tests for VehicleStatus."""

    def test_five_states(self):
        assert {s.value for s in VehicleStatus} == {
            "available", "rented", "scheduled", "needs_fixing", "not_for_rental",
        }

    def test_sticky_states(self):
        assert VehicleStatus.NEEDS_FIXING.is_sticky
        assert VehicleStatus.NOT_FOR_RENTAL.is_sticky
        assert not VehicleStatus.AVAILABLE.is_sticky
        assert not VehicleStatus.RENTED.is_sticky
        assert not VehicleStatus.SCHEDULED.is_sticky

    def test_lookup_by_stored_value(self):
        assert VehicleStatus("needs_fixing") is VehicleStatus.NEEDS_FIXING


class TestReservationStatus:
    """Tests for ReservationStatus."""

    def test_closed_statuses(self):
        closed = {s for s in ReservationStatus if s.is_closed}
        assert closed == {
            ReservationStatus.RETURNED,
            ReservationStatus.COMPLETED,
            ReservationStatus.CANCELLED,
        }


class TestMaintenanceStatus:
    """Tests for MaintenanceStatus."""

    def test_in_progress(self):
        assert MaintenanceStatus.SCHEDULED.in_progress
        assert MaintenanceStatus.IN.in_progress
        assert MaintenanceStatus.IN_SERVICE.in_progress
        assert not MaintenanceStatus.OUT.in_progress

    def test_reservation_types(self):
        assert ReservationType("maintenance_block") is ReservationType.MAINTENANCE_BLOCK
