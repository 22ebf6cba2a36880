#!/usr/bin/env python3
"""Tests for Vehicle, Reservation and FleetSnapshot classes."""

import pytest

from fleet import (
    FleetSnapshot,
    Reservation,
    ReservationStatus,
    ReservationType,
    Vehicle,
    VehicleStatus,
)


class TestVehicle:
    """Tests for Vehicle."""

    def test_defaults_to_available(self):
        vehicle = Vehicle(1, "GX-412-K", "Toyota", "Corolla")
        assert vehicle.availability_status is VehicleStatus.AVAILABLE

    def test_name(self):
        vehicle = Vehicle(1, "GX-412-K", "Toyota", "Corolla")
        assert vehicle.name == "Toyota Corolla (GX-412-K)"


class TestReservation:
    """Tests for Reservation window and liveness."""

    def test_covers_inside_window(self):
        r = Reservation(1, 1, "2025-03-01", "2025-03-05")
        assert r.covers("2025-03-01")
        assert r.covers("2025-03-03")
        assert r.covers("2025-03-05")

    def test_covers_outside_window(self):
        r = Reservation(1, 1, "2025-03-01", "2025-03-05")
        assert not r.covers("2025-02-28")
        assert not r.covers("2025-03-06")

    def test_open_ended_covers_future(self):
        r = Reservation(1, 1, "2025-03-01")
        assert r.covers("2030-01-01")

    def test_live(self):
        assert Reservation(1, 1, "2025-03-01").is_live
        assert Reservation(1, 1, "2025-03-01", status=ReservationStatus.PICKED_UP).is_live

    def test_not_live_when_closed_or_deleted(self):
        assert not Reservation(1, 1, "2025-03-01", status=ReservationStatus.CANCELLED).is_live
        assert not Reservation(1, 1, "2025-03-01", status=ReservationStatus.RETURNED).is_live
        assert not Reservation(1, 1, "2025-03-01", deleted_at="2025-03-02T10:00:00").is_live

    def test_maintenance_block(self):
        r = Reservation(1, 1, "2025-03-01", type=ReservationType.MAINTENANCE_BLOCK)
        assert r.is_maintenance_block
        assert not Reservation(2, 1, "2025-03-01").is_maintenance_block


class TestFleetSnapshot:
    """Tests for FleetSnapshot lookups."""

    @pytest.fixture
    def fleet(self):
        vehicles = [
            Vehicle(1, "GX-412-K", "Toyota", "Corolla"),
            Vehicle(2, "HR-09-TZ", "Volkswagen", "Transporter"),
        ]
        reservations = [
            Reservation(1, 1, "2025-03-10"),
            Reservation(2, 1, "2025-03-01"),
            Reservation(3, 2, "2025-03-01"),
            Reservation(4, 1, "2025-02-01", deleted_at="2025-02-02T09:00:00"),
        ]
        return FleetSnapshot(vehicles, reservations)

    def test_get_vehicle(self, fleet):
        assert fleet.get_vehicle(2).brand == "Volkswagen"

    def test_get_vehicle_unknown_raises(self, fleet):
        with pytest.raises(KeyError):
            fleet.get_vehicle(99)

    def test_get_reservation_unknown_raises(self, fleet):
        with pytest.raises(KeyError):
            fleet.get_reservation(99)

    def test_reservations_for_sorted_and_without_deleted(self, fleet):
        assert [r.id for r in fleet.reservations_for(1)] == [2, 1]

    def test_without(self, fleet):
        assert [r.id for r in fleet.without(2)] == [1, 3, 4]
