"""FleetSnapshot class - vehicles and reservations loaded from one store read."""

from typing import List, Optional

from .reservation import Reservation
from .vehicle import Vehicle


class FleetSnapshot:
    """All vehicles and reservations as read from the fleet file."""

    def __init__(
        self,
        vehicles: Optional[List[Vehicle]] = None,
        reservations: Optional[List[Reservation]] = None,
    ):
        self.vehicles = vehicles or []
        self.reservations = reservations or []

    def get_vehicle(self, vehicle_id: int) -> Vehicle:
        """Find a vehicle by id. Raises KeyError if absent."""
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        raise KeyError(f"Unknown vehicle id {vehicle_id}")

    def get_reservation(self, reservation_id: int) -> Reservation:
        """Find a reservation by id. Raises KeyError if absent."""
        for reservation in self.reservations:
            if reservation.id == reservation_id:
                return reservation
        raise KeyError(f"Unknown reservation id {reservation_id}")

    def reservations_for(self, vehicle_id: int) -> List[Reservation]:
        """Reservations of one vehicle, soft-deleted rows excluded, by start date."""
        rows = [
            r for r in self.reservations
            if r.vehicle_id == vehicle_id and r.deleted_at is None
        ]
        return sorted(rows, key=lambda r: (r.start_date, r.id or 0))

    def without(self, reservation_id: int) -> List[Reservation]:
        """All reservations except the given one."""
        return [r for r in self.reservations if r.id != reservation_id]
