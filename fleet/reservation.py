"""Reservation class for rentals and maintenance blocks."""
from typing import Optional

from .status import MaintenanceStatus, ReservationStatus, ReservationType


class Reservation:
    """A booking of one vehicle over a date window.

    Dates are ISO ``YYYY-MM-DD`` strings and compare lexically. A missing
    ``end_date`` means the reservation is open-ended.
    """

    def __init__(
            self,
            id: Optional[int],
            vehicle_id: int,
            start_date: str,
            end_date: Optional[str] = None,
            status: ReservationStatus = ReservationStatus.BOOKED,
            type: ReservationType = ReservationType.STANDARD,
            maintenance_status: Optional[MaintenanceStatus] = None,
            customer: Optional[str] = None,
            deleted_at: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.start_date = start_date
        self.end_date = end_date
        self.status = status
        self.type = type
        self.maintenance_status = maintenance_status
        self.customer = customer
        self.deleted_at = deleted_at
        self.notes = notes

    @property
    def is_maintenance_block(self) -> bool:
        return self.type is ReservationType.MAINTENANCE_BLOCK

    @property
    def is_live(self) -> bool:
        """Not soft-deleted and not cancelled, completed or returned."""
        return self.deleted_at is None and not self.status.is_closed

    def covers(self, day: str) -> bool:
        """Check if the reservation window includes the given ISO day."""
        return self.start_date <= day and (self.end_date is None or self.end_date >= day)
