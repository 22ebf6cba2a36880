"""Status enums for vehicles, reservations and maintenance blocks."""

from enum import Enum


class VehicleStatus(Enum):
    """Rental availability of a vehicle. Values are the stored strings."""

    AVAILABLE = "available"
    RENTED = "rented"
    SCHEDULED = "scheduled"
    NEEDS_FIXING = "needs_fixing"
    NOT_FOR_RENTAL = "not_for_rental"

    @property
    def is_sticky(self) -> bool:
        """Sticky statuses never auto-revert from reservation data."""
        return self in (VehicleStatus.NEEDS_FIXING, VehicleStatus.NOT_FOR_RENTAL)


class ReservationStatus(Enum):
    """Lifecycle of a reservation row."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    BOOKED = "booked"
    PICKED_UP = "picked_up"
    RETURNED = "returned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_closed(self) -> bool:
        """Closed reservations no longer affect vehicle status."""
        return self in (
            ReservationStatus.RETURNED,
            ReservationStatus.COMPLETED,
            ReservationStatus.CANCELLED,
        )


class ReservationType(Enum):
    STANDARD = "standard"
    MAINTENANCE_BLOCK = "maintenance_block"
    REPLACEMENT = "replacement"


class MaintenanceStatus(Enum):
    """Progress of a maintenance block."""

    SCHEDULED = "scheduled"
    IN = "in"
    IN_SERVICE = "in_service"
    OUT = "out"

    @property
    def in_progress(self) -> bool:
        return self is not MaintenanceStatus.OUT
