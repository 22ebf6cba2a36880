"""
Vehicle rental fleet status models.

This package manages the rental availability of vehicles:
- VehicleStatus / ReservationStatus / ReservationType / MaintenanceStatus: closed status domains
- Vehicle, Reservation: fleet records
- VehicleStatusContext: per-decision snapshot of a vehicle's reservations
- calculate_correct_status: status implied by the reservation data
- Transition validators: allow/deny decisions per triggering event
- STATUS_LABELS / STATUS_COLORS: presentation lookup tables
"""

from .status import VehicleStatus, ReservationStatus, ReservationType, MaintenanceStatus
from .vehicle import Vehicle
from .reservation import Reservation
from .snapshot import FleetSnapshot
from .transition_result import TransitionResult
from .context import VehicleStatusContext, build_status_context, iso_day
from .calculations import calculate_correct_status, has_drift
from .transitions import (
    validate_manual_status_change,
    get_status_on_pickup,
    get_status_on_return,
    get_status_on_maintenance_start,
    get_status_on_maintenance_end,
    get_status_on_reservation_cancel,
)
from .labels import STATUS_LABELS, STATUS_COLORS, status_label, status_color
from .loader import (
    load_fleet,
    create_fleet,
    add_vehicle,
    add_reservation,
    update_reservation,
    save_vehicle_status,
    soft_delete_reservation,
)

__all__ = [
    "VehicleStatus",
    "ReservationStatus",
    "ReservationType",
    "MaintenanceStatus",
    "Vehicle",
    "Reservation",
    "FleetSnapshot",
    "TransitionResult",
    "VehicleStatusContext",
    "build_status_context",
    "iso_day",
    "calculate_correct_status",
    "has_drift",
    "validate_manual_status_change",
    "get_status_on_pickup",
    "get_status_on_return",
    "get_status_on_maintenance_start",
    "get_status_on_maintenance_end",
    "get_status_on_reservation_cancel",
    "STATUS_LABELS",
    "STATUS_COLORS",
    "status_label",
    "status_color",
    "load_fleet",
    "create_fleet",
    "add_vehicle",
    "add_reservation",
    "update_reservation",
    "save_vehicle_status",
    "soft_delete_reservation",
]
