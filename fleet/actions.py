"""
Event handlers: load the fleet file, validate a status change, persist it.

Every handler returns the TransitionResult of its validator. Nothing is
written when the result is a denial or when ``dry_run`` is set. Each event
is committed with a single file write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from .calculations import calculate_correct_status, has_drift
from .context import DateLike, build_status_context, iso_day
from .loader import add_reservation, load_fleet, save_vehicle_status, write_changes
from .reservation import Reservation
from .status import MaintenanceStatus, ReservationStatus, ReservationType, VehicleStatus
from .transition_result import TransitionResult
from .transitions import (
    get_status_on_maintenance_end,
    get_status_on_maintenance_start,
    get_status_on_pickup,
    get_status_on_reservation_cancel,
    get_status_on_return,
    validate_manual_status_change,
)
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PICKUP_READY = (
    ReservationStatus.PENDING,
    ReservationStatus.CONFIRMED,
    ReservationStatus.BOOKED,
)


@dataclass
class StatusDrift:
    """A vehicle whose stored status differs from the calculated one."""

    vehicle: Vehicle
    stored: VehicleStatus
    calculated: VehicleStatus


def _log_result(event: str, vehicle: Vehicle, result: TransitionResult) -> None:
    if not result.allowed:
        logger.warning("%s denied for vehicle %s: %s", event, vehicle.id, result.error)
    elif result.warning:
        logger.warning(
            "%s on vehicle %s -> %s with warning: %s",
            event, vehicle.id, result.new_status.value, result.warning,
        )
    else:
        logger.info(
            "%s on vehicle %s: %s -> %s",
            event, vehicle.id, vehicle.availability_status.value, result.new_status.value,
        )


def _deleted_stamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


# =============================================================================
# Manual edit
# =============================================================================


def change_status(
    filename: PathLike,
    vehicle_id: int,
    requested: VehicleStatus,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """Apply an operator's manual status edit if the rules allow it."""
    fleet = load_fleet(filename)
    vehicle = fleet.get_vehicle(vehicle_id)
    context = build_status_context(vehicle, fleet.reservations, today)

    result = validate_manual_status_change(vehicle.availability_status, requested, context)
    _log_result("manual change", vehicle, result)

    if result.allowed and not dry_run:
        save_vehicle_status(filename, vehicle_id, result.new_status)
    return result


# =============================================================================
# Pickup / return
# =============================================================================


def pickup_reservation(
    filename: PathLike,
    reservation_id: int,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """
    Hand a vehicle over for a reservation.

    Validated against the stored status before the pickup is committed.
    Raises ValueError if the reservation cannot be picked up.
    """
    fleet = load_fleet(filename)
    reservation = fleet.get_reservation(reservation_id)
    if reservation.is_maintenance_block:
        raise ValueError(f"Reservation {reservation_id} is a maintenance block")
    if reservation.deleted_at is not None or reservation.status not in PICKUP_READY:
        raise ValueError(
            f"Reservation {reservation_id} is {reservation.status.value} "
            "and cannot be picked up"
        )
    vehicle = fleet.get_vehicle(reservation.vehicle_id)

    result = get_status_on_pickup(vehicle.availability_status)
    _log_result("pickup", vehicle, result)

    if result.allowed and not dry_run:
        write_changes(
            filename, vehicle.id, result.new_status,
            reservation_id, status=ReservationStatus.PICKED_UP,
        )
    return result


def return_reservation(
    filename: PathLike,
    reservation_id: int,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """
    Take a rented vehicle back.

    The context is built from the snapshot before the return is committed.
    Raises ValueError if the reservation is not picked up.
    """
    fleet = load_fleet(filename)
    reservation = fleet.get_reservation(reservation_id)
    if reservation.deleted_at is not None or reservation.status is not ReservationStatus.PICKED_UP:
        raise ValueError(
            f"Reservation {reservation_id} is {reservation.status.value}, not picked up"
        )
    vehicle = fleet.get_vehicle(reservation.vehicle_id)
    context = build_status_context(vehicle, fleet.reservations, today)

    result = get_status_on_return(vehicle.availability_status, context)
    _log_result("return", vehicle, result)

    if result.allowed and not dry_run:
        write_changes(
            filename, vehicle.id, result.new_status,
            reservation_id, status=ReservationStatus.RETURNED,
        )
    return result


# =============================================================================
# Maintenance
# =============================================================================


def start_maintenance(
    filename: PathLike,
    vehicle_id: int,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    today: Optional[DateLike] = None,
    notes: Optional[str] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """
    Open a maintenance block for a vehicle.

    A block starting today or earlier takes the vehicle in right away and is
    validated by the maintenance start rules. A block starting later is only
    scheduled; the vehicle keeps its status until the block begins.
    """
    day = iso_day(today)
    start = iso_day(start_date) if start_date is not None else day
    end = iso_day(end_date) if end_date is not None else None
    if end is not None and end < start:
        raise ValueError(f"Maintenance end {end} is before start {start}")

    fleet = load_fleet(filename)
    vehicle = fleet.get_vehicle(vehicle_id)

    block = Reservation(
        id=None,
        vehicle_id=vehicle_id,
        start_date=start,
        end_date=end,
        status=ReservationStatus.BOOKED,
        type=ReservationType.MAINTENANCE_BLOCK,
        notes=notes,
    )

    if start > day:
        block.maintenance_status = MaintenanceStatus.SCHEDULED
        result = TransitionResult.allow(
            vehicle.availability_status,
            warning=f"Maintenance scheduled from {start}; status is unchanged until then.",
        )
        _log_result("maintenance scheduling", vehicle, result)
        if not dry_run:
            add_reservation(filename, block)
        return result

    result = get_status_on_maintenance_start(vehicle.availability_status)
    _log_result("maintenance start", vehicle, result)

    if result.allowed and not dry_run:
        block.maintenance_status = MaintenanceStatus.IN
        add_reservation(filename, block, vehicle_status=result.new_status)
    return result


def end_maintenance(
    filename: PathLike,
    reservation_id: int,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """
    Close a maintenance block.

    The context excludes the block being closed. An open-ended block, or one
    ending after today, is cut off at today.
    Raises ValueError if the row is not an open maintenance block or has not
    started yet.
    """
    day = iso_day(today)
    fleet = load_fleet(filename)
    block = fleet.get_reservation(reservation_id)
    if not block.is_maintenance_block:
        raise ValueError(f"Reservation {reservation_id} is not a maintenance block")
    if (
        not block.is_live
        or block.maintenance_status is None
        or not block.maintenance_status.in_progress
    ):
        raise ValueError(f"Maintenance block {reservation_id} is already closed")
    if block.start_date > day:
        raise ValueError(
            f"Maintenance block {reservation_id} starts on {block.start_date}; "
            "cancel it instead"
        )
    vehicle = fleet.get_vehicle(block.vehicle_id)
    context = build_status_context(vehicle, fleet.without(reservation_id), day)

    result = get_status_on_maintenance_end(vehicle.availability_status, context)
    _log_result("maintenance end", vehicle, result)

    if result.allowed and not dry_run:
        end = block.end_date if block.end_date is not None and block.end_date <= day else day
        write_changes(
            filename, vehicle.id, result.new_status, reservation_id,
            status=ReservationStatus.COMPLETED,
            maintenance_status=MaintenanceStatus.OUT,
            end_date=end,
        )
    return result


# =============================================================================
# Cancel / delete
# =============================================================================


def cancel_reservation(
    filename: PathLike,
    reservation_id: int,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """
    Cancel a reservation and recompute the vehicle status from what remains.

    Raises ValueError if the reservation is already closed or deleted.
    """
    fleet = load_fleet(filename)
    reservation = fleet.get_reservation(reservation_id)
    if not reservation.is_live:
        raise ValueError(f"Reservation {reservation_id} is already closed")
    vehicle = fleet.get_vehicle(reservation.vehicle_id)
    context = build_status_context(vehicle, fleet.without(reservation_id), today)

    result = get_status_on_reservation_cancel(vehicle.availability_status, context)
    _log_result("cancel", vehicle, result)

    if result.allowed and not dry_run:
        write_changes(
            filename, vehicle.id, result.new_status,
            reservation_id, status=ReservationStatus.CANCELLED,
        )
    return result


def delete_reservation(
    filename: PathLike,
    reservation_id: int,
    today: Optional[DateLike] = None,
    dry_run: bool = False,
) -> TransitionResult:
    """Soft-delete a reservation; the vehicle status follows the cancel rules."""
    fleet = load_fleet(filename)
    reservation = fleet.get_reservation(reservation_id)
    if reservation.deleted_at is not None:
        raise ValueError(f"Reservation {reservation_id} is already deleted")
    vehicle = fleet.get_vehicle(reservation.vehicle_id)
    context = build_status_context(vehicle, fleet.without(reservation_id), today)

    result = get_status_on_reservation_cancel(vehicle.availability_status, context)
    _log_result("delete", vehicle, result)

    if result.allowed and not dry_run:
        write_changes(
            filename, vehicle.id, result.new_status,
            reservation_id, deleted_at=_deleted_stamp(),
        )
    return result


# =============================================================================
# Reconciliation
# =============================================================================


def find_drift(filename: PathLike, today: Optional[DateLike] = None) -> List[StatusDrift]:
    """List vehicles whose stored status disagrees with their reservations."""
    fleet = load_fleet(filename)
    drift = []
    for vehicle in fleet.vehicles:
        context = build_status_context(vehicle, fleet.reservations, today)
        if has_drift(context):
            drift.append(
                StatusDrift(vehicle, vehicle.availability_status, calculate_correct_status(context))
            )
    return drift


def reconcile(
    filename: PathLike, today: Optional[DateLike] = None, apply: bool = False
) -> List[StatusDrift]:
    """Find status drift and, with ``apply``, write the calculated statuses."""
    drift = find_drift(filename, today)
    for item in drift:
        logger.warning(
            "vehicle %s stored as %s but reservations imply %s",
            item.vehicle.id, item.stored.value, item.calculated.value,
        )
        if apply:
            save_vehicle_status(filename, item.vehicle.id, item.calculated)
    return drift
