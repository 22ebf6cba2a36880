"""Derive the status a vehicle should have from its reservation context."""

from .context import VehicleStatusContext
from .status import VehicleStatus


def calculate_correct_status(context: VehicleStatusContext) -> VehicleStatus:
    """
    Calculate the status implied by the reservation data.

    Precedence (first match wins):
    1. stored needs_fixing / not_for_rental are sticky
    2. a picked-up reservation -> rented
    3. an active maintenance block -> needs_fixing
    4. a booked reservation -> scheduled
    5. otherwise available
    """
    current = context.vehicle.availability_status
    if current.is_sticky:
        return current
    if context.has_picked_up_reservation:
        return VehicleStatus.RENTED
    if context.has_maintenance_block:
        return VehicleStatus.NEEDS_FIXING
    if context.has_booked_reservation:
        return VehicleStatus.SCHEDULED
    return VehicleStatus.AVAILABLE


def has_drift(context: VehicleStatusContext) -> bool:
    """True when the stored status differs from the calculated one."""
    return calculate_correct_status(context) is not context.vehicle.availability_status
